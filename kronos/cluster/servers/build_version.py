"""
Build version carried in the `version` member tag.

Parsing and ordering follow HashiCorp go-version, which is the format
scheduler nodes advertise, so every node derives the same ordering from
the same tag regardless of implementation.

Accepted forms:
- Optional leading "v"
- One or more dot separated numeric segments (padded to three)
- Optional prerelease: "-" plus an identifier starting with a digit, or
  an optional "-" plus an identifier starting with a letter
- Optional "+metadata", ignored for ordering and equality
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from itertools import zip_longest

from kronos.utils.int64_array import INT64_MAX, INT64_MIN

_IDENTIFIER = r"[0-9A-Za-z\-~]"

_VERSION_PATTERN = re.compile(
    r"v?(?P<segments>[0-9]+(?:\.[0-9]+)*?)"
    rf"(?:-(?P<numeric_pre>[0-9]+{_IDENTIFIER}*(?:\.{_IDENTIFIER}+)*)"
    rf"|-?(?P<alpha_pre>[A-Za-z\-~]+{_IDENTIFIER}*(?:\.{_IDENTIFIER}+)*))?"
    rf"(?:\+(?P<metadata>{_IDENTIFIER}+(?:\.{_IDENTIFIER}+)*))?"
)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

_MIN_SEGMENTS = 3


def _parse_int64(part: str) -> int | None:
    if _INT_PATTERN.fullmatch(part) is None:
        return None

    value = int(part)
    if not INT64_MIN <= value <= INT64_MAX:
        return None

    return value


def _compare_prerelease_part(part: str, other_part: str) -> int:
    if part == other_part:
        return 0

    value = _parse_int64(part)
    other_value = _parse_int64(other_part)

    if part == "":
        return -1 if other_value is not None else 1

    if other_part == "":
        return 1 if value is not None else -1

    if value is not None and other_value is None:
        return -1

    if value is None and other_value is not None:
        return 1

    if value is None and other_value is None:
        return 1 if part > other_part else -1

    return 1 if value > other_value else -1


def _compare_prereleases(prerelease: str, other_prerelease: str) -> int:
    if prerelease == other_prerelease:
        return 0

    if prerelease == "":
        return 1

    if other_prerelease == "":
        return -1

    for part, other_part in zip_longest(
        prerelease.split("."),
        other_prerelease.split("."),
        fillvalue="",
    ):
        if result := _compare_prerelease_part(part, other_part):
            return result

    return 0


@functools.total_ordering
@dataclass(slots=True, frozen=True, eq=False, repr=False)
class BuildVersion:
    segments: tuple[int, ...] = ()
    prerelease: str = ""
    metadata: str = ""
    original: str = ""

    @classmethod
    def parse(cls, text: str) -> BuildVersion:
        """
        Parse a version string.

        Raises:
            ValueError: If the text is not a valid version
        """
        match = _VERSION_PATTERN.fullmatch(text)
        if match is None:
            raise ValueError(f"Malformed version: {text!r}")

        segments: list[int] = []
        for segment in match.group("segments").split("."):
            value = int(segment)
            if value > INT64_MAX:
                raise ValueError(
                    f"Error parsing version {text!r}: segment {segment} out of range"
                )

            segments.append(value)

        segments.extend([0] * (_MIN_SEGMENTS - len(segments)))

        return cls(
            segments=tuple(segments),
            prerelease=match.group("alpha_pre") or match.group("numeric_pre") or "",
            metadata=match.group("metadata") or "",
            original=text,
        )

    @property
    def is_unknown(self) -> bool:
        return len(self.segments) == 0

    @property
    def core(self) -> tuple[int, ...]:
        """Segments without trailing zeros, the part that ordering sees."""
        segments = list(self.segments)
        while segments and segments[-1] == 0:
            segments.pop()

        return tuple(segments)

    def compare(self, other: BuildVersion) -> int:
        for segment, other_segment in zip_longest(
            self.segments,
            other.segments,
            fillvalue=0,
        ):
            if segment != other_segment:
                return 1 if segment > other_segment else -1

        return _compare_prereleases(self.prerelease, other.prerelease)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BuildVersion):
            return NotImplemented

        return self.compare(other) == 0

    def __lt__(self, other: BuildVersion) -> bool:
        if not isinstance(other, BuildVersion):
            return NotImplemented

        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.core, self.prerelease))

    def __str__(self) -> str:
        if self.is_unknown:
            return ""

        version = ".".join(str(segment) for segment in self.segments)

        if self.prerelease:
            version = f"{version}-{self.prerelease}"

        if self.metadata:
            version = f"{version}+{self.metadata}"

        return version

    def __repr__(self) -> str:
        return f"BuildVersion({str(self)!r})"


UNKNOWN_BUILD_VERSION = BuildVersion()
