def _slug_char(char: str) -> str:
    if char in (" ", "-"):
        return "-"

    if char == "_" or char.isalpha() or char.isdecimal():
        return char

    return ""


def generate_slug(text: str) -> str:
    """
    Normalize free text into an identifier slug.

    Spaces and hyphens become hyphens, letters, decimal digits and
    underscores pass through, everything else is dropped. Runs are
    not collapsed, so generate_slug("A__B  C!!") == "a__b--c".
    Characters are lowercased one at a time, without the
    word-final sigma rule of str.lower().
    """
    return "".join(
        _slug_char(lowered)
        for char in text.strip()
        for lowered in char.lower()
    )
