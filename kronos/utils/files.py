import os


def exists(path: str | os.PathLike) -> tuple[bool, OSError | ValueError | None]:
    """
    Check whether a path exists.

    Returns (True, None) if the path can be stat'd and (False, None) if
    the OS reports it as not found. Any other failure, including a path
    the OS cannot accept such as one with an embedded NUL, returns
    (True, err): the result is inconclusive and callers must branch on
    the error.
    """
    try:
        os.stat(path)

    except FileNotFoundError:
        return False, None

    except (OSError, ValueError) as err:
        return True, err

    return True, None
