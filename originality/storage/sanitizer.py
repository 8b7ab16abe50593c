import re

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_DOTS_ONLY = re.compile(r"\.+")


def sanitize_component(value: str) -> str:
    """Make an untrusted string safe to use as one directory or file name.

    Every character outside [A-Za-z0-9._-] becomes "_", one for one, so the
    result has the same length as the input. Names made only of dots are
    turned into underscores so "." and ".." can never reach the filesystem.
    """
    cleaned = _UNSAFE_CHARS.sub("_", value)
    if _DOTS_ONLY.fullmatch(cleaned):
        return "_" * len(cleaned)
    return cleaned
