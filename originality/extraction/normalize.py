import re

_LINE_BREAKS = re.compile(r"\r\n?|[\x0b\x0c\u2028\u2029]")
_BLANK_RUNS = re.compile(r"\n{3,}")


def to_valid_text(text: str) -> str:
    """Drop NUL characters and anything that cannot be encoded as UTF-8."""
    text = text.replace("\x00", "")
    return text.encode("utf-8", errors="replace").decode("utf-8")


def normalize_text(text: str) -> str:
    """Valid UTF-8 text with unified line breaks and trimmed edges."""
    text = _LINE_BREAKS.sub("\n", to_valid_text(text))
    return _BLANK_RUNS.sub("\n\n", text).strip()
