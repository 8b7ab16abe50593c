"""Supported upload formats and their download MIME types."""

import re

MIME_TYPES: dict[str, str] = {
    ".txt": "text/plain",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".pdf": "application/pdf",
    ".ppt": "application/vnd.ms-powerpoint",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
}

SUPPORTED_EXTENSIONS: tuple[str, ...] = tuple(MIME_TYPES)

DEFAULT_MIME_TYPE = "application/octet-stream"


class UnsupportedFormatError(ValueError):
    """Raised when a file extension is not in SUPPORTED_EXTENSIONS."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(
            f"Unsupported file format for '{filename}'. "
            f"Supported formats are: {', '.join(SUPPORTED_EXTENSIONS)}"
        )


def base_name(filename: str) -> str:
    """Last component of a client-supplied filename (either separator style)."""
    return re.split(r"[\\/]", filename)[-1]


def split_extension(filename: str) -> tuple[str, str]:
    """Split a filename into (stem, extension), extension keeping its case.

    Leading-dot names such as ".txt" have no extension, matching os.path.
    """
    name = base_name(filename)
    dot = name.rfind(".")
    if dot <= 0:
        return name, ""
    return name[:dot], name[dot:]


def extension_of(filename: str) -> str:
    """Lowercased extension used as the dispatch key."""
    return split_extension(filename)[1].lower()


def require_supported(filename: str) -> str:
    """Return the lowercased extension or raise UnsupportedFormatError."""
    ext = extension_of(filename)
    if ext not in MIME_TYPES:
        raise UnsupportedFormatError(filename)
    return ext


def get_mime_type(filename: str) -> str:
    return MIME_TYPES.get(extension_of(filename), DEFAULT_MIME_TYPE)
