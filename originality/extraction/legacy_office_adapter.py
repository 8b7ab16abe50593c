"""Text extraction for legacy binary Office files (.doc and .ppt).

Both formats are OLE2 compound files. Word keeps its text in the
"WordDocument" stream, addressed through the piece table stored in the
"0Table"/"1Table" stream. PowerPoint keeps slide text in text atoms of the
"PowerPoint Document" record stream.
"""

import io
import re
import struct

import olefile

from originality.extraction.base import BaseTextExtractor
from originality.extraction.exceptions import CorruptDocumentError
from originality.extraction.normalize import normalize_text

WORD_STREAM = "WordDocument"
POWERPOINT_STREAM = "PowerPoint Document"

# FIB offsets (Word 97 and later)
_FIB_FLAGS = 0x000A
_FIB_CCP_TEXT = 0x004C
_FIB_FC_CLX = 0x01A2
_FLAG_ENCRYPTED = 0x0100
_FLAG_TABLE_1 = 0x0200
_FC_COMPRESSED = 0x40000000
_FC_MASK = 0x3FFFFFFF

_CLX_PRC = 0x01
_CLX_PCDT = 0x02

_PPT_CONTAINER = 0xF
_PPT_TEXT_CHARS_ATOM = 0x0FA0
_PPT_TEXT_BYTES_ATOM = 0x0FA8
_PPT_SLIDE = 0x03EE
_PPT_SLIDE_LIST_WITH_TEXT = 0x0FF0
_PPT_SLIDE_LIST_SLIDES = 0
# MainMaster, Notes, Handout
_PPT_SKIPPED_CONTAINERS = frozenset({0x03F8, 0x03F0, 0x0FC9})

_FIELD_INSTRUCTIONS = re.compile(r"\x13[^\x14\x15]*[\x14\x15]")
_WORD_CONTROL_CHARS = str.maketrans(
    {
        "\x07": "\t",  # table cell / row end
        "\x15": None,  # field end
        "\x1e": "-",  # non-breaking hyphen
        "\x1f": None,  # optional hyphen
        "\x01": None,  # embedded object anchor
        "\x08": None,  # drawn object anchor
    }
)


class _BinaryFormatError(ValueError):
    """Structural problem inside a binary Office stream."""


Piece = tuple[int, int, int, bool]


def _piece_table(clx: bytes) -> list[Piece]:
    """Parse the CLX structure into (cp_start, cp_end, byte_offset, compressed)."""
    pos = 0
    while pos < len(clx):
        entry = clx[pos]
        if entry == _CLX_PRC:
            (size,) = struct.unpack_from("<H", clx, pos + 1)
            pos += 3 + size
        elif entry == _CLX_PCDT:
            (size,) = struct.unpack_from("<I", clx, pos + 1)
            plc = clx[pos + 5 : pos + 5 + size]
            if len(plc) != size or size < 4 or (size - 4) % 12:
                raise _BinaryFormatError("piece table has an invalid size")
            count = (size - 4) // 12
            cps = struct.unpack_from(f"<{count + 1}I", plc, 0)
            pieces: list[Piece] = []
            for i in range(count):
                _flags, fc_raw, _prm = struct.unpack_from("<HIH", plc, 4 * (count + 1) + 8 * i)
                compressed = bool(fc_raw & _FC_COMPRESSED)
                fc = fc_raw & _FC_MASK
                pieces.append((cps[i], cps[i + 1], fc // 2 if compressed else fc, compressed))
            return pieces
        else:
            raise _BinaryFormatError(f"unexpected CLX entry 0x{entry:02x}")
    raise _BinaryFormatError("piece table not found")


def _read_pieces(word: bytes, pieces: list[Piece], limit: int) -> str:
    chunks: list[str] = []
    for cp_start, cp_end, offset, compressed in pieces:
        if cp_start >= limit:
            break
        count = min(cp_end, limit) - cp_start
        if count <= 0:
            continue
        if compressed:
            chunks.append(word[offset : offset + count].decode("cp1252", errors="replace"))
        else:
            chunks.append(
                word[offset : offset + 2 * count].decode("utf-16-le", errors="replace")
            )
    return "".join(chunks)


def word_text_from_streams(word: bytes, tables: dict[str, bytes]) -> str:
    """Main-document text of a Word binary file.

    Args:
        word: Contents of the WordDocument stream.
        tables: Contents of the "0Table" and/or "1Table" streams by name.
    """
    if len(word) < _FIB_FC_CLX + 8:
        raise _BinaryFormatError("file information block is truncated")
    (flags,) = struct.unpack_from("<H", word, _FIB_FLAGS)
    if flags & _FLAG_ENCRYPTED:
        raise _BinaryFormatError("document is encrypted")
    table_name = "1Table" if flags & _FLAG_TABLE_1 else "0Table"
    table = tables.get(table_name)
    if table is None:
        raise _BinaryFormatError(f"missing {table_name} stream")

    (ccp_text,) = struct.unpack_from("<i", word, _FIB_CCP_TEXT)
    fc_clx, lcb_clx = struct.unpack_from("<II", word, _FIB_FC_CLX)
    pieces = _piece_table(table[fc_clx : fc_clx + lcb_clx])
    limit = ccp_text if ccp_text > 0 else (pieces[-1][1] if pieces else 0)

    text = _read_pieces(word, pieces, limit)
    text = _FIELD_INSTRUCTIONS.sub("", text)
    return text.translate(_WORD_CONTROL_CHARS)


def _collect_ppt_text(
    stream: bytes, start: int, end: int, collecting: bool, texts: list[str]
) -> None:
    pos = start
    while pos + 8 <= end:
        ver_instance, rec_type, rec_len = struct.unpack_from("<HHI", stream, pos)
        body_start = pos + 8
        body_end = min(body_start + rec_len, end)
        if ver_instance & 0x000F == _PPT_CONTAINER:
            if rec_type == _PPT_SLIDE_LIST_WITH_TEXT:
                inner = ver_instance >> 4 == _PPT_SLIDE_LIST_SLIDES
            elif rec_type == _PPT_SLIDE:
                inner = True
            elif rec_type in _PPT_SKIPPED_CONTAINERS:
                inner = False
            else:
                inner = collecting
            _collect_ppt_text(stream, body_start, body_end, inner, texts)
        elif collecting and rec_type == _PPT_TEXT_CHARS_ATOM:
            texts.append(stream[body_start:body_end].decode("utf-16-le", errors="replace"))
        elif collecting and rec_type == _PPT_TEXT_BYTES_ATOM:
            texts.append(stream[body_start:body_end].decode("latin-1"))
        pos = body_end


def powerpoint_text_from_stream(stream: bytes) -> str:
    """Slide text of a PowerPoint Document stream, in stream order.

    Text is taken from the slide list (instance 0 of SlideListWithText) and
    from text boxes drawn on slides. Master and notes text is skipped.
    """
    texts: list[str] = []
    _collect_ppt_text(stream, 0, len(stream), False, texts)
    return "\n".join(texts)


class LegacyOfficeAdapter(BaseTextExtractor):
    """Shared extractor for .doc and .ppt compound files.

    The stream present in the container decides how text is read, so a
    renamed .doc/.ppt pair is still handled.
    """

    def __init__(self, format_name: str) -> None:
        self.format_name = format_name

    def extract(self, data: bytes) -> str:
        if not olefile.isOleFile(io.BytesIO(data)):
            raise CorruptDocumentError(self.format_name, "not an OLE2 compound file")
        try:
            with olefile.OleFileIO(io.BytesIO(data)) as ole:
                text = self._read_text(ole)
        except CorruptDocumentError:
            raise
        except Exception as exc:
            raise CorruptDocumentError(self.format_name, str(exc)) from exc
        return normalize_text(text)

    def _read_text(self, ole: olefile.OleFileIO) -> str:
        if ole.exists(WORD_STREAM):
            tables = {
                name: ole.openstream(name).read()
                for name in ("0Table", "1Table")
                if ole.exists(name)
            }
            return word_text_from_streams(ole.openstream(WORD_STREAM).read(), tables)
        if ole.exists(POWERPOINT_STREAM):
            return powerpoint_text_from_stream(ole.openstream(POWERPOINT_STREAM).read())
        raise CorruptDocumentError(
            self.format_name, "no Word or PowerPoint stream in compound file"
        )
