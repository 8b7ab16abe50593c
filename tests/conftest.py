import io
import random
import struct
from datetime import datetime
from pathlib import Path

import openpyxl
import pytest
import xlwt
from docx import Document
from pptx import Presentation
from pptx.util import Inches
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from originality.config.settings import Settings


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Word document with two paragraphs around a 2x2 table."""
    document = Document()
    document.add_paragraph("First paragraph of the essay.")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Name"
    table.cell(0, 1).text = "Value"
    table.cell(1, 0).text = "Alpha"
    table.cell(1, 1).text = "42"
    document.add_paragraph("Closing paragraph.")
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def sample_xlsx_bytes() -> bytes:
    """Workbook with two sheets of small tables."""
    workbook = openpyxl.Workbook()
    first = workbook.active
    first.title = "Grades"
    first.append(["Student", "Score"])
    first.append(["Ana", 91])
    second = workbook.create_sheet("Notes")
    second.append(["Late submission"])
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


@pytest.fixture()
def sample_pptx_bytes() -> bytes:
    """Presentation with two slides holding one text box each."""
    presentation = Presentation()
    blank = presentation.slide_layouts[6]
    for text in ("Slide one title", "Slide two body"):
        slide = presentation.slides.add_slide(blank)
        box = slide.shapes.add_textbox(Inches(1), Inches(1), Inches(4), Inches(1))
        box.text_frame.text = text
    buf = io.BytesIO()
    presentation.save(buf)
    return buf.getvalue()


@pytest.fixture()
def fixed_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def fixed_timestamp() -> datetime:
    return datetime(2025, 3, 14, 9, 26, 53)


@pytest.fixture()
def mock_settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        storage_base_path=tmp_path / "uploads",
        plagiarism_api_provider="mock",
    )


@pytest.fixture()
def sample_xls_bytes() -> bytes:
    """Legacy BIFF workbook with the same two sheets as sample_xlsx_bytes."""
    workbook = xlwt.Workbook()
    grades = workbook.add_sheet("Grades")
    grades.write(0, 0, "Student")
    grades.write(0, 1, "Score")
    grades.write(1, 0, "Ana")
    grades.write(1, 1, 91)
    notes = workbook.add_sheet("Notes")
    notes.write(0, 0, "Late submission")
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


_SECTOR = 512
_MINI_STREAM_CUTOFF = 4096
_FREESECT = 0xFFFFFFFF
_ENDOFCHAIN = 0xFFFFFFFE
_FATSECT = 0xFFFFFFFD
_NOSTREAM = 0xFFFFFFFF


def _directory_entry(
    name: str,
    entry_type: int,
    *,
    child: int = _NOSTREAM,
    right: int = _NOSTREAM,
    start: int = _ENDOFCHAIN,
    size: int = 0,
) -> bytes:
    encoded = (name + "\x00").encode("utf-16-le")
    return (
        encoded.ljust(64, b"\x00")
        + struct.pack("<HBB", len(encoded), entry_type, 1)
        + struct.pack("<III", _NOSTREAM, right, child)
        + bytes(16)
        + struct.pack("<I", 0)
        + bytes(16)
        + struct.pack("<IQ", start, size)
    )


def _compound_file(streams: dict[str, bytes]) -> bytes:
    """Version 3 OLE2 compound file holding the given root-level streams.

    Streams are padded to the mini-stream cutoff so every stream lives in
    regular sectors. Layout: FAT sector, directory sectors, stream data.
    """
    names = list(streams)
    payloads = [streams[name].ljust(_MINI_STREAM_CUTOFF, b"\x00") for name in names]
    dir_sectors = -(-(len(names) + 1) // 4)

    fat = [_FATSECT]
    fat += [2 + i for i in range(dir_sectors - 1)] + [_ENDOFCHAIN]
    next_sector = 1 + dir_sectors
    starts: list[int] = []
    data = b""
    for payload in payloads:
        count = -(-len(payload) // _SECTOR)
        starts.append(next_sector)
        fat += [next_sector + i + 1 for i in range(count - 1)] + [_ENDOFCHAIN]
        next_sector += count
        data += payload.ljust(count * _SECTOR, b"\x00")
    if len(fat) > _SECTOR // 4:
        raise ValueError("streams do not fit a single FAT sector")
    fat_sector = b"".join(struct.pack("<I", value) for value in fat).ljust(_SECTOR, b"\xff")

    entries = [_directory_entry("Root Entry", 5, child=1 if names else _NOSTREAM)]
    for index, (name, payload) in enumerate(zip(names, payloads), start=1):
        entries.append(
            _directory_entry(
                name,
                2,
                right=index + 1 if index < len(names) else _NOSTREAM,
                start=starts[index - 1],
                size=len(payload),
            )
        )
    directory = b"".join(entries).ljust(dir_sectors * _SECTOR, b"\x00")

    header = (
        b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
        + bytes(16)
        + struct.pack("<HHHHH", 0x003E, 0x0003, 0xFFFE, 9, 6)
        + bytes(6)
        + struct.pack(
            "<9I", 0, 1, 1, 0, _MINI_STREAM_CUTOFF, _ENDOFCHAIN, 0, _ENDOFCHAIN, 0
        )
        + struct.pack("<I", 0)
    ).ljust(_SECTOR, b"\xff")
    return header + fat_sector + directory + data


def _ppt_record(rec_type: int, body: bytes, *, instance: int = 0, container: bool = False) -> bytes:
    ver_instance = (instance << 4) | (0xF if container else 0x0)
    return struct.pack("<HHI", ver_instance, rec_type, len(body)) + body


@pytest.fixture()
def sample_doc_bytes() -> bytes:
    """Word 97 binary document with one compressed text piece."""
    text = "Legacy essay on rivers\rSecond paragraph\r"
    text_offset = 0x400
    word = bytearray(text_offset)
    struct.pack_into("<H", word, 0x0000, 0xA5EC)
    struct.pack_into("<H", word, 0x000A, 0x0200)
    struct.pack_into("<i", word, 0x004C, len(text))
    plc = struct.pack("<2I", 0, len(text)) + struct.pack(
        "<HIH", 0, (text_offset * 2) | 0x40000000, 0
    )
    clx = b"\x02" + struct.pack("<I", len(plc)) + plc
    struct.pack_into("<II", word, 0x01A2, 0, len(clx))
    return _compound_file({"WordDocument": bytes(word) + text.encode("cp1252"), "1Table": clx})


@pytest.fixture()
def sample_ppt_bytes() -> bytes:
    """PowerPoint 97 binary presentation with slide, master and notes text."""
    slides = _ppt_record(
        0x0FF0,
        _ppt_record(0x0F9F, struct.pack("<I", 0))
        + _ppt_record(0x0FA0, "Legacy slide title".encode("utf-16-le")),
        container=True,
    )
    masters = _ppt_record(
        0x0FF0,
        _ppt_record(0x0FA8, b"Click to edit Master title style"),
        instance=1,
        container=True,
    )
    notes = _ppt_record(
        0x0FF0, _ppt_record(0x0FA8, b"Speaker notes"), instance=2, container=True
    )
    document = _ppt_record(0x03E8, slides + masters + notes, container=True)
    main_master = _ppt_record(0x03F8, _ppt_record(0x0FA8, b"Master footer"), container=True)
    text_box = _ppt_record(0xF00D, _ppt_record(0x0FA8, b"Text box body"), container=True)
    drawing = _ppt_record(0x040C, _ppt_record(0xF002, text_box, container=True), container=True)
    slide = _ppt_record(0x03EE, drawing, container=True)
    return _compound_file({"PowerPoint Document": document + main_master + slide})
