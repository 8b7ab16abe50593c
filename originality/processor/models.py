from dataclasses import dataclass

from originality.scoring.models import ScoreResult


@dataclass(frozen=True)
class UploadedFile:
    """A file as received from the web layer."""

    filename: str
    content: bytes


@dataclass(frozen=True)
class UploadRequest:
    """Everything one submission needs; lives for a single submit() call."""

    course_name: str
    assignment_title: str
    original_filename: str
    content: bytes


@dataclass(frozen=True)
class PipelineOutcome:
    """What the caller persists as the submission record."""

    extracted_text: str
    extracted_word_count: int
    score_result: ScoreResult
    stored_artifact_path: str
    stored_report_path: str | None
    extraction_error: str | None = None
    processing_errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class StoredDownload:
    """A stored artifact ready to be sent back to a client."""

    content: bytes
    mime_type: str
    filename: str
