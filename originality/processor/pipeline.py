from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from originality.processor.models import UploadRequest
from originality.scoring.models import ScoreResult
from originality.storage.models import StoredArtifact


@dataclass(slots=True)
class PipelineContext:
    request: UploadRequest
    timestamp: datetime
    stored_original: StoredArtifact | None = None
    extracted_text: str = ""
    extraction_error: str | None = None
    word_count: int = 0
    score_result: ScoreResult | None = None
    report_text: str = ""
    stored_report: StoredArtifact | None = None
    errors: list[str] = field(default_factory=list)


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

    def close(self) -> None:
        """Release resources owned by the step. Most steps hold none."""
