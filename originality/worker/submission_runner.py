from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from originality.config.settings import Settings
from originality.logging.logger import Log
from originality.processor.models import PipelineOutcome, UploadRequest
from originality.processor.processor import SubmissionProcessor


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one request in a batch: either an outcome or the error raised."""

    request: UploadRequest
    outcome: PipelineOutcome | None = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is not None


class SubmissionRunner:
    """Run independent submissions concurrently, one thread per submission."""

    def __init__(self, processor: SubmissionProcessor, settings: Settings) -> None:
        self._processor = processor
        self._max_workers = max(1, settings.max_concurrent_submissions)

    def run(self, request: UploadRequest) -> SubmissionResult:
        """Execute a single submission, capturing any intake error."""
        try:
            outcome = self._processor.process(request)
        except Exception as exc:
            Log.error(
                f"Submission rejected: {exc}",
                course=request.course_name,
                assignment=request.assignment_title,
            )
            return SubmissionResult(request=request, error=exc)
        return SubmissionResult(request=request, outcome=outcome)

    def run_batch(self, requests: list[UploadRequest]) -> list[SubmissionResult]:
        """Process all requests; results keep the input order."""
        if not requests:
            return []
        Log.info(f"Running {len(requests)} submissions with {self._max_workers} workers")
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            return list(pool.map(self.run, requests))
