import random
import threading
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path

import httpx

from originality.config.settings import Settings
from originality.extraction.factory import ExtractorFactory
from originality.formats import base_name, get_mime_type
from originality.logging.logger import Log
from originality.processor.exceptions import SubmissionCancelledError
from originality.processor.models import (
    PipelineOutcome,
    StoredDownload,
    UploadedFile,
    UploadRequest,
)
from originality.processor.pipeline import PipelineContext, PipelineStep
from originality.processor.steps import (
    ExtractTextStep,
    RenderReportStep,
    ScoreStep,
    StoreOriginalStep,
    StoreReportStep,
    ValidateUploadStep,
)
from originality.report.renderer import ReportRenderer
from originality.scoring.factory import ScoringEngineFactory
from originality.scoring.models import ScoreResult
from originality.storage.artifact_store import ArtifactStore

UNSCORED_PROVIDER = "Unavailable"
REPORT_DOWNLOAD_NAME = "report.txt"


class SubmissionProcessor:
    """Runs one submission through the pipeline.

    Pipeline: validate -> store original -> extract -> score -> render -> store report.
    Intake steps (up to storing the original) raise to the caller and honour
    cancellation. Once the original is stored every later failure is logged
    and absorbed, so a PipelineOutcome is always returned.
    """

    def __init__(
        self,
        *,
        store: ArtifactStore,
        intake_steps: Sequence[PipelineStep],
        processing_steps: Sequence[PipelineStep],
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._intake_steps = list(intake_steps)
        self._processing_steps = list(processing_steps)
        self._clock = clock

    def submit(
        self,
        course_name: str,
        assignment_title: str,
        upload: UploadedFile,
        cancel_event: threading.Event | None = None,
    ) -> PipelineOutcome:
        """Process an uploaded file for a course assignment.

        Raises:
            UnsupportedFormatError: if the file extension is not supported.
            StorageIOError: if the original cannot be stored.
            SubmissionCancelledError: if cancel_event is set before storage.
        """
        request = UploadRequest(
            course_name=course_name,
            assignment_title=assignment_title,
            original_filename=upload.filename,
            content=upload.content,
        )
        return self.process(request, cancel_event)

    def process(
        self,
        request: UploadRequest,
        cancel_event: threading.Event | None = None,
    ) -> PipelineOutcome:
        Log.info(
            f"Processing submission for {request.course_name} / {request.assignment_title}",
            upload=base_name(request.original_filename),
        )
        context = PipelineContext(request=request, timestamp=self._clock())

        for step in self._intake_steps:
            if cancel_event is not None and cancel_event.is_set():
                Log.info("Submission cancelled before the original was stored")
                raise SubmissionCancelledError("Submission cancelled by caller")
            context = step.run(context)

        for step in self._processing_steps:
            try:
                context = step.run(context)
            except Exception as exc:
                Log.error(f"{type(step).__name__} failed, continuing: {exc}")
                context.errors.append(f"{type(step).__name__}: {exc}")

        return self._build_outcome(context)

    def fetch_stored_bytes(self, relative_path: str) -> bytes:
        """Read an artifact by the relative path returned from submit().

        Raises:
            ArtifactNotFoundError: if the file no longer exists.
        """
        return self._store.retrieve(self._store.resolve(relative_path))

    def fetch_download(
        self,
        relative_path: str,
        original_filename: str,
        is_report: bool = False,
    ) -> StoredDownload:
        """Artifact bytes plus the MIME type and filename to send them with."""
        content = self.fetch_stored_bytes(relative_path)
        if is_report:
            return StoredDownload(
                content=content, mime_type="text/plain", filename=REPORT_DOWNLOAD_NAME
            )
        return StoredDownload(
            content=content,
            mime_type=get_mime_type(original_filename),
            filename=base_name(original_filename),
        )

    def close(self) -> None:
        """Close every step, releasing provider HTTP clients."""
        for step in (*self._intake_steps, *self._processing_steps):
            step.close()

    def _build_outcome(self, context: PipelineContext) -> PipelineOutcome:
        if context.stored_original is None:
            raise RuntimeError("Intake steps finished without storing the original")
        score_result = context.score_result
        if score_result is None:
            score_result = ScoreResult(
                score=0.0, provider_name=UNSCORED_PROVIDER, is_fallback=True
            )
        outcome = PipelineOutcome(
            extracted_text=context.extracted_text,
            extracted_word_count=context.word_count,
            score_result=score_result,
            stored_artifact_path=context.stored_original.relative_path,
            stored_report_path=(
                context.stored_report.relative_path if context.stored_report else None
            ),
            extraction_error=context.extraction_error,
            processing_errors=tuple(context.errors),
        )
        Log.info(
            f"Submission completed: score {score_result.score:.2f}%",
            artifact=outcome.stored_artifact_path,
            report=outcome.stored_report_path,
        )
        return outcome


def build_processor(
    settings: Settings,
    *,
    base_dir: Path | None = None,
    rng: random.Random | None = None,
    http_client: httpx.Client | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> SubmissionProcessor:
    """Build a SubmissionProcessor with all required adapters."""
    store = ArtifactStore(base_dir if base_dir is not None else settings.storage_base_path)
    extractor = ExtractorFactory.create(settings)
    engine = ScoringEngineFactory.create(settings, rng=rng, client=http_client)
    renderer = ReportRenderer()
    return SubmissionProcessor(
        store=store,
        intake_steps=[
            ValidateUploadStep(),
            StoreOriginalStep(store),
        ],
        processing_steps=[
            ExtractTextStep(extractor),
            ScoreStep(engine),
            RenderReportStep(renderer),
            StoreReportStep(store),
        ],
        clock=clock,
    )
