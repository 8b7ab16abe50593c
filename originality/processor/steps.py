from originality.extraction.exceptions import CorruptDocumentError
from originality.extraction.extractor import FormatExtractor
from originality.formats import require_supported
from originality.logging.logger import Log
from originality.processor.pipeline import PipelineContext, PipelineStep
from originality.report.renderer import ReportRenderer
from originality.scoring.engine import ScoringEngine
from originality.scoring.local_heuristic import count_words
from originality.storage.artifact_store import ArtifactStore


class ValidateUploadStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        ext = require_supported(context.request.original_filename)
        Log.debug(f"Upload accepted as {ext}", size=len(context.request.content))
        return context


class StoreOriginalStep(PipelineStep):
    def __init__(self, store: ArtifactStore) -> None:
        self._store = store

    def run(self, context: PipelineContext) -> PipelineContext:
        request = context.request
        context.stored_original = self._store.store_original(
            request.course_name,
            request.assignment_title,
            request.original_filename,
            request.content,
        )
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, extractor: FormatExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        request = context.request
        try:
            context.extracted_text = self._extractor.extract(
                request.original_filename, request.content
            )
        except CorruptDocumentError as exc:
            Log.warning(f"Extraction failed, continuing with empty text: {exc}")
            context.extracted_text = ""
            context.extraction_error = str(exc)
        context.word_count = count_words(context.extracted_text)
        Log.info(
            f"Extracted {len(context.extracted_text)} chars, {context.word_count} words"
        )
        return context


class ScoreStep(PipelineStep):
    def __init__(self, engine: ScoringEngine) -> None:
        self._engine = engine

    def run(self, context: PipelineContext) -> PipelineContext:
        context.score_result = self._engine.score(context.extracted_text)
        return context

    def close(self) -> None:
        self._engine.close()


class RenderReportStep(PipelineStep):
    def __init__(self, renderer: ReportRenderer) -> None:
        self._renderer = renderer

    def run(self, context: PipelineContext) -> PipelineContext:
        result = context.score_result
        if result is None:
            raise ValueError("PipelineContext.score_result must be set before rendering")
        if result.is_pending:
            context.report_text = self._renderer.render_pending(
                result.provider_name, result.scan_id or "", context.timestamp
            )
            return context
        notes = []
        if context.extraction_error:
            notes.append(
                "Text could not be extracted from the submitted file "
                f"({context.extraction_error}). The score reflects an empty document."
            )
        context.report_text = self._renderer.render(
            provider=result.provider_name,
            score=result.score,
            word_count=context.word_count,
            sources=result.sources,
            is_fallback=result.is_fallback,
            timestamp=context.timestamp,
            notes=notes,
        )
        return context


class StoreReportStep(PipelineStep):
    def __init__(self, store: ArtifactStore) -> None:
        self._store = store

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.report_text:
            raise ValueError("PipelineContext.report_text must be set before persist")
        request = context.request
        context.stored_report = self._store.store_report(
            request.course_name,
            request.assignment_title,
            request.original_filename,
            context.report_text,
        )
        return context
