import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from originality.config.settings import Settings
from originality.logging.logger import Log
from originality.processor.models import UploadRequest
from originality.processor.processor import build_processor
from originality.worker.submission_runner import SubmissionResult, SubmissionRunner


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="originality-submit",
        description="Store, extract, score and report on submitted documents.",
    )
    parser.add_argument("--course", required=True, help="Course name")
    parser.add_argument("--assignment", required=True, help="Assignment title")
    parser.add_argument("files", nargs="+", type=Path, help="Documents to submit")
    return parser.parse_args(argv)


def _describe(result: SubmissionResult) -> str:
    name = result.request.original_filename
    if result.outcome is None:
        return f"{name}: rejected ({result.error})"
    outcome = result.outcome
    score = outcome.score_result
    state = "pending" if score.is_pending else f"{score.score:.2f}%"
    return (
        f"{name}: {state} via {score.provider_name}, "
        f"{outcome.extracted_word_count} words, "
        f"stored at {outcome.stored_artifact_path}, report {outcome.stored_report_path}"
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: load settings -> build pipeline -> submit files concurrently."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    requests = [
        UploadRequest(
            course_name=args.course,
            assignment_title=args.assignment,
            original_filename=path.name,
            content=path.read_bytes(),
        )
        for path in args.files
    ]
    processor = build_processor(settings)
    try:
        results = SubmissionRunner(processor, settings).run_batch(requests)
    finally:
        processor.close()

    for result in results:
        print(_describe(result))
    return 0 if all(result.succeeded for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
