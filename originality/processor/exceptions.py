class PipelineError(Exception):
    """Base exception for submission pipeline errors."""


class SubmissionCancelledError(PipelineError):
    """Raised when the caller cancels before the original file is stored."""
