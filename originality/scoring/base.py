from abc import ABC, abstractmethod

from originality.scoring.models import ScoreResult


class BaseOriginalityProvider(ABC):
    """Contract for all originality scoring backends."""

    name: str = ""

    @abstractmethod
    def score(self, text: str) -> ScoreResult:
        """Score extracted text for similarity with known sources.

        Args:
            text: Plain text extracted from a submission.

        Returns:
            ScoreResult with a score in [0, 100] and matched sources.

        Raises:
            ProviderError: on any provider failure.
        """

    def close(self) -> None:
        """Release network resources held by the provider."""
