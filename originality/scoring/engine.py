from originality.logging.logger import Log
from originality.scoring.base import BaseOriginalityProvider
from originality.scoring.exceptions import ProviderError
from originality.scoring.local_heuristic import LocalHeuristicProvider
from originality.scoring.models import ScoreResult


class ScoringEngine:
    """Scores text with the configured provider, degrading to the local heuristic.

    score() never raises: a broken integration must not block a submission.
    """

    def __init__(
        self,
        provider: BaseOriginalityProvider,
        fallback: LocalHeuristicProvider | None = None,
    ) -> None:
        self._provider = provider
        self._fallback = fallback if fallback is not None else LocalHeuristicProvider()

    @property
    def provider(self) -> BaseOriginalityProvider:
        return self._provider

    def score(self, text: str) -> ScoreResult:
        if self._provider is self._fallback:
            return self._fallback.score(text)
        try:
            result = self._provider.score(text)
        except ProviderError as exc:
            Log.warning(
                f"{self._provider.name} failed, using local heuristic: {exc}",
                error_type=type(exc).__name__,
            )
        except Exception as exc:
            Log.error(
                f"Unexpected {self._provider.name} failure, using local heuristic: {exc}",
                error_type=type(exc).__name__,
            )
        else:
            Log.info(
                f"Scored with {result.provider_name}: {result.score:.2f}%",
                status=result.status.value,
            )
            return result
        return self._fallback.score(text)

    def close(self) -> None:
        self._provider.close()
