"""Local stand-in scorer used by default and whenever a provider fails."""

import random

from originality.scoring.base import BaseOriginalityProvider
from originality.scoring.models import MatchedSource, ScoreResult, clamp_score

SEED_CEILING = 30.0
NOISE_CEILING = 20.0
WORDS_FOR_FULL_SEED = 100
SOURCE_THRESHOLD = 10.0

_CANNED_SOURCES: tuple[tuple[str, str, float], ...] = (
    ("https://example.edu/article", "Academic Article Example", 0.4),
    ("https://wikipedia.org/example", "Wikipedia Article", 0.3),
    ("https://blog.example.com/post", "Blog Post", 0.2),
)


def count_words(text: str) -> int:
    return len(text.split())


class LocalHeuristicProvider(BaseOriginalityProvider):
    """Demo scorer: a word-count seed plus random noise.

    Not reproducible across runs unless a seeded Random is injected.
    """

    name = "Mock Checker"

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def score(self, text: str) -> ScoreResult:
        words = count_words(text)
        seed = min(words / WORDS_FOR_FULL_SEED, 1.0) * SEED_CEILING
        noise = self._rng.uniform(0.0, NOISE_CEILING)
        score = clamp_score(seed + noise)

        sources: list[MatchedSource] = []
        if score > SOURCE_THRESHOLD:
            sources = [
                MatchedSource(url=url, similarity_percent=round(score * share, 2), title=title)
                for url, title, share in _CANNED_SOURCES
            ]
        return ScoreResult(
            score=score,
            provider_name=self.name,
            sources=sources,
            is_fallback=True,
        )
