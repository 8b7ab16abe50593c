import math
from dataclasses import dataclass, field
from enum import Enum

MIN_SCORE = 0.0
MAX_SCORE = 100.0


def clamp_score(value: float) -> float:
    """Clamp a similarity percentage into [0, 100], rounded to two decimals.

    NaN maps to MIN_SCORE.
    """
    value = float(value)
    if math.isnan(value):
        return MIN_SCORE
    return round(min(max(value, MIN_SCORE), MAX_SCORE), 2)


class ScanStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"


@dataclass(frozen=True)
class MatchedSource:
    """A source document the provider found overlapping text in."""

    url: str
    similarity_percent: float
    title: str | None = None


@dataclass(frozen=True)
class ScoreResult:
    """Output of one originality check.

    A pending result (asynchronous provider, completion delivered out of
    band) carries a scan_id and a score of 0 that must not be read as a
    verdict.
    """

    score: float
    provider_name: str
    sources: list[MatchedSource] = field(default_factory=list)
    is_fallback: bool = False
    status: ScanStatus = ScanStatus.COMPLETED
    scan_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "score", clamp_score(self.score))

    @property
    def is_pending(self) -> bool:
        return self.status is ScanStatus.PENDING

    @classmethod
    def pending(cls, provider_name: str, scan_id: str) -> "ScoreResult":
        return cls(
            score=MIN_SCORE,
            provider_name=provider_name,
            status=ScanStatus.PENDING,
            scan_id=scan_id,
        )
