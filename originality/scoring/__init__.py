from originality.scoring.engine import ScoringEngine
from originality.scoring.factory import ScoringEngineFactory
from originality.scoring.local_heuristic import LocalHeuristicProvider
from originality.scoring.models import MatchedSource, ScanStatus, ScoreResult

__all__ = [
    "LocalHeuristicProvider",
    "MatchedSource",
    "ScanStatus",
    "ScoreResult",
    "ScoringEngine",
    "ScoringEngineFactory",
]
