"""Signal generation: breakout scoring, classification and ranking."""

from .scorer import ScoreBreakdown, score_breakout, score_components
from .classifier import BreakoutStatus, ClassificationResult, classify
from .ranker import rank_results, status_priority
from .analyzer import analyze

__all__ = [
    "ScoreBreakdown",
    "score_breakout",
    "score_components",
    "BreakoutStatus",
    "ClassificationResult",
    "classify",
    "rank_results",
    "status_priority",
    "analyze",
]
