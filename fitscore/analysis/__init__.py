"""Scoring engine: recovery, training, strain bands and the composite FitScore."""

from .models import (
    CompositeFitScoreResult,
    DailyBiometrics,
    FitScoreForecast,
    Intensity,
    ScoreResult,
    StrainBand,
    TrainingContext,
    TrainingSession,
    UserContext,
    Zone,
)
from .sentiment import SentimentHeuristic
from .goal_alignment import GoalAlignmentHeuristic
from .strain_band import StrainBandCalculator
from .recovery_score import RecoveryScorer
from .training_score import TrainingScorer
from .fit_score import CompositeFitScoreCalculator, fit_score_zone, forecast_fit_score
from .narrator import AnalysisNarrator

__all__ = [
    "AnalysisNarrator",
    "CompositeFitScoreCalculator",
    "CompositeFitScoreResult",
    "DailyBiometrics",
    "FitScoreForecast",
    "GoalAlignmentHeuristic",
    "Intensity",
    "RecoveryScorer",
    "ScoreResult",
    "SentimentHeuristic",
    "StrainBand",
    "StrainBandCalculator",
    "TrainingContext",
    "TrainingScorer",
    "TrainingSession",
    "UserContext",
    "Zone",
    "fit_score_zone",
    "forecast_fit_score",
]
