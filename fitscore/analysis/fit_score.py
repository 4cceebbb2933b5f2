"""Composite FitScore: one 0-10 index from the day's sub-scores.

FitScore = 0.25 sleep + 0.25 recovery + 0.20 cardio balance
         + 0.20 strain (training alignment) + 0.10 nutrition
"""

import logging
import numpy as np
from typing import Optional, Sequence

from ..config import config
from .data_validation import clamp, finite_or_none, is_present, round_score, sanitize_biometrics
from .models import CompositeFitScoreResult, DailyBiometrics, FitScoreForecast, Zone

logger = logging.getLogger(__name__)


def fit_score_zone(fit_score: float) -> Zone:
    """Classify a FitScore: 7+ green, 5+ yellow, below that red."""
    cutoffs = config.FITSCORE_ZONE_CUTOFFS
    if fit_score >= cutoffs["green"]:
        return Zone.GREEN
    if fit_score >= cutoffs["yellow"]:
        return Zone.YELLOW
    return Zone.RED


class CompositeFitScoreCalculator:
    """Combine recovery, sleep, cardio, strain and nutrition into one index."""

    def __init__(self, weights: dict = None):
        self.weights = weights or config.FITSCORE_WEIGHTS
        self.neutral = config.NEUTRAL_COMPONENT_SCORE

    def combine(self, sleep_hours: Optional[float] = None, target_sleep_hours: Optional[float] = None,
                recovery_percent: Optional[float] = None, hrv: Optional[float] = None,
                resting_heart_rate: Optional[float] = None, strain: Optional[float] = None,
                nutrition_score: Optional[float] = None) -> CompositeFitScoreResult:
        """Calculate the composite FitScore.

        Args:
            sleep_hours: Hours slept
            target_sleep_hours: Personal sleep target (defaults to config)
            recovery_percent: Vendor recovery 0-100
            hrv: Heart-rate variability in ms
            resting_heart_rate: Resting heart rate in bpm
            strain: Vendor strain (0-21 scale)
            nutrition_score: 0-10 score from meal analysis, if available

        Returns:
            CompositeFitScoreResult with 0-10 components
        """
        # Non-finite readings count as missing
        sleep_hours, target_sleep_hours, recovery_percent, hrv, resting_heart_rate, strain, nutrition_score = (
            finite_or_none(value) for value in (
                sleep_hours, target_sleep_hours, recovery_percent, hrv, resting_heart_rate, strain, nutrition_score
            )
        )

        nutrition_estimated = nutrition_score is None
        if nutrition_estimated:
            nutrition_score = config.NUTRITION_PLACEHOLDER_SCORE

        components = {
            "sleep": self.sleep_component(sleep_hours, target_sleep_hours),
            "recovery": self.recovery_component(recovery_percent),
            "cardio_balance": self.cardio_component(hrv, resting_heart_rate),
            "strain": self.strain_component(strain),
            "nutrition": clamp(float(nutrition_score), 0.0, 10.0),
        }

        weighted = sum(components[name] * weight for name, weight in self.weights.items())
        fit_score = clamp(round_score(weighted), 0.0, 10.0)

        return CompositeFitScoreResult(
            fit_score=fit_score,
            components={name: round_score(value) for name, value in components.items()},
            zone=fit_score_zone(fit_score),
            recommendations=[],
            nutrition_estimated=nutrition_estimated,
        )

    def from_biometrics(self, biometrics: DailyBiometrics, nutrition_score: Optional[float] = None,
                        target_sleep_hours: Optional[float] = None) -> CompositeFitScoreResult:
        """Convenience wrapper taking a day's biometrics (sanitized first)."""
        biometrics = sanitize_biometrics(biometrics)
        return self.combine(
            sleep_hours=biometrics.sleep_hours,
            target_sleep_hours=target_sleep_hours,
            recovery_percent=biometrics.recovery_percent,
            hrv=biometrics.hrv,
            resting_heart_rate=biometrics.resting_heart_rate,
            strain=biometrics.strain_score,
            nutrition_score=nutrition_score,
        )

    def zone_for(self, fit_score: float) -> Zone:
        return fit_score_zone(fit_score)

    def forecast(self, current: float, history: Sequence[float] = ()) -> FitScoreForecast:
        return forecast_fit_score(current, history)

    def sleep_component(self, sleep_hours: Optional[float], target_sleep_hours: Optional[float]) -> float:
        if sleep_hours is None:
            return self.neutral
        target = target_sleep_hours if is_present(target_sleep_hours) else config.TARGET_SLEEP_HOURS
        return clamp(10 * sleep_hours / target, 0.0, 10.0)

    def recovery_component(self, recovery_percent: Optional[float]) -> float:
        if recovery_percent is None:
            return self.neutral
        return clamp(10 * recovery_percent / 100, 0.0, 10.0)

    def cardio_component(self, hrv: Optional[float], resting_heart_rate: Optional[float]) -> float:
        """Average of an HRV sub-score and a resting-HR sub-score."""
        hrv_score = clamp(10 * hrv / 100, 0.0, 10.0) if is_present(hrv) else self.neutral
        if is_present(resting_heart_rate):
            rhr_score = clamp(10 - (resting_heart_rate - config.RHR_FLOOR) / 10, 0.0, 10.0)
        else:
            rhr_score = self.neutral
        return (hrv_score + rhr_score) / 2

    def strain_component(self, strain: Optional[float]) -> float:
        if not is_present(strain):
            return self.neutral
        return clamp(10 * strain / config.REFERENCE_STRAIN, 0.0, 10.0)


def forecast_fit_score(current: float, history: Sequence[float] = ()) -> FitScoreForecast:
    """Project tomorrow's FitScore from the recent trend.

    Args:
        current: Today's FitScore
        history: Previous FitScores, oldest first

    Returns:
        FitScoreForecast; with fewer than 3 data points the trend is 'stable'
        and the forecast is today's score.
    """
    scores = [float(s) for s in history if s is not None] + [float(current)]
    threshold = config.FORECAST_SLOPE_THRESHOLD

    slope = 0.0
    if len(scores) >= 3:
        x = np.arange(len(scores))
        slope = float(np.polyfit(x, scores, 1)[0])

    if slope > threshold:
        trend = "up"
    elif slope < -threshold:
        trend = "down"
    else:
        trend = "stable"

    forecast = clamp(round_score(current + slope), 0.0, 10.0) if trend != "stable" else round_score(current)
    logger.debug(f"FitScore forecast from {len(scores)} points: slope {slope:.3f}, trend {trend}")

    messages = {
        "up": "Recent days are trending upward",
        "down": "Recent days are trending downward; protect sleep and recovery",
        "stable": "Recent days are holding steady",
    }
    message = f"Your current FitScore is {round_score(current)}/10. {messages[trend]}."

    return FitScoreForecast(forecast=forecast, trend=trend, message=message)
