"""Recovery quality score (1-10).

Scoring formula:
- 40% recovery % (vendor readiness percentage)
- 40% sleep quality (sleep hours + sleep score)
- 20% HRV trend (vs 7-day baseline)

Recovery % already reflects HRV and sleep internally, so it is not weighted
higher than sleep to avoid double-counting.
"""

from typing import Optional

from ..config import config
from .data_validation import clamp, is_present, round_score, sanitize_biometrics
from .models import DailyBiometrics, RecoveryAssessment, ScoreResult, Zone
from .narrator import AnalysisNarrator


def recovery_zone(recovery_percent: Optional[float], cutoffs: dict = None) -> Zone:
    """Classify recovery % into a readiness zone; unknown is yellow."""
    cutoffs = cutoffs or config.RECOVERY_ZONE_CUTOFFS
    if recovery_percent is None:
        return Zone.YELLOW
    if recovery_percent >= cutoffs["green"]:
        return Zone.GREEN
    if recovery_percent >= cutoffs["yellow"]:
        return Zone.YELLOW
    return Zone.RED


class RecoveryScorer:
    """Convert a day's biometrics into a recovery score and readiness zone."""

    def __init__(self, narrator: AnalysisNarrator = None):
        self.narrator = narrator or AnalysisNarrator()
        self.weights = config.RECOVERY_WEIGHTS

    def score(self, biometrics: DailyBiometrics) -> ScoreResult:
        """Calculate the recovery score for a day.

        Defined for every input: missing readings fall back to neutral
        sub-scores and out-of-range readings are clamped.
        """
        biometrics = sanitize_biometrics(biometrics)

        recovery_scaled = self.recovery_scaled(biometrics.recovery_percent)
        sleep_quality = self.sleep_quality(biometrics.sleep_hours, biometrics.sleep_score_percent)
        hrv_scaled = self.hrv_scaled(biometrics.hrv, biometrics.hrv_baseline)

        total = (
            recovery_scaled * self.weights["recovery"]
            + sleep_quality * self.weights["sleep"]
            + hrv_scaled * self.weights["hrv"]
        )
        score = clamp(round_score(total), 1.0, 10.0)
        zone = recovery_zone(biometrics.recovery_percent)
        breakdown = {
            "recovery_scaled": recovery_scaled,
            "sleep_quality": sleep_quality,
            "hrv_scaled": hrv_scaled,
        }

        assessment = RecoveryAssessment(
            score=score,
            zone=zone,
            breakdown=breakdown,
            sleep_hours=biometrics.sleep_hours,
            hrv_delta=self.hrv_delta(biometrics.hrv, biometrics.hrv_baseline),
        )

        return ScoreResult(
            score=score,
            breakdown=breakdown,
            analysis=self.narrator.render(assessment),
            zone=zone,
        )

    def recovery_scaled(self, recovery_percent: Optional[float]) -> float:
        """Linear 0-100 % -> 0-10 mapping, neutral 5 when missing."""
        if recovery_percent is None:
            return config.NEUTRAL_COMPONENT_SCORE
        return clamp(round_score(recovery_percent / 100 * 10), 0.0, 10.0)

    def sleep_quality(self, sleep_hours: Optional[float], sleep_score_percent: Optional[float]) -> float:
        """Sleep hours points (1-6) plus sleep score points (0-4)."""
        if sleep_hours is None:
            hours_points = config.SLEEP_HOURS_MISSING_POINTS
        else:
            hours_points = config.SLEEP_HOURS_FLOOR_POINTS
            for threshold, points in config.SLEEP_HOURS_POINTS:
                if sleep_hours >= threshold:
                    hours_points = points
                    break

        if sleep_score_percent is None:
            score_points = config.SLEEP_SCORE_MISSING_POINTS
        else:
            score_points = round_score(sleep_score_percent / 100 * config.SLEEP_SCORE_MAX_POINTS, 0)

        return clamp(float(hours_points + score_points), 0.0, 10.0)

    @staticmethod
    def hrv_delta(hrv: Optional[float], hrv_baseline: Optional[float]) -> Optional[float]:
        if not is_present(hrv) or not is_present(hrv_baseline):
            return None
        return hrv - hrv_baseline

    def hrv_scaled(self, hrv: Optional[float], hrv_baseline: Optional[float]) -> float:
        """HRV trend score on 3-7, centered on 5 (neutral)."""
        delta = self.hrv_delta(hrv, hrv_baseline)
        if delta is None:
            return config.HRV_NEUTRAL

        tier = config.HRV_DELTA_FLOOR_TIER
        for threshold, points in config.HRV_DELTA_TIERS:
            if delta >= threshold:
                tier = points
                break

        low, high = config.HRV_SCALED_RANGE
        return clamp(config.HRV_NEUTRAL + tier, low, high)
