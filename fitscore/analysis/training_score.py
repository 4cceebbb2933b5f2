"""Training quality score (1-10).

Scoring formula (points out of 10):
- 4 strain appropriateness (actual strain vs. the context's expected band)
- 3 session quality (duration, intensity, comment sentiment)
- 2 goal alignment (session vs. the user's fitness goal)
- 1 injury safety modifier
"""

import logging
from typing import Optional

from ..config import config
from .data_validation import clamp, is_present, round_score, sanitize_biometrics
from .goal_alignment import GoalAlignmentHeuristic
from .models import (
    DailyBiometrics,
    Intensity,
    ScoreResult,
    StrainBand,
    TrainingAssessment,
    TrainingContext,
    TrainingSession,
    UserContext,
    Zone,
)
from .narrator import AnalysisNarrator
from .recovery_score import recovery_zone
from .sentiment import SentimentHeuristic
from .strain_band import StrainBandCalculator

logger = logging.getLogger(__name__)

SKIPPED_ANALYSIS = "Training was skipped"


class TrainingScorer:
    """Score a training session against the day's readiness and the user's context."""

    PAIN_KEYWORDS = ("pain", "hurt", "injury", "sore", "ache", "strain", "pulled")

    def __init__(self, band_calculator: StrainBandCalculator = None, sentiment=None,
                 goal_alignment=None, narrator: AnalysisNarrator = None):
        """Initialize with swappable collaborators.

        Args:
            band_calculator: Expected strain band source
            sentiment: Object with score(comment) -> [0, 1]
            goal_alignment: Object with score(type, session_goal, fitness_goal) -> [0, 2]
            narrator: Renders the analysis text
        """
        self.band_calculator = band_calculator or StrainBandCalculator()
        self.sentiment = sentiment or SentimentHeuristic()
        self.goal_alignment = goal_alignment or GoalAlignmentHeuristic()
        self.narrator = narrator or AnalysisNarrator()
        self.max_points = config.TRAINING_MAX_POINTS

    def score(self, session: TrainingSession, biometrics: DailyBiometrics = None,
              context: UserContext = None) -> ScoreResult:
        if session.skipped:
            return ScoreResult(
                score=0.0,
                breakdown={name: 0.0 for name in self.max_points},
                analysis=SKIPPED_ANALYSIS,
                zone=Zone.RED,
            )

        biometrics = sanitize_biometrics(biometrics or DailyBiometrics())
        context = context or UserContext()
        recovery = biometrics.recovery_percent
        strain = biometrics.strain_score if is_present(biometrics.strain_score) else None

        zone = recovery_zone(recovery, config.TRAINING_ZONE_CUTOFFS)
        training_context = self.band_calculator.classify(context, session.comment)
        band = self.band_calculator.band_for(training_context, zone)

        breakdown = {
            "strain_appropriateness": self.strain_appropriateness(strain, band, zone, training_context),
            "session_quality": self.session_quality(session.duration, session.intensity, session.comment),
            "goal_alignment": self.goal_alignment_points(session, context),
            "injury_safety": self.injury_safety(recovery, session.intensity, session.comment),
        }
        score = clamp(round_score(sum(breakdown.values())), 1.0, 10.0)
        logger.debug(f"Training score {score} ({training_context.value}, {zone.value}): {breakdown}")

        assessment = TrainingAssessment(
            score=score,
            zone=zone,
            breakdown=breakdown,
            context=training_context,
            band=band,
            duration=session.duration,
            strain=strain,
            intensity=session.intensity,
            fitness_goal=context.fitness_goal,
        )

        return ScoreResult(
            score=score,
            breakdown=breakdown,
            analysis=self.narrator.render(assessment),
            zone=zone,
        )

    def strain_appropriateness(self, strain: Optional[float], band: StrainBand, zone: Zone,
                               training_context: TrainingContext = TrainingContext.DEFAULT) -> float:
        """Grade actual strain against the expected band (0-4 points)."""
        if strain is None:
            return config.STRAIN_MISSING_POINTS

        if band.contains(strain):
            half_width = (band.max - band.min) / 2
            distance = abs(strain - band.ideal)
            # In-band is always worth at least 3 points, even for skewed bands
            points = max(3.0, 4.0 - distance / half_width)
        elif strain < band.min:
            under_by = band.min - strain
            points = max(1.5, 3.0 - (under_by / band.min) * 1.5)
        else:
            over_by = strain - band.max
            points = max(0.5, 3.0 - (over_by / band.max) * 3.0)

            overreach = (
                (zone == Zone.RED and strain > config.OVERREACH_RED_ZONE_STRAIN)
                or (training_context == TrainingContext.ACUTE_REHAB
                    and strain > config.OVERREACH_ACUTE_REHAB_STRAIN)
            )
            if overreach:
                points = max(0.5, points - 1.0)

        return clamp(points, 0.0, self.max_points["strain_appropriateness"])

    def session_quality(self, duration: float, intensity: Optional[Intensity],
                        comment: Optional[str]) -> float:
        """Duration, intensity and comment sentiment (0-3 points)."""
        points = self.duration_points(duration)

        intensity = Intensity.parse(intensity)
        if intensity is None:
            points += config.INTENSITY_MISSING_POINTS
        else:
            points += config.INTENSITY_POINTS[intensity.value]

        if comment:
            sentiment = clamp(self.sentiment.score(comment), 0.0, 1.0)
            points += sentiment * config.SENTIMENT_POINTS
        else:
            points += config.COMMENT_MISSING_POINTS

        return clamp(points, 0.0, self.max_points["session_quality"])

    @staticmethod
    def duration_points(duration: float) -> float:
        table = config.DURATION_POINTS
        if 30 <= duration <= 90:
            return table["optimal"]
        if 20 <= duration < 30:
            return table["short"]
        if 90 < duration <= 120:
            return table["long"]
        if duration > 120:
            return table["very_long"]
        return table["very_short"]

    def goal_alignment_points(self, session: TrainingSession, context: UserContext) -> float:
        points = self.goal_alignment.score(session.type, session.goal, context.fitness_goal)
        return clamp(points, 0.0, self.max_points["goal_alignment"])

    def injury_safety(self, recovery_percent: Optional[float], intensity: Optional[Intensity],
                      comment: Optional[str]) -> float:
        """Start at full points; subtract for pain mentions and hard sessions on low recovery."""
        points = self.max_points["injury_safety"]

        if comment and any(flag in comment.lower() for flag in self.PAIN_KEYWORDS):
            points -= config.PAIN_KEYWORD_PENALTY

        if recovery_percent is not None and Intensity.parse(intensity) == Intensity.HIGH:
            if recovery_percent < config.HIGH_INTENSITY_RED_RECOVERY:
                points -= config.HIGH_INTENSITY_RED_PENALTY
            elif recovery_percent < config.HIGH_INTENSITY_LOW_RECOVERY:
                points -= config.HIGH_INTENSITY_LOW_PENALTY

        return clamp(points, 0.0, self.max_points["injury_safety"])
