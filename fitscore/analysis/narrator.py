"""Templated, deterministic explanations for scoring results."""

from typing import List, Optional

from ..config import config
from .models import (
    CompositeFitScoreResult,
    FitScoreForecast,
    RecoveryAssessment,
    ScoreResult,
    TrainingAssessment,
    TrainingContext,
    Zone,
)

# Presentation row order for the FitScore table
TABLE_ROWS = [
    ("sleep", "💤 Sleep"),
    ("recovery", "💚 Recovery"),
    ("cardio_balance", "🫀 Cardio Balance"),
    ("nutrition", "🥗 Nutrition"),
    ("strain", "🏋️ Training Alignment"),
]


def join_sentences(parts: List[str]) -> str:
    return ". ".join(parts) + "."


class AnalysisNarrator:
    """Build short explanations from threshold rules. Same input, same text."""

    def render(self, result) -> str:
        """Render any engine result as a few plain sentences."""
        if isinstance(result, RecoveryAssessment):
            return self.render_recovery(result)
        if isinstance(result, TrainingAssessment):
            return self.render_training(result)
        if isinstance(result, CompositeFitScoreResult):
            return self.render_fit_score(result)
        if isinstance(result, FitScoreForecast):
            return result.message
        if isinstance(result, ScoreResult):
            return result.analysis
        raise TypeError(f"Cannot render {type(result).__name__}")

    def render_recovery(self, assessment: RecoveryAssessment) -> str:
        parts = []

        if assessment.score >= 8:
            parts.append("Excellent recovery state")
        elif assessment.score >= 6:
            parts.append("Good recovery")
        elif assessment.score >= 4:
            parts.append("Moderate recovery")
        else:
            parts.append("Recovery needs attention")

        if assessment.zone == Zone.GREEN:
            parts.append("Your body is well recovered and ready for high-intensity training")
        elif assessment.zone == Zone.YELLOW:
            parts.append("Moderate recovery suggests balanced training intensity today")
        else:
            parts.append("Low recovery means prioritizing rest or light activity")

        hours = assessment.sleep_hours
        if hours is not None:
            if hours >= 7.5:
                parts.append(f"{hours:.1f} hours of sleep provides a strong foundation")
            elif hours >= 6:
                parts.append(f"{hours:.1f} hours of sleep is adequate but more would help")
            else:
                parts.append(f"{hours:.1f} hours of sleep is below optimal for recovery")

        delta = assessment.hrv_delta
        if delta is not None:
            if delta >= config.HRV_NARRATIVE_DELTA:
                parts.append("HRV trending above baseline indicates good adaptation")
            elif delta <= -config.HRV_NARRATIVE_DELTA:
                parts.append("HRV below baseline may indicate accumulated stress")

        return join_sentences(parts)

    def render_training(self, assessment: TrainingAssessment) -> str:
        breakdown = assessment.breakdown
        strain_points = breakdown["strain_appropriateness"]
        strain = assessment.strain
        good_fit = strain_points >= 3
        overreach = strain is not None and strain_points < 2 and strain > assessment.band.max

        parts = []
        context = assessment.context

        if context == TrainingContext.ACUTE_REHAB:
            if good_fit:
                parts.append("Correct execution: staying within baseline movement is exactly right for acute recovery")
            elif overreach:
                parts.append("Overreach detected: strain exceeded what acute recovery allows, so protect the healing process")
            else:
                parts.append("Moderate effort during acute recovery, so monitor how the body responds")
        elif context == TrainingContext.REHAB:
            if good_fit:
                parts.append("Smart rehab execution with strain well within the expected range for your recovery phase")
            elif overreach:
                parts.append("Training spike detected; keep sessions controlled during rehabilitation to avoid setbacks")
            else:
                parts.append("Session within an acceptable rehab range; keep intensity gradual and progressive")
        elif context == TrainingContext.DELOAD:
            if good_fit:
                parts.append("Deload executed correctly, reduced strain is what this phase calls for")
            else:
                parts.append("Moderate deload session; aim for an intentional reduction so the body absorbs previous training")
        elif context == TrainingContext.HIGH_PERFORMANCE:
            if good_fit:
                parts.append("Strong training load, well matched to your performance phase")
            elif strain is not None and strain_points < 2 and strain < 10:
                parts.append("Missed training opportunity; this phase calls for elevated strain to drive adaptation")
            else:
                parts.append("Training load recorded; check that session intensity fits your performance phase goals")
        else:
            parts.extend(self._default_training_sentences(assessment))

        if breakdown["session_quality"] >= 2.5:
            intensity = assessment.intensity.value.capitalize() if assessment.intensity else "your chosen"
            parts.append(f"{assessment.duration:g} minutes at {intensity} intensity was appropriate")

        if breakdown["goal_alignment"] >= 1.5 and assessment.fitness_goal:
            parts.append(f"This session aligns well with your {assessment.fitness_goal} goal")

        if breakdown["injury_safety"] < config.INJURY_SAFETY_WARNING:
            parts.append("Take care to avoid overtraining and allow adequate recovery")

        return join_sentences(parts)

    @staticmethod
    def _default_training_sentences(assessment: TrainingAssessment) -> List[str]:
        parts = []
        if assessment.score >= 8:
            parts.append("Excellent training session")
        elif assessment.score >= 6:
            parts.append("Good training session")
        elif assessment.score >= 4:
            parts.append("Moderate training session")
        else:
            parts.append("Training could be optimized")

        if assessment.zone == Zone.GREEN:
            parts.append("Your recovery supports high-intensity training")
        elif assessment.zone == Zone.YELLOW:
            parts.append("Keep an eye on training intensity with moderate recovery")
        else:
            parts.append("Low recovery suggests prioritizing rest or light activity")

        strain_points = assessment.breakdown["strain_appropriateness"]
        strain = assessment.strain
        if strain_points >= 3.5:
            parts.append("Training load was well matched to your recovery state")
        elif strain_points < 2 and strain is not None and strain > 15 and assessment.zone != Zone.GREEN:
            parts.append("Training strain may have been too high for your recovery level")
        return parts

    def render_fit_score(self, result: CompositeFitScoreResult) -> str:
        score = result.fit_score
        if result.zone == Zone.GREEN:
            parts = [f"FitScore {score}: systems aligned",
                     "Recovery, training and nutrition are tracking well"]
        elif result.zone == Zone.YELLOW:
            parts = [f"FitScore {score}: functional but uneven",
                     "Some pillars are carrying weight while others lag"]
        else:
            parts = [f"FitScore {score}: signals are flagging",
                     "Recovery looks compromised relative to the load"]

        weakest = self.weakest_component(result)
        if weakest is not None:
            parts.append(f"The weakest pillar today is {weakest}")
        if result.nutrition_estimated:
            parts.append("Nutrition was estimated because no meals were analyzed")
        return join_sentences(parts)

    @staticmethod
    def weakest_component(result: CompositeFitScoreResult) -> Optional[str]:
        """Label of the lowest component, ties resolved by table order."""
        labels = {key: label.split(" ", 1)[1] for key, label in TABLE_ROWS}
        candidates = [(result.components[key], index, key)
                      for index, (key, _) in enumerate(TABLE_ROWS)
                      if key in result.components and not (key == "nutrition" and result.nutrition_estimated)]
        if not candidates:
            return None
        _, _, key = min(candidates)
        return labels[key]

    def render_table(self, result: CompositeFitScoreResult, training_alignment: float = None) -> str:
        """Markdown table: Sleep, Recovery, Cardio Balance, Nutrition,
        Training Alignment, then the final FitScore row.

        Args:
            result: Composite result
            training_alignment: Optional override for the Training Alignment
                row (e.g. a training score); defaults to the strain component
        """
        lines = ["| Metric | Score |", "|--------|-------|"]
        for key, label in TABLE_ROWS:
            value = result.components.get(key, config.NEUTRAL_COMPONENT_SCORE)
            if key == "strain" and training_alignment is not None:
                value = training_alignment
            lines.append(f"| {label} | **{value:.1f}**/10 |")
        lines.append(f"| **🎯 FitScore** | **{result.fit_score:.1f}**/10 |")
        return "\n".join(lines)
