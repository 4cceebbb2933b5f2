"""Context-adaptive expected strain bands.

Baseline daily movement (normal life, no training) sits around 6-9 on the
vendor strain scale. The user's rehab stage, goal and weekly load decide how
far above that a good training day should go; when none of those apply the
band follows the readiness zone.
"""

import logging
from typing import Optional

from ..config import config
from .models import StrainBand, TrainingContext, UserContext, Zone

logger = logging.getLogger(__name__)


class StrainBandCalculator:
    """Compute the expected strain range for a user's day."""

    DELOAD_KEYWORDS = ("deload", "de-load")
    REHAB_STAGE_KEYWORDS = ("sub", "rehab", "return")
    REHAB_GOAL_KEYWORDS = ("rehab", "return")
    HIGH_PERFORMANCE_LOADS = ("heavy", "competition")

    def classify(self, context: Optional[UserContext], comment: Optional[str] = None) -> TrainingContext:
        """Classify the day's training context. First match wins.

        Args:
            context: User profile context (may be None)
            comment: Session comment, checked for deload keywords

        Returns:
            TrainingContext branch
        """
        context = context or UserContext()
        rehab = (context.rehab_stage or "").strip().lower()
        goal = (context.primary_goal or "").strip().lower()
        load = (context.weekly_load or "").strip().lower()
        note = (comment or "").lower()

        # 'Sub-acute' contains 'acute'; it belongs to the controlled rehab band
        if "acute" in rehab and "sub" not in rehab:
            return TrainingContext.ACUTE_REHAB

        if any(word in rehab for word in self.REHAB_STAGE_KEYWORDS) or \
                any(word in goal for word in self.REHAB_GOAL_KEYWORDS):
            return TrainingContext.REHAB

        if load == "light" or any(word in note for word in self.DELOAD_KEYWORDS):
            return TrainingContext.DELOAD

        if load in self.HIGH_PERFORMANCE_LOADS or "performance" in goal:
            return TrainingContext.HIGH_PERFORMANCE

        return TrainingContext.DEFAULT

    def band_for(self, training_context: TrainingContext, zone: Zone) -> StrainBand:
        """Look up the band for an already classified context."""
        low, high, ideal = config.get_strain_band(training_context.value, zone.value)
        return StrainBand(min=low, max=high, ideal=ideal)

    def band(self, zone: Zone, context: Optional[UserContext] = None,
             comment: Optional[str] = None) -> StrainBand:
        training_context = self.classify(context, comment)
        band = self.band_for(training_context, zone)
        logger.debug(f"Strain band for {training_context.value}/{zone.value}: "
                     f"{band.min}-{band.max} (ideal {band.ideal})")
        return band
