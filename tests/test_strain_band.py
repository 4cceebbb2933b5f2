"""Tests for context-adaptive strain bands."""

import pytest
from fitscore.analysis import StrainBand, StrainBandCalculator, TrainingContext, UserContext, Zone


class TestStrainBandCalculator:
    """Test training context classification and band lookup."""

    def setup_method(self):
        """Set up test fixtures."""
        self.calculator = StrainBandCalculator()

    @pytest.mark.parametrize("context,comment,expected", [
        (UserContext(rehab_stage="Acute"), None, TrainingContext.ACUTE_REHAB),
        (UserContext(rehab_stage="Sub-acute"), None, TrainingContext.REHAB),
        (UserContext(rehab_stage="Rehab"), None, TrainingContext.REHAB),
        (UserContext(rehab_stage="Return-to-training"), None, TrainingContext.REHAB),
        (UserContext(primary_goal="Rehab & Return"), None, TrainingContext.REHAB),
        (UserContext(weekly_load="Light"), None, TrainingContext.DELOAD),
        (UserContext(), "Deload week, kept it easy", TrainingContext.DELOAD),
        (UserContext(weekly_load="Heavy"), None, TrainingContext.HIGH_PERFORMANCE),
        (UserContext(weekly_load="competition"), None, TrainingContext.HIGH_PERFORMANCE),
        (UserContext(primary_goal="High Performance"), None, TrainingContext.HIGH_PERFORMANCE),
        (UserContext(rehab_stage="None", weekly_load="Normal"), None, TrainingContext.DEFAULT),
        (None, None, TrainingContext.DEFAULT),
    ])
    def test_classify(self, context, comment, expected):
        assert self.calculator.classify(context, comment) == expected

    def test_first_match_wins(self):
        """Acute rehab outranks a heavy week."""
        context = UserContext(rehab_stage="Acute", weekly_load="Heavy", primary_goal="High Performance")
        assert self.calculator.classify(context) == TrainingContext.ACUTE_REHAB

    def test_default_band_follows_zone(self):
        assert self.calculator.band(Zone.GREEN) == StrainBand(min=8, max=18, ideal=13)
        assert self.calculator.band(Zone.YELLOW) == StrainBand(min=5, max=12, ideal=8.5)
        assert self.calculator.band(Zone.RED) == StrainBand(min=0, max=8, ideal=4)

    def test_high_performance_band_follows_zone(self):
        context = UserContext(weekly_load="Heavy")
        assert self.calculator.band(Zone.GREEN, context) == StrainBand(min=10, max=19, ideal=15)
        assert self.calculator.band(Zone.RED, context) == StrainBand(min=0, max=9, ideal=5)

    def test_rehab_bands_ignore_zone(self):
        context = UserContext(rehab_stage="Rehab")
        assert self.calculator.band(Zone.GREEN, context) == self.calculator.band(Zone.RED, context)
        assert self.calculator.band(Zone.GREEN, UserContext(rehab_stage="Acute")) == StrainBand(6, 11, 8)

    def test_band_contains(self):
        band = StrainBand(min=8, max=14, ideal=10.5)
        assert band.contains(8)
        assert band.contains(14)
        assert not band.contains(14.1)
