"""Tests for the recovery score."""

import pytest
from fitscore.analysis import DailyBiometrics, RecoveryScorer, Zone
from fitscore.analysis.recovery_score import recovery_zone


class TestRecoveryScorer:
    """Test recovery score calculations."""

    def setup_method(self):
        """Set up test fixtures."""
        self.scorer = RecoveryScorer()

    def test_missing_recovery_and_hrv_use_neutral_defaults(self):
        """Sleep-only day: 0.4*5 + 0.4*8 + 0.2*5."""
        result = self.scorer.score(DailyBiometrics(sleep_hours=7.5, sleep_score_percent=80))

        assert result.score == pytest.approx(6.2)
        assert result.breakdown["recovery_scaled"] == 5.0
        assert result.breakdown["sleep_quality"] == 8.0
        assert result.breakdown["hrv_scaled"] == 5.0
        assert result.zone == Zone.YELLOW

    def test_full_day(self):
        """Test a fully populated, well-recovered day."""
        result = self.scorer.score(DailyBiometrics(
            recovery_percent=80,
            sleep_hours=8.2,
            sleep_score_percent=90,
            hrv=70,
            hrv_baseline=60,
        ))

        assert result.breakdown["recovery_scaled"] == pytest.approx(8.0)
        assert result.breakdown["sleep_quality"] == pytest.approx(10.0)
        assert result.breakdown["hrv_scaled"] == pytest.approx(7.0)
        assert result.score == pytest.approx(8.6)
        assert result.zone == Zone.GREEN

    def test_empty_day_is_neutral(self):
        result = self.scorer.score(DailyBiometrics())
        assert result.score == pytest.approx(5.0)
        assert result.zone == Zone.YELLOW

    def test_score_stays_in_range(self):
        """Test extremes stay within 1-10."""
        worst = self.scorer.score(DailyBiometrics(
            recovery_percent=0, sleep_hours=2, sleep_score_percent=0, hrv=30, hrv_baseline=60
        ))
        best = self.scorer.score(DailyBiometrics(
            recovery_percent=100, sleep_hours=10, sleep_score_percent=100, hrv=90, hrv_baseline=60
        ))

        assert 1.0 <= worst.score <= 10.0
        assert 1.0 <= best.score <= 10.0
        assert worst.zone == Zone.RED

    def test_higher_recovery_never_lowers_score(self):
        """Test monotonicity in recovery %."""
        previous = 0.0
        for recovery in range(0, 101, 5):
            result = self.scorer.score(DailyBiometrics(recovery_percent=recovery, sleep_hours=7))
            assert result.score >= previous
            previous = result.score

    def test_more_sleep_never_lowers_score(self):
        previous = 0.0
        for hours in [3, 4, 5, 6, 7, 8, 9]:
            result = self.scorer.score(DailyBiometrics(recovery_percent=50, sleep_hours=hours))
            assert result.score >= previous
            previous = result.score

    def test_sleep_quality_tiers(self):
        """Test sleep hours tiers plus the sleep score contribution."""
        assert self.scorer.sleep_quality(8.0, None) == 8.0
        assert self.scorer.sleep_quality(7.0, None) == 7.0
        assert self.scorer.sleep_quality(3.0, None) == 3.0
        assert self.scorer.sleep_quality(None, None) == 5.0
        assert self.scorer.sleep_quality(8.0, 100) == 10.0

    def test_hrv_trend(self):
        """Test HRV delta tiers on the 3-7 scale."""
        assert self.scorer.hrv_scaled(70, 60) == 7.0
        assert self.scorer.hrv_scaled(64, 60) == 6.0
        assert self.scorer.hrv_scaled(60, 60) == 5.0
        assert self.scorer.hrv_scaled(55, 60) == 4.0
        assert self.scorer.hrv_scaled(40, 60) == 3.0

    def test_hrv_zero_reading_is_missing(self):
        assert self.scorer.hrv_delta(0, 60) is None
        assert self.scorer.hrv_delta(60, None) is None
        assert self.scorer.hrv_scaled(0, 60) == 5.0

    def test_out_of_range_recovery_is_clamped(self):
        result = self.scorer.score(DailyBiometrics(recovery_percent=150))
        assert result.breakdown["recovery_scaled"] == 10.0

    def test_analysis_text(self):
        result = self.scorer.score(DailyBiometrics(sleep_hours=7.5, sleep_score_percent=80))
        assert result.analysis == (
            "Good recovery. "
            "Moderate recovery suggests balanced training intensity today. "
            "7.5 hours of sleep provides a strong foundation."
        )

    def test_analysis_mentions_low_hrv(self):
        result = self.scorer.score(DailyBiometrics(recovery_percent=50, hrv=50, hrv_baseline=60))
        assert "HRV below baseline" in result.analysis


class TestRecoveryZone:
    """Test readiness zone cutoffs."""

    def test_cutoffs(self):
        assert recovery_zone(67) == Zone.GREEN
        assert recovery_zone(66) == Zone.YELLOW
        assert recovery_zone(34) == Zone.YELLOW
        assert recovery_zone(33) == Zone.RED
        assert recovery_zone(0) == Zone.RED

    def test_unknown_is_yellow(self):
        assert recovery_zone(None) == Zone.YELLOW

    def test_custom_cutoffs(self):
        cutoffs = {"green": 70.0, "yellow": 40.0}
        assert recovery_zone(68, cutoffs) == Zone.YELLOW
        assert recovery_zone(39, cutoffs) == Zone.RED
