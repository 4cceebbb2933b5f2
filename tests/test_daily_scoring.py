"""Tests for store-backed daily scoring."""

import pytest
from datetime import date, timedelta

from fitscore.analysis import DailyBiometrics, TrainingSession, UserContext, Zone
from fitscore.analysis.daily_scoring import DailyScoringService
from fitscore.db import BiometricsRecord, Database, FitScoreRecord, TrainingSessionRecord


class TestDailyScoringService:
    """Test scoring a stored day end to end."""

    def setup_method(self):
        """Set up an in-memory store."""
        self.db = Database("sqlite:///:memory:")
        self.db.create_tables()
        self.service = DailyScoringService("athlete", db=self.db)
        self.day = date(2026, 10, 1)
        self.biometrics = DailyBiometrics(
            date=self.day,
            recovery_percent=80,
            sleep_hours=8,
            sleep_score_percent=90,
            hrv=70,
            hrv_baseline=60,
            resting_heart_rate=50,
            strain_score=13,
        )

    def teardown_method(self):
        self.db.drop_tables()
        self.db.close()

    def test_score_day(self):
        self.service.record_biometrics(self.biometrics)
        self.service.record_session(self.day, TrainingSession(type="Morning Run", duration=45, intensity="Moderate"))

        report = self.service.score_day(self.day)

        assert report.recovery.score == pytest.approx(8.6)
        assert report.fit_score.fit_score == pytest.approx(8.3)
        assert report.fit_score.zone == Zone.GREEN
        assert report.fit_score.nutrition_estimated
        assert len(report.sessions) == 1
        assert report.training_score == pytest.approx(8.8)
        assert report.table.splitlines()[-1] == "| **🎯 FitScore** | **8.3**/10 |"

    def test_results_are_persisted(self):
        self.service.record_biometrics(self.biometrics)
        self.service.record_session(self.day, TrainingSession(type="Morning Run", duration=45, intensity="Moderate"))
        self.service.score_day(self.day, nutrition_score=7)

        with self.db.get_session() as session:
            training = session.query(TrainingSessionRecord).one()
            stored = session.query(FitScoreRecord).one()

            assert training.intensity == "Moderate"
            assert training.training_score == pytest.approx(8.8)
            assert training.analysis_result.startswith("Excellent training session")
            assert stored.user_id == "athlete"
            assert stored.recovery_score == pytest.approx(8.6)
            assert stored.training_score == pytest.approx(8.8)
            assert not stored.nutrition_estimated
            assert stored.get_components()["nutrition"] == 7.0

    def test_rescoring_replaces_the_day(self):
        self.service.record_biometrics(self.biometrics)
        self.service.score_day(self.day)
        self.service.score_day(self.day, nutrition_score=9)

        with self.db.get_session() as session:
            assert session.query(FitScoreRecord).count() == 1

    def test_rest_day_has_no_training_score(self):
        self.service.record_biometrics(self.biometrics)
        report = self.service.score_day(self.day)

        assert report.sessions == []
        assert report.training_score is None

    def test_biometrics_upsert(self):
        self.service.record_biometrics(self.biometrics)
        self.service.record_biometrics(DailyBiometrics(date=self.day, recovery_percent=40))

        with self.db.get_session() as session:
            assert session.query(BiometricsRecord).count() == 1
        stored = self.service.get_biometrics(self.day)
        assert stored.recovery_percent == 40
        assert stored.sleep_hours is None

    def test_biometrics_need_a_date(self):
        with pytest.raises(ValueError):
            self.service.record_biometrics(DailyBiometrics(recovery_percent=50))

    def test_missing_day(self):
        with pytest.raises(LookupError):
            self.service.score_day(self.day)

    def test_context_round_trip(self):
        assert self.service.get_context() == UserContext()

        context = UserContext(rehab_stage="Sub-acute", weekly_load="Normal")
        self.service.set_context(context)
        self.service.set_context(context)

        assert self.service.get_context() == context

    def test_context_shapes_session_analysis(self):
        self.service.set_context(UserContext(rehab_stage="Sub-acute"))
        self.service.record_biometrics(DailyBiometrics(date=self.day, recovery_percent=80, strain_score=10))
        self.service.record_session(self.day, TrainingSession(type="Walk", duration=45, intensity="Low"))

        report = self.service.score_day(self.day)
        assert report.sessions[0].analysis.startswith("Smart rehab execution")

    def test_users_are_isolated(self):
        self.service.record_biometrics(self.biometrics)
        other = DailyScoringService("someone-else", db=self.db)

        assert other.get_biometrics(self.day) is None

    def test_forecast_from_history(self):
        with self.db.get_session() as session:
            for offset, score in [(2, 5.0), (1, 6.0), (0, 7.0)]:
                session.add(FitScoreRecord(user_id="athlete", date=self.day - timedelta(days=offset),
                                           fit_score=score, zone="yellow"))

        assert self.service.get_history(self.day) == [5.0, 6.0]

        forecast = self.service.forecast(self.day)
        assert forecast.trend == "up"
        assert forecast.forecast == pytest.approx(8.0)

    def test_history_window(self):
        with self.db.get_session() as session:
            session.add(FitScoreRecord(user_id="athlete", date=self.day - timedelta(days=10),
                                       fit_score=3.0, zone="red"))

        assert self.service.get_history(self.day) == []
        assert self.service.get_history(self.day, days=14) == [3.0]

    def test_zero_day_window_is_empty(self):
        with self.db.get_session() as session:
            session.add(FitScoreRecord(user_id="athlete", date=self.day - timedelta(days=1),
                                       fit_score=6.0, zone="yellow"))

        assert self.service.get_history(self.day, days=0) == []
        assert self.service.get_history(self.day) == [6.0]

    def test_forecast_needs_a_score(self):
        with pytest.raises(LookupError):
            self.service.forecast(self.day)
