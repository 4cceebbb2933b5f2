"""Score a stored day: load inputs, run the scorers, persist the results."""

import json
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional

from ..config import config
from ..db import get_db
from ..db.models import BiometricsRecord, FitScoreRecord, TrainingSessionRecord, UserContextRecord
from .data_validation import round_score
from .fit_score import CompositeFitScoreCalculator, forecast_fit_score
from .models import (
    CompositeFitScoreResult,
    DailyBiometrics,
    FitScoreForecast,
    ScoreResult,
    TrainingSession,
    UserContext,
)
from .narrator import AnalysisNarrator
from .recovery_score import RecoveryScorer
from .training_score import TrainingScorer

logger = logging.getLogger(__name__)


@dataclass
class DailyReport:
    """All scores for one user-day."""

    date: date
    recovery: ScoreResult
    fit_score: CompositeFitScoreResult
    sessions: List[ScoreResult] = field(default_factory=list)
    summary: str = ""
    table: str = ""

    @property
    def training_score(self) -> Optional[float]:
        """Mean score of the day's sessions, None on a rest day."""
        if not self.sessions:
            return None
        return round_score(sum(s.score for s in self.sessions) / len(self.sessions))


class DailyScoringService:
    """Store-backed scoring for one user."""

    def __init__(self, user_id: str = None, db=None):
        self.user_id = user_id or config.DEFAULT_USER_ID
        self.db = db or get_db()
        self.recovery_scorer = RecoveryScorer()
        self.training_scorer = TrainingScorer()
        self.fit_calculator = CompositeFitScoreCalculator()
        self.narrator = AnalysisNarrator()

    def record_biometrics(self, biometrics: DailyBiometrics) -> None:
        """Insert or replace the biometrics row for biometrics.date."""
        if biometrics.date is None:
            raise ValueError("Biometrics must carry a date to be stored")

        with self.db.get_session() as session:
            record = session.query(BiometricsRecord).filter(
                BiometricsRecord.user_id == self.user_id,
                BiometricsRecord.date == biometrics.date,
            ).first()
            if record is None:
                record = BiometricsRecord(user_id=self.user_id, date=biometrics.date)
                session.add(record)

            record.recovery_percent = biometrics.recovery_percent
            record.sleep_hours = biometrics.sleep_hours
            record.sleep_score_percent = biometrics.sleep_score_percent
            record.hrv = biometrics.hrv
            record.hrv_baseline = biometrics.hrv_baseline
            record.resting_heart_rate = biometrics.resting_heart_rate
            record.strain_score = biometrics.strain_score

    def record_session(self, day: date, training: TrainingSession) -> int:
        """Store a training session and return its id."""
        with self.db.get_session() as session:
            record = TrainingSessionRecord(
                user_id=self.user_id,
                date=day,
                type=training.type,
                duration=training.duration,
                goal=training.goal,
                intensity=training.intensity.value.capitalize() if training.intensity else None,
                comment=training.comment,
                skipped=training.skipped,
            )
            session.add(record)
            session.flush()
            return record.id

    def set_context(self, context: UserContext) -> None:
        with self.db.get_session() as session:
            record = session.query(UserContextRecord).filter(
                UserContextRecord.user_id == self.user_id
            ).first()
            if record is None:
                record = UserContextRecord(user_id=self.user_id)
                session.add(record)

            record.rehab_stage = context.rehab_stage
            record.primary_goal = context.primary_goal
            record.weekly_load = context.weekly_load
            record.fitness_goal = context.fitness_goal

    def get_context(self) -> UserContext:
        """Stored profile context, or an empty context when none is set."""
        with self.db.get_session() as session:
            record = session.query(UserContextRecord).filter(
                UserContextRecord.user_id == self.user_id
            ).first()
            return record.to_context() if record else UserContext()

    def get_biometrics(self, day: date) -> Optional[DailyBiometrics]:
        with self.db.get_session() as session:
            record = session.query(BiometricsRecord).filter(
                BiometricsRecord.user_id == self.user_id,
                BiometricsRecord.date == day,
            ).first()
            return record.to_biometrics() if record else None

    def score_day(self, day: date, nutrition_score: Optional[float] = None,
                  target_sleep_hours: Optional[float] = None) -> DailyReport:
        """Score a stored day and persist session and FitScore results.

        Args:
            day: Calendar day to score
            nutrition_score: 0-10 meal-analysis score, if available
            target_sleep_hours: Personal sleep target

        Returns:
            DailyReport

        Raises:
            LookupError: No biometrics stored for the day
        """
        biometrics = self.get_biometrics(day)
        if biometrics is None:
            raise LookupError(f"No biometrics stored for {day} (user {self.user_id})")

        context = self.get_context()
        recovery = self.recovery_scorer.score(biometrics)
        fit = self.fit_calculator.from_biometrics(biometrics, nutrition_score, target_sleep_hours)

        results = []
        with self.db.get_session() as session:
            records = session.query(TrainingSessionRecord).filter(
                TrainingSessionRecord.user_id == self.user_id,
                TrainingSessionRecord.date == day,
            ).order_by(TrainingSessionRecord.id).all()

            for record in records:
                result = self.training_scorer.score(record.to_session(), biometrics, context)
                record.training_score = result.score
                record.analysis_result = result.analysis
                results.append(result)

        report = DailyReport(
            date=day,
            recovery=recovery,
            fit_score=fit,
            sessions=results,
            summary=self.narrator.render(fit),
            table=self.narrator.render_table(fit),
        )
        self._store_fit_score(report)
        logger.info(f"Scored {day} for {self.user_id}: FitScore {fit.fit_score} ({fit.zone.value}), "
                    f"recovery {recovery.score}, {len(results)} session(s)")
        return report

    def _store_fit_score(self, report: DailyReport) -> None:
        with self.db.get_session() as session:
            record = session.query(FitScoreRecord).filter(
                FitScoreRecord.user_id == self.user_id,
                FitScoreRecord.date == report.date,
            ).first()
            if record is None:
                record = FitScoreRecord(user_id=self.user_id, date=report.date)
                session.add(record)

            fit = report.fit_score
            record.fit_score = fit.fit_score
            record.zone = fit.zone.value
            record.recovery_score = report.recovery.score
            record.training_score = report.training_score
            record.components = json.dumps(fit.components)
            record.nutrition_estimated = fit.nutrition_estimated

    def get_history(self, end: date, days: int = None) -> List[float]:
        """Stored FitScores in the window before end (exclusive), oldest first."""
        if days is None:
            days = config.FORECAST_HISTORY_DAYS
        start = end - timedelta(days=days)
        with self.db.get_session() as session:
            records = session.query(FitScoreRecord).filter(
                FitScoreRecord.user_id == self.user_id,
                FitScoreRecord.date >= start,
                FitScoreRecord.date < end,
            ).order_by(FitScoreRecord.date).all()
            return [r.fit_score for r in records]

    def forecast(self, day: date, days: int = None) -> FitScoreForecast:
        """Forecast from the stored FitScore of day plus the preceding history.

        Raises:
            LookupError: No FitScore stored for the day
        """
        with self.db.get_session() as session:
            record = session.query(FitScoreRecord).filter(
                FitScoreRecord.user_id == self.user_id,
                FitScoreRecord.date == day,
            ).first()
            if record is None:
                raise LookupError(f"No FitScore stored for {day}; run the daily scoring first")
            current = record.fit_score

        return forecast_fit_score(current, self.get_history(day, days))
