"""Database models for daily biometrics, training sessions and stored scores."""

import json
from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, Date, Boolean, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base

from ..analysis.models import DailyBiometrics, TrainingSession, UserContext

Base = declarative_base()


class BiometricsRecord(Base):
    """One day of wearable telemetry per user."""

    __tablename__ = "daily_biometrics"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_biometrics_user_date"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(String(50), default="default", nullable=False)
    date = Column(Date, nullable=False)
    recovery_percent = Column(Float)  # 0-100
    sleep_hours = Column(Float)
    sleep_score_percent = Column(Float)  # 0-100
    hrv = Column(Float)  # ms
    hrv_baseline = Column(Float)  # 7-day average, ms
    resting_heart_rate = Column(Float)  # bpm
    strain_score = Column(Float)  # vendor scale, 0-21
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_biometrics(self) -> DailyBiometrics:
        return DailyBiometrics(
            date=self.date,
            recovery_percent=self.recovery_percent,
            sleep_hours=self.sleep_hours,
            sleep_score_percent=self.sleep_score_percent,
            hrv=self.hrv,
            hrv_baseline=self.hrv_baseline,
            resting_heart_rate=self.resting_heart_rate,
            strain_score=self.strain_score,
        )

    def __repr__(self):
        return f"<BiometricsRecord(user_id={self.user_id}, date={self.date}, recovery={self.recovery_percent})>"


class TrainingSessionRecord(Base):
    """A logged training session with its calculated score."""

    __tablename__ = "training_data"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(50), default="default", nullable=False)
    date = Column(Date, nullable=False)
    type = Column(String(255), nullable=False)  # e.g. "Morning Run", "Strength Training"
    duration = Column(Float, nullable=False)  # minutes
    goal = Column(String(255))
    intensity = Column(String(20))  # Low, Moderate, High
    comment = Column(Text)
    skipped = Column(Boolean, default=False, nullable=False)
    training_score = Column(Float)  # 1-10, 0 when skipped
    analysis_result = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    def to_session(self) -> TrainingSession:
        return TrainingSession(
            type=self.type,
            duration=self.duration,
            intensity=self.intensity,
            goal=self.goal,
            comment=self.comment,
            skipped=bool(self.skipped),
        )

    def __repr__(self):
        return f"<TrainingSessionRecord(user_id={self.user_id}, date={self.date}, type={self.type})>"


class UserContextRecord(Base):
    """Profile context, one row per user."""

    __tablename__ = "user_context"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(50), unique=True, nullable=False)
    rehab_stage = Column(String(50))  # Acute, Sub-acute, Rehab, Return-to-training
    primary_goal = Column(String(255))
    weekly_load = Column(String(50))  # Light, Normal, Heavy, Competition
    fitness_goal = Column(String(255))
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_context(self) -> UserContext:
        return UserContext(
            rehab_stage=self.rehab_stage,
            primary_goal=self.primary_goal,
            weekly_load=self.weekly_load,
            fitness_goal=self.fitness_goal,
        )

    def __repr__(self):
        return f"<UserContextRecord(user_id={self.user_id}, load={self.weekly_load})>"


class FitScoreRecord(Base):
    """Daily composite FitScore."""

    __tablename__ = "fit_scores"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_fitscore_user_date"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(String(50), default="default", nullable=False)
    date = Column(Date, nullable=False)
    fit_score = Column(Float, nullable=False)  # 0-10
    zone = Column(String(10))  # green, yellow, red
    recovery_score = Column(Float)  # 1-10
    training_score = Column(Float)  # mean of the day's sessions
    components = Column(Text)  # JSON
    nutrition_estimated = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def get_components(self) -> dict:
        return json.loads(self.components) if self.components else {}

    def __repr__(self):
        return f"<FitScoreRecord(user_id={self.user_id}, date={self.date}, fit_score={self.fit_score:.1f})>"
