"""Database module for the FitScore engine."""

from .database import Database, get_db, close_db
from .models import BiometricsRecord, FitScoreRecord, TrainingSessionRecord, UserContextRecord

__all__ = [
    "Database",
    "get_db",
    "close_db",
    "BiometricsRecord",
    "FitScoreRecord",
    "TrainingSessionRecord",
    "UserContextRecord",
]
