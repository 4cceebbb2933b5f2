"""Configuration management for the FitScore engine."""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration.

    Every scoring threshold lives here so that there is exactly one table to
    read when a score looks wrong.
    """

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./fitscore.db")

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEFAULT_USER_ID: str = os.getenv("FITSCORE_USER_ID", "default")

    # Readiness zone cutoffs (recovery %). The recovery scorer uses the
    # vendor's own 67/34 split; the training scorer grades against 70/40.
    RECOVERY_ZONE_CUTOFFS = {"green": 67.0, "yellow": 34.0}
    TRAINING_ZONE_CUTOFFS = {"green": 70.0, "yellow": 40.0}

    # Recovery score weights
    RECOVERY_WEIGHTS = {
        "recovery": float(os.getenv("RECOVERY_WEIGHT_RECOVERY", "0.40")),
        "sleep": float(os.getenv("RECOVERY_WEIGHT_SLEEP", "0.40")),
        "hrv": float(os.getenv("RECOVERY_WEIGHT_HRV", "0.20")),
    }

    # Sleep hours -> points, checked top-down
    SLEEP_HOURS_POINTS = [
        (8.0, 6),
        (7.0, 5),
        (6.0, 4),
        (5.0, 3),
        (4.0, 2),
    ]
    SLEEP_HOURS_FLOOR_POINTS: int = 1
    SLEEP_HOURS_MISSING_POINTS: int = 3
    SLEEP_SCORE_MAX_POINTS: int = 4
    SLEEP_SCORE_MISSING_POINTS: int = 2

    # HRV delta (ms vs 7-day baseline) -> tier, checked top-down
    HRV_DELTA_TIERS = [
        (8.0, 2),
        (3.0, 1),
        (-2.0, 0),
        (-7.0, -1),
    ]
    HRV_DELTA_FLOOR_TIER: int = -2
    HRV_NEUTRAL: float = 5.0
    HRV_SCALED_RANGE = (3.0, 7.0)
    HRV_NARRATIVE_DELTA: float = 3.0

    # Training sub-score maxima (weights of the 10-point total)
    TRAINING_MAX_POINTS = {
        "strain_appropriateness": 4.0,
        "session_quality": 3.0,
        "goal_alignment": 2.0,
        "injury_safety": 1.0,
    }
    STRAIN_MISSING_POINTS: float = 2.4
    GOAL_NEUTRAL_POINTS: float = 1.2
    COMMENT_MISSING_POINTS: float = 0.4
    SENTIMENT_POINTS: float = 0.8

    # Session duration (minutes) points
    DURATION_POINTS = {
        "optimal": 1.2,    # 30-90
        "short": 0.9,      # 20-29
        "long": 1.0,       # 91-120
        "very_long": 0.7,  # >120
        "very_short": 0.4,
    }

    INTENSITY_POINTS = {
        "moderate": 1.0,
        "high": 0.9,
        "low": 0.7,
    }
    INTENSITY_MISSING_POINTS: float = 0.6

    # Injury safety
    PAIN_KEYWORD_PENALTY: float = 0.4
    HIGH_INTENSITY_RED_RECOVERY: float = 40.0
    HIGH_INTENSITY_RED_PENALTY: float = 0.4
    HIGH_INTENSITY_LOW_RECOVERY: float = 55.0
    HIGH_INTENSITY_LOW_PENALTY: float = 0.2
    INJURY_SAFETY_WARNING: float = 0.8

    # Expected strain bands: (min, max, ideal)
    STRAIN_BANDS = {
        "acute_rehab": (6.0, 11.0, 8.0),
        "rehab": (8.0, 14.0, 10.5),
        "deload": (5.0, 12.0, 8.0),
        "high_performance": {
            "green": (10.0, 19.0, 15.0),
            "yellow": (8.0, 14.0, 11.0),
            "red": (0.0, 9.0, 5.0),
        },
        "default": {
            "green": (8.0, 18.0, 13.0),
            "yellow": (5.0, 12.0, 8.5),
            "red": (0.0, 8.0, 4.0),
        },
    }
    OVERREACH_RED_ZONE_STRAIN: float = 10.0
    OVERREACH_ACUTE_REHAB_STRAIN: float = 12.0

    # Composite FitScore
    FITSCORE_WEIGHTS = {
        "sleep": float(os.getenv("FITSCORE_WEIGHT_SLEEP", "0.25")),
        "recovery": float(os.getenv("FITSCORE_WEIGHT_RECOVERY", "0.25")),
        "cardio_balance": float(os.getenv("FITSCORE_WEIGHT_CARDIO", "0.20")),
        "strain": float(os.getenv("FITSCORE_WEIGHT_STRAIN", "0.20")),
        "nutrition": float(os.getenv("FITSCORE_WEIGHT_NUTRITION", "0.10")),
    }
    TARGET_SLEEP_HOURS: float = float(os.getenv("TARGET_SLEEP_HOURS", "8"))
    REFERENCE_STRAIN: float = float(os.getenv("REFERENCE_STRAIN", "15"))
    RHR_FLOOR: float = 40.0
    NUTRITION_PLACEHOLDER_SCORE: float = float(os.getenv("NUTRITION_PLACEHOLDER_SCORE", "5.0"))
    NEUTRAL_COMPONENT_SCORE: float = 5.0
    FITSCORE_ZONE_CUTOFFS = {"green": 7.0, "yellow": 5.0}

    # Forecast
    FORECAST_HISTORY_DAYS: int = int(os.getenv("FORECAST_HISTORY_DAYS", "7"))
    FORECAST_SLOPE_THRESHOLD: float = 0.1  # points per day

    # Physiological input bounds; values outside are clamped, not rejected
    INPUT_BOUNDS = {
        "recovery_percent": (0.0, 100.0),
        "sleep_hours": (0.0, 24.0),
        "sleep_score_percent": (0.0, 100.0),
        "hrv": (0.0, 300.0),
        "hrv_baseline": (0.0, 300.0),
        "resting_heart_rate": (20.0, 150.0),
        "strain_score": (0.0, 21.0),
    }

    @classmethod
    def validate(cls) -> bool:
        """Validate that every weight table sums to 1.0."""
        tables = {
            "RECOVERY_WEIGHTS": sum(cls.RECOVERY_WEIGHTS.values()),
            "TRAINING_MAX_POINTS": sum(cls.TRAINING_MAX_POINTS.values()) / 10.0,
            "FITSCORE_WEIGHTS": sum(cls.FITSCORE_WEIGHTS.values()),
        }
        for name, total in tables.items():
            if abs(total - 1.0) > 1e-6:
                raise ValueError(f"{name} must sum to 1.0 (got {total:.3f})")
        if cls.TARGET_SLEEP_HOURS <= 0:
            raise ValueError("TARGET_SLEEP_HOURS must be positive")
        if cls.REFERENCE_STRAIN <= 0:
            raise ValueError("REFERENCE_STRAIN must be positive")
        return True

    @classmethod
    def get_strain_band(cls, context_key: str, zone: str) -> tuple:
        """Get (min, max, ideal) for a training context and readiness zone."""
        band = cls.STRAIN_BANDS.get(context_key, cls.STRAIN_BANDS["default"])
        if isinstance(band, dict):
            return band.get(zone, band["yellow"])
        return band


config = Config()
