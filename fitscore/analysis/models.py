"""Input and result structures for the scoring engine."""

from dataclasses import dataclass, field
from datetime import date as date_type
from enum import Enum
from typing import Dict, List, Optional


class Zone(Enum):
    """Three-level readiness classification."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class Intensity(Enum):
    """Self-reported session intensity."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @classmethod
    def parse(cls, value) -> Optional["Intensity"]:
        """Parse free text ('Moderate', 'HIGH', ...) into an Intensity.

        Unknown or empty values are treated as unspecified.
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class TrainingContext(Enum):
    """Which expected-strain branch applies to the user today.

    Declaration order is the priority order: the first matching context wins.
    """

    ACUTE_REHAB = "acute_rehab"
    REHAB = "rehab"
    DELOAD = "deload"
    HIGH_PERFORMANCE = "high_performance"
    DEFAULT = "default"


@dataclass(frozen=True)
class DailyBiometrics:
    """One calendar day of wearable telemetry. All readings are optional."""

    date: Optional[date_type] = None
    recovery_percent: Optional[float] = None
    sleep_hours: Optional[float] = None
    sleep_score_percent: Optional[float] = None
    hrv: Optional[float] = None
    hrv_baseline: Optional[float] = None
    resting_heart_rate: Optional[float] = None
    strain_score: Optional[float] = None


@dataclass(frozen=True)
class TrainingSession:
    """A self-reported training session."""

    type: str = ""
    duration: float = 0.0  # minutes
    intensity: Optional[Intensity] = None
    goal: Optional[str] = None
    comment: Optional[str] = None
    skipped: bool = False

    def __post_init__(self):
        # Accept 'Moderate' etc. from forms and the store
        object.__setattr__(self, "intensity", Intensity.parse(self.intensity))


@dataclass(frozen=True)
class UserContext:
    """Long-lived profile settings that shape what effort is expected."""

    rehab_stage: Optional[str] = None
    primary_goal: Optional[str] = None
    weekly_load: Optional[str] = None
    fitness_goal: Optional[str] = None


@dataclass(frozen=True)
class StrainBand:
    """Expected daily strain range."""

    min: float
    max: float
    ideal: float

    def contains(self, strain: float) -> bool:
        return self.min <= strain <= self.max


@dataclass(frozen=True)
class ScoreResult:
    """A 1-10 quality score with its breakdown and explanation."""

    score: float
    breakdown: Dict[str, float]
    analysis: str
    zone: Zone


@dataclass(frozen=True)
class RecoveryAssessment:
    """Everything the narrator needs to explain a recovery score."""

    score: float
    zone: Zone
    breakdown: Dict[str, float]
    sleep_hours: Optional[float] = None
    hrv_delta: Optional[float] = None


@dataclass(frozen=True)
class TrainingAssessment:
    """Everything the narrator needs to explain a training score."""

    score: float
    zone: Zone
    breakdown: Dict[str, float]
    context: TrainingContext
    band: StrainBand
    duration: float
    strain: Optional[float] = None
    intensity: Optional[Intensity] = None
    fitness_goal: Optional[str] = None


@dataclass(frozen=True)
class CompositeFitScoreResult:
    """Composite FitScore (0-10, one decimal) and its 0-10 components."""

    fit_score: float
    components: Dict[str, float]
    zone: Zone
    recommendations: List[str] = field(default_factory=list)
    nutrition_estimated: bool = False


@dataclass(frozen=True)
class FitScoreForecast:
    """Short-term FitScore outlook derived from recent history."""

    forecast: float
    trend: str  # 'up', 'down' or 'stable'
    message: str
