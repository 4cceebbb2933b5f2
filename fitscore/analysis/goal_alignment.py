"""Keyword matching between a session and the user's fitness goal."""

from typing import Dict, Optional, Tuple

from ..config import config


class GoalAlignmentHeuristic:
    """Grade how well a session fits the user's goal on a 0-2 point scale.

    Session type, session goal and fitness goal are matched against keyword
    categories. Swappable like SentimentHeuristic: TrainingScorer only calls
    ``score(session_type, session_goal, fitness_goal)``.
    """

    CATEGORIES: Dict[str, Tuple[str, ...]] = {
        "strength": ("strength", "weights", "resistance", "muscle", "power", "lifting"),
        "endurance": ("endurance", "cardio", "running", "cycling", "stamina", "aerobic"),
        "weight_loss": ("weight loss", "fat loss", "cardio", "hiit", "running"),
        "flexibility": ("flexibility", "yoga", "stretching", "mobility"),
        "general": ("health", "fitness", "wellness", "general"),
    }

    FULL_MATCH = 2.0
    GOOD_MATCH = 1.5
    PARTIAL_MATCH = 1.0

    def __init__(self, neutral: float = None):
        self.neutral = config.GOAL_NEUTRAL_POINTS if neutral is None else neutral

    @staticmethod
    def _matches(text: str, keywords: Tuple[str, ...]) -> bool:
        return any(keyword in text for keyword in keywords)

    def matching_categories(self, text: Optional[str]) -> list:
        """Category names whose keywords appear in text."""
        lowered = (text or "").lower()
        return [name for name, keywords in self.CATEGORIES.items() if self._matches(lowered, keywords)]

    def score(self, session_type: str, session_goal: Optional[str] = None,
              fitness_goal: Optional[str] = None) -> float:
        if not session_goal and not fitness_goal:
            return self.neutral

        type_text = (session_type or "").lower()
        session_text = (session_goal or "").lower()
        goal_text = (fitness_goal or "").lower()

        best = 0.0
        for keywords in self.CATEGORIES.values():
            fits_goal = self._matches(goal_text, keywords)
            fits_session = self._matches(session_text, keywords)
            fits_type = self._matches(type_text, keywords)

            if fits_goal and (fits_type or fits_session):
                best = self.FULL_MATCH
                break
            elif fits_goal or (fits_type and fits_session):
                best = max(best, self.GOOD_MATCH)
            elif fits_type or fits_session:
                best = max(best, self.PARTIAL_MATCH)

        if best == 0.0:
            return self.neutral
        return best
