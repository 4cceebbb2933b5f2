"""Keyword sentiment for free-text session comments."""

from typing import Optional

from .data_validation import clamp


class SentimentHeuristic:
    """Score a comment between 0 (negative) and 1 (positive), 0.5 = neutral.

    A keyword-containment heuristic, not a classifier. Anything with a
    ``score(comment) -> float`` method can replace it in TrainingScorer.
    """

    POSITIVE_WORDS = ("great", "good", "excellent", "strong", "easy", "felt good", "energized", "amazing")
    NEGATIVE_WORDS = ("hard", "difficult", "struggled", "tired", "exhausted", "painful", "bad")

    NEUTRAL = 0.5

    def count_matches(self, comment: str) -> tuple:
        """Return (positive, negative) counts of listed words found in comment."""
        text = comment.lower()
        positive = sum(1 for word in self.POSITIVE_WORDS if word in text)
        negative = sum(1 for word in self.NEGATIVE_WORDS if word in text)
        return positive, negative

    def raw_score(self, comment: Optional[str]) -> float:
        """Unclamped score; strongly positive comments can exceed 1.0."""
        if not comment:
            return self.NEUTRAL

        positive, negative = self.count_matches(comment)
        if positive > negative:
            return 0.7 + 0.1 * positive
        if negative > positive:
            return 0.3 - 0.1 * negative
        return self.NEUTRAL

    def score(self, comment: Optional[str]) -> float:
        return clamp(self.raw_score(comment), 0.0, 1.0)
