"""Tests for the keyword sentiment and goal alignment heuristics."""

import pytest
from fitscore.analysis import GoalAlignmentHeuristic, SentimentHeuristic


class TestSentimentHeuristic:
    """Test comment sentiment."""

    def setup_method(self):
        self.sentiment = SentimentHeuristic()

    def test_empty_comment_is_neutral(self):
        assert self.sentiment.score(None) == 0.5
        assert self.sentiment.score("") == 0.5

    def test_positive(self):
        assert self.sentiment.score("Great session, felt strong") == pytest.approx(0.9)

    def test_negative(self):
        assert self.sentiment.score("Struggled, legs tired") == pytest.approx(0.1)

    def test_mixed_is_neutral(self):
        assert self.sentiment.score("Great but hard") == 0.5

    def test_score_is_bounded(self):
        comment = "great good excellent strong amazing"
        assert self.sentiment.raw_score(comment) == pytest.approx(1.2)
        assert self.sentiment.score(comment) == 1.0
        assert self.sentiment.score("hard difficult tired exhausted bad") == 0.0

    def test_case_insensitive(self):
        assert self.sentiment.count_matches("EXCELLENT") == (1, 0)


class TestGoalAlignmentHeuristic:
    """Test session vs. goal matching."""

    def setup_method(self):
        self.alignment = GoalAlignmentHeuristic()

    def test_no_goals_is_neutral(self):
        assert self.alignment.score("Morning Run") == pytest.approx(1.2)

    def test_full_match(self):
        assert self.alignment.score("Strength Training", None, "Build strength") == 2.0

    def test_goal_only_match(self):
        assert self.alignment.score("Yoga", None, "strength") == 1.5

    def test_type_and_session_goal_match(self):
        assert self.alignment.score("Running intervals", "endurance") == 1.5

    def test_partial_match(self):
        assert self.alignment.score("Morning Run", "endurance") == 1.0

    def test_no_match_is_neutral(self):
        assert self.alignment.score("Chess", "relax", "win tournaments") == pytest.approx(1.2)

    def test_matching_categories(self):
        assert self.alignment.matching_categories("Cardio") == ["endurance", "weight_loss"]
        assert self.alignment.matching_categories(None) == []
