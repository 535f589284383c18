"""Tests for survey navigation and scoring (survey.session)."""

import pytest

from survey.models import (
    NoAnswerSelected,
    Question,
    QuestionView,
    SurveyResult,
    TenthQuestion,
)
from survey.session import SurveySession


class TestForwardScoring:
    """Per-answer scoring on the way forward."""

    @pytest.mark.parametrize("tier", [0, 1, 2, 3])
    def test_tier_adds_its_points(self, make_session, tier: int) -> None:
        """Any tier on an ordinary item adds exactly its value."""
        session = make_session()
        session.go_next(0)  # move off the first item

        session.go_next(tier)

        assert session.total_score == tier
        assert session.current_index == 2

    def test_tier_one_does_not_shade_ordinary_item(self, make_session) -> None:
        session = make_session()
        session.go_next(1)
        assert session.shaded_score == 0

    def test_tier_one_shades_ninth_item(self, make_session, answer) -> None:
        """Tier 1 on the ninth item (index 8) counts as shaded."""
        session = answer(make_session(), [0] * 8)
        session.go_next(1)

        assert session.total_score == 1
        assert session.shaded_score == 1

    @pytest.mark.parametrize("tier", [2, 3])
    @pytest.mark.parametrize("index", [0, 4, 8])
    def test_high_tiers_shade_anywhere(self, make_session, answer, tier: int, index: int) -> None:
        session = answer(make_session(), [0] * index)
        session.go_next(tier)
        assert session.shaded_score == 1

    def test_no_answer_leaves_state_unchanged(self, make_session) -> None:
        session = make_session()
        session.go_next(2)

        with pytest.raises(NoAnswerSelected) as exc:
            session.go_next(None)

        assert exc.value.index == 1
        assert session.current_index == 1
        assert session.total_score == 2
        assert session.shaded_score == 1

    def test_out_of_range_tier_rejected(self, make_session) -> None:
        session = make_session()
        with pytest.raises(ValueError):
            session.go_next(4)
        assert session.current_index == 0


class TestPreviousNavigation:
    """Going back moves the cursor only."""

    def test_previous_at_start_is_noop(self, make_session) -> None:
        session = make_session()
        view = session.go_previous()

        assert session.current_index == 0
        assert isinstance(view, QuestionView)
        assert view.index == 0

    def test_previous_keeps_scores(self, make_session, answer) -> None:
        session = answer(make_session(), [2, 3])

        view = session.go_previous()

        assert session.current_index == 1
        assert view.text == session.questions[1].text
        assert session.total_score == 5
        assert session.shaded_score == 2

    def test_reanswering_accumulates(self, make_session, answer) -> None:
        """Scores are not reverted, so answering again adds again."""
        session = answer(make_session(), [2, 3])
        session.go_previous()
        session.go_next(1)

        assert session.total_score == 6
        assert session.current_index == 2

    def test_previous_from_tenth_restores_default_choices(self, make_session, answer) -> None:
        session = answer(make_session(), [1] + [0] * 8)
        assert session.display.is_tenth

        view = session.go_previous()

        assert view.index == 8
        assert not view.is_tenth
        assert view.choices == session.choices


class TestTenthQuestion:
    """Conditional tenth (functional impact) question."""

    def test_all_zero_skips_tenth_and_finishes(self, make_session, answer) -> None:
        session = answer(make_session(), [0] * 9)

        assert session.finished
        assert session.display == SurveyResult(0, "No Severity", False)

    def test_nonzero_total_shows_tenth(self, make_session, answer, phq9_meta) -> None:
        session = answer(make_session(), [3] + [0] * 8)

        view = session.display
        assert isinstance(view, QuestionView)
        assert view.is_tenth
        assert view.text == phq9_meta["tenth_question"]["text"]
        assert list(view.choices) == phq9_meta["tenth_question"]["choices"]

    def test_tenth_requires_an_answer(self, make_session, answer) -> None:
        session = answer(make_session(), [3] + [0] * 8)
        with pytest.raises(NoAnswerSelected):
            session.go_next(None)
        assert not session.finished

    @pytest.mark.parametrize("tier", [0, 1, 2, 3])
    def test_tenth_answer_adds_nothing(self, make_session, answer, tier: int) -> None:
        session = answer(make_session(), [3] + [0] * 8)
        result = session.go_next(tier)

        assert isinstance(result, SurveyResult)
        assert result.total_score == 4  # 3 raw + 1 shaded

    def test_missing_tenth_definition_finishes_at_ninth(self, participant) -> None:
        questions = [Question(f"q{i}") for i in range(9)]
        session = SurveySession(participant, questions, ["a", "b", "c", "d"])
        for _ in range(9):
            session.go_next(2)

        assert session.finished
        assert session.result.total_score == 18 + 9


class TestFinalization:
    """Result values for complete runs."""

    def test_all_threes(self, make_session, answer) -> None:
        session = answer(make_session(), [3] * 9)
        assert session.total_score == 27
        assert session.shaded_score == 9

        result = session.go_next(0)

        assert result == SurveyResult(36, "Severe Depression", True)
        assert session.total_score == 36

    def test_single_three(self, make_session, answer) -> None:
        session = answer(make_session(), [0, 0, 3, 0, 0, 0, 0, 0, 0])
        assert session.total_score == 3
        assert session.shaded_score == 1

        result = session.go_next(0)

        assert result.total_score == 4
        assert result.severity == "Moderate Depression"
        assert result.advisory is False

    def test_advisory_at_four_shaded(self, make_session, answer) -> None:
        session = answer(make_session(), [2, 2, 2, 2, 0, 0, 0, 0, 0, 0])
        assert session.result == SurveyResult(12, "Moderate Depression", True)

    def test_finished_is_terminal(self, make_session, answer) -> None:
        session = answer(make_session(), [3] * 10)
        result = session.result

        assert session.go_next(3) is result
        assert session.go_previous() is result
        assert session.total_score == 36
        assert session.current_index == 10

    def test_empty_question_list_finishes_immediately(self, participant) -> None:
        session = SurveySession(participant, [], ["a", "b", "c", "d"], TenthQuestion("x", ("1", "2", "3", "4")))

        assert session.finished
        assert session.result == SurveyResult(0, "None", False)


class TestPresentation:
    """Greeting, progress and answer review."""

    def test_greeting(self, make_session, phq9_meta) -> None:
        assert make_session().greeting(phq9_meta["strings"]) == "Hello Ann."

    def test_progress(self, make_session, answer) -> None:
        session = make_session()
        assert session.progress_percent() == 11

        answer(session, [0] * 4)
        assert session.progress_percent() == 55

        answer(session, [1] * 5)
        assert session.display.is_tenth
        assert session.progress_percent() == 100

    def test_answer_rows_keep_latest_answer(self, make_session, answer, phq9_meta) -> None:
        session = answer(make_session(), [2, 3])
        session.go_previous()
        session.go_next(0)

        rows = session.answer_rows()

        assert [r["no"] for r in rows] == [1, 2]
        assert rows[1]["response_label"] == "Not at all"
        assert rows[1]["response_score"] == 0
        assert rows[0]["question"] == phq9_meta["items"][0]

    def test_tenth_answer_row_scores_zero(self, make_session, answer) -> None:
        session = answer(make_session(), [3] + [0] * 8 + [2])
        last = session.answer_rows()[-1]

        assert last["no"] == 10
        assert last["response_label"] == "Very difficult"
        assert last["response_score"] == 0
