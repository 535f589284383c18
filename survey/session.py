# survey/session.py — question navigation & scoring for one survey run
"""
Linear PHQ-9 walk: nine scored items, an optional tenth (functional impact)
item, then a result.

The tenth item is shown only when the running total is nonzero once the ninth
item has been answered; with an all-zero run the session finalizes straight
away. Going back moves the cursor only: points already added stay added.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from scoring.phq9 import PHQ9Scorer
from survey.models import (
    AnswerRecord,
    AnswerTier,
    NoAnswerSelected,
    Participant,
    Question,
    QuestionView,
    SurveyResult,
    TenthQuestion,
)
from utils.registry import choices_from, load_questions, tenth_question_from

logger = logging.getLogger(__name__)

TENTH_INDEX = 9

Display = Union[QuestionView, SurveyResult]


class SurveySession:
    def __init__(
        self,
        participant: Participant,
        questions: Sequence[Question],
        choices: Sequence[str],
        tenth_question: Optional[TenthQuestion] = None,
        meta: Optional[Dict[str, Any]] = None,
        scorer: Optional[PHQ9Scorer] = None,
    ):
        self.participant = participant
        self.questions = tuple(questions)
        self.choices = tuple(choices)
        self.tenth_question = tenth_question
        self.meta = meta or {}
        self.scorer = scorer or PHQ9Scorer()

        self.current_index = 0
        self.total_score = 0
        self.shaded_score = 0
        self.result: Optional[SurveyResult] = None
        self._answers: Dict[int, AnswerRecord] = {}

        logger.info("Survey session started with %d questions", len(self.questions))
        self._display = self.load_question()

    @classmethod
    def from_definition(cls, participant: Participant, meta: Dict[str, Any]) -> "SurveySession":
        return cls(
            participant,
            load_questions(meta),
            choices_from(meta),
            tenth_question=tenth_question_from(meta),
            meta=meta,
        )

    # ── state ────────────────────────────────────────────────
    @property
    def finished(self) -> bool:
        return self.result is not None

    @property
    def on_tenth_question(self) -> bool:
        return self.current_index == TENTH_INDEX and self.total_score != 0

    @property
    def display(self) -> Display:
        return self._display

    # ── navigation ──────────────────────────────────────────
    def go_next(self, selected: Optional[int]) -> Display:
        if self.finished:
            return self._display
        if selected is None:
            raise NoAnswerSelected(self.current_index)
        tier = AnswerTier(selected)

        view = self._display
        if view.is_tenth:
            # tenth answer is recorded only; its choices carry no points
            label = self._label(view, tier)
            self._answers[self.current_index] = AnswerRecord(self.current_index + 1, view.text, label, 0)
        else:
            points = self.scorer.points(tier)
            self.total_score += points
            if self.scorer.shades(tier, self.current_index):
                self.shaded_score += 1
            self._answers[self.current_index] = AnswerRecord(
                self.current_index + 1, view.text, self._label(view, tier), points
            )

        logger.debug(
            "answered step %d tier=%d total=%d shaded=%d",
            self.current_index + 1, tier, self.total_score, self.shaded_score,
        )
        self.current_index += 1
        self._display = self.load_question()
        return self._display

    def go_previous(self) -> Display:
        if self.finished:
            return self._display
        if self.current_index > 0:
            self.current_index -= 1
            self._display = self.load_question()
        return self._display

    def go_home(self) -> None:
        if not self.finished:
            logger.info("Survey abandoned at step %d", self.current_index + 1)

    def load_question(self) -> Display:
        if self.on_tenth_question and self.tenth_question is not None:
            return QuestionView(
                index=self.current_index,
                text=self.tenth_question.text,
                choices=self.tenth_question.choices,
                is_tenth=True,
            )
        if self.current_index < len(self.questions):
            return QuestionView(
                index=self.current_index,
                text=self.questions[self.current_index].text,
                choices=self.choices,
            )
        return self._finalize()

    def _finalize(self) -> SurveyResult:
        if self.result is None:
            self.result = self.scorer.finalize(self.total_score, self.shaded_score, self.meta)
            self.total_score = self.result.total_score
        return self.result

    # ── presentation helpers ────────────────────────────────
    @staticmethod
    def _label(view: QuestionView, tier: AnswerTier) -> str:
        if int(tier) < len(view.choices):
            return view.choices[int(tier)]
        return str(int(tier))

    def progress_percent(self) -> int:
        if not self.questions:
            return 100
        return min(100, (self.current_index + 1) * 100 // len(self.questions))

    def greeting(self, strings: Optional[Dict[str, str]] = None) -> str:
        hello = (strings or {}).get("hello", "Hello")
        return f"{hello} {self.participant.name}."

    def answer_rows(self) -> List[Dict[str, Any]]:
        return [
            {"no": a.no, "question": a.text, "response_label": a.label, "response_score": a.score}
            for _, a in sorted(self._answers.items())
        ]
