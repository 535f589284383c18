"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable, Iterable

import pytest

from survey.models import Participant
from survey.session import SurveySession
from utils.registry import load_survey

ROOT = Path(__file__).resolve().parent.parent
SURVEYS_DIR = ROOT / "surveys"


@pytest.fixture(scope="session")
def phq9_meta() -> dict:
    """The shipped PHQ-9 survey definition."""
    return load_survey("phq9", base=SURVEYS_DIR)


@pytest.fixture
def participant() -> Participant:
    return Participant(name="Ann", id="A-17", date="2023-07-10")


@pytest.fixture
def make_session(participant: Participant, phq9_meta: dict) -> Callable[[], SurveySession]:
    def _make() -> SurveySession:
        return SurveySession.from_definition(participant, phq9_meta)

    return _make


@pytest.fixture
def answer() -> Callable[[SurveySession, Iterable[int]], SurveySession]:
    """Answer consecutive steps with the given tiers."""

    def _answer(session: SurveySession, tiers: Iterable[int]) -> SurveySession:
        for tier in tiers:
            session.go_next(tier)
        return session

    return _answer
