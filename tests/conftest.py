"""Pytest configuration and fixtures for test suite."""

import os
import sys
from pathlib import Path

import pytest

# Set test environment BEFORE any other imports
os.environ.setdefault("APP_ENVIRONMENT", "test")

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def questionnaire_settings():
    """Questionnaire settings with the defaults, independent of the environment."""
    from config.settings import QuestionnaireSettings
    return QuestionnaireSettings(
        show_property_owner_option=False,
        allow_resume_from_blocked=True,
    )


@pytest.fixture
def session(questionnaire_settings):
    """A fresh questionnaire session."""
    from eligibility.session import QuestionnaireSession
    return QuestionnaireSession(settings=questionnaire_settings, session_id="test-session")


def answer_all(session, values):
    """Submit answers in order and return the last outcome."""
    outcome = session.result()
    for value in values:
        outcome = session.submit_answer(value)
    return outcome


@pytest.fixture
def answer():
    """Helper to submit a sequence of answers to a session."""
    return answer_all
