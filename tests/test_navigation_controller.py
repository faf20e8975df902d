"""
Tests for the Navigation Controller

Verifies:
1. Initial position and history
2. Forward moves, early termination and end of sequence
3. Backward moves restoring the previous answer
4. Pruning of answers that fall out of the sequence
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from eligibility.errors import InvalidAnswerError, InvalidSnapshotError
from eligibility.navigation import AdvanceResult, NavigationController, RetreatResult


@pytest.fixture
def nav():
    return NavigationController()


class TestInitialState:

    def test_starts_at_first_question(self, nav):
        assert nav.position == 0
        assert nav.history == [0]
        assert nav.answers == {}
        assert nav.current_question().id == "has-tin"
        assert nav.selected_value is None

    def test_is_at_start(self, nav):
        assert nav.is_at_start()
        assert not nav.is_last_question()


class TestAdvance:

    def test_moves_forward(self, nav):
        assert nav.advance("yes") == AdvanceResult.MOVED
        assert nav.position == 1
        assert nav.history == [0, 1]
        assert nav.current_question().id == "applicant-type"
        assert nav.answers == {"has-tin": "yes"}
        assert nav.selected_value is None

    def test_no_tin_terminates_early(self, nav):
        assert nav.advance("no") == AdvanceResult.EARLY_TERMINATION
        assert nav.history == [0]
        assert nav.answers == {"has-tin": "no"}

    def test_property_owner_terminates_early(self, nav):
        nav.advance("yes")
        assert nav.advance("property-owner") == AdvanceResult.EARLY_TERMINATION
        assert nav.history == [0, 1]

    def test_sequence_end(self, nav):
        for value in ("yes", "organization", "no", "no"):
            assert nav.advance(value) == AdvanceResult.MOVED
        assert nav.current_question().id == "declare-property"
        assert nav.is_last_question()
        assert nav.advance("no") == AdvanceResult.SEQUENCE_END
        assert nav.position == 4

    def test_empty_value_rejected(self, nav):
        with pytest.raises(InvalidAnswerError):
            nav.advance("")
        assert nav.answers == {}
        assert nav.history == [0]

    def test_unknown_value_rejected(self, nav):
        with pytest.raises(InvalidAnswerError) as exc_info:
            nav.advance("perhaps")
        assert exc_info.value.question_id == "has-tin"
        assert isinstance(exc_info.value, ValueError)


class TestRetreat:

    def test_exit_at_start(self, nav):
        assert nav.retreat() == RetreatResult.EXIT
        assert nav.history == [0]

    def test_moves_back_and_restores_selection(self, nav):
        nav.advance("yes")
        nav.advance("sole-proprietor")
        assert nav.retreat() == RetreatResult.MOVED_BACK
        assert nav.position == 1
        assert nav.current_question().id == "applicant-type"
        assert nav.selected_value == "sole-proprietor"

    def test_retreat_keeps_answers(self, nav):
        nav.advance("yes")
        nav.advance("organization")
        nav.retreat()
        nav.retreat()
        assert nav.answers == {"has-tin": "yes", "applicant-type": "organization"}
        assert nav.selected_value == "yes"
        assert nav.is_at_start()

    def test_history_top_is_current_position(self, nav):
        for value in ("yes", "sole-proprietor", "yes"):
            nav.advance(value)
            assert nav.history[-1] == nav.position
        nav.retreat()
        assert nav.history[-1] == nav.position == 2


class TestAnswerPruning:

    def test_changed_applicant_type_drops_stale_answers(self, nav):
        for value in ("yes", "sole-proprietor", "yes", "yes"):
            nav.advance(value)
        nav.retreat()
        nav.retreat()
        nav.retreat()
        nav.advance("organization")
        answers = nav.answers
        assert "register-business" not in answers
        # Still part of the organization sequence
        assert answers["has-branches"] == "yes"
        assert nav.current_question().id == "has-owners"

    def test_not_registering_business_drops_branches(self, nav):
        for value in ("yes", "sole-proprietor", "yes", "yes"):
            nav.advance(value)
        nav.retreat()
        nav.retreat()
        nav.advance("no")
        assert "has-branches" not in nav.answers
        assert nav.current_question().id == "declare-property"

    def test_path_answers(self, nav):
        for value in ("yes", "organization", "yes"):
            nav.advance(value)
        nav.retreat()
        nav.retreat()
        assert nav.path_answers() == {"has-tin": "yes", "applicant-type": "organization"}

    def test_load_snapshot(self, nav):
        nav.load({"has-tin": "yes", "applicant-type": "organization"}, [0, 1])
        assert nav.position == 1
        assert nav.selected_value == "organization"

    def test_load_rejects_history_past_relevant_list(self, nav):
        # has-tin, applicant-type and declare-property only
        with pytest.raises(InvalidSnapshotError):
            nav.load({"has-tin": "yes"}, [0, 1, 2, 5])
        assert nav.position == 0
        assert nav.answers == {}

    def test_load_rejects_unordered_history(self, nav):
        with pytest.raises(InvalidSnapshotError):
            nav.load({"has-tin": "yes", "applicant-type": "organization"}, [0, 2, 1])
        with pytest.raises(InvalidSnapshotError):
            nav.load({"has-tin": "yes"}, [1])

    def test_load_empty_history_starts_over(self, nav):
        nav.load({"has-tin": "yes"}, [])
        assert nav.history == [0]
        assert nav.selected_value == "yes"
