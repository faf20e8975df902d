"""Navigation Controller.

Keeps the answer map, the current position in the relevant question list
and a history stack of visited positions so the applicant can step back
without losing answers.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Sequence

from eligibility.errors import InvalidAnswerError, InvalidSnapshotError
from eligibility.question_catalog import QUESTION_CATALOG, AnswerMap, Question
from eligibility.relevance import relevant_questions
from eligibility.routing import is_early_termination


class AdvanceResult(str, Enum):
    """What happened after an answer was recorded."""
    MOVED = "moved"
    EARLY_TERMINATION = "early_termination"
    SEQUENCE_END = "sequence_end"


class RetreatResult(str, Enum):
    """What happened on a backward step."""
    MOVED_BACK = "moved_back"
    EXIT = "exit"


class NavigationController:
    """
    Position and history over a dynamically filtered question list.

    Invariant: ``history[-1]`` is always the current position.
    """

    def __init__(self, catalog: Optional[Sequence[Question]] = None):
        self._catalog: Sequence[Question] = catalog if catalog is not None else QUESTION_CATALOG
        self._answers: AnswerMap = {}
        self._history: List[int] = [0]
        self._selected_value: Optional[str] = None

    @property
    def position(self) -> int:
        return self._history[-1]

    @property
    def history(self) -> List[int]:
        return list(self._history)

    @property
    def answers(self) -> AnswerMap:
        return dict(self._answers)

    @property
    def selected_value(self) -> Optional[str]:
        """Value to pre-select for the current question, if any."""
        return self._selected_value

    def relevant(self) -> List[Question]:
        return relevant_questions(self._catalog, self._answers)

    def current_question(self) -> Optional[Question]:
        questions = self.relevant()
        if self.position < len(questions):
            return questions[self.position]
        return None

    def is_at_start(self) -> bool:
        return len(self._history) == 1

    def is_last_question(self) -> bool:
        return self.position == len(self.relevant()) - 1

    def advance(self, selected_value: str) -> AdvanceResult:
        """Record the answer to the current question and move forward."""
        question = self.current_question()
        if question is None:
            raise InvalidAnswerError("", selected_value, "No question to answer")

        validation = question.validate(selected_value)
        if not validation.is_valid:
            raise InvalidAnswerError(question.id, selected_value, validation.error_message or "")

        self._answers[question.id] = selected_value
        questions = self.relevant()
        self._prune_answers(questions)
        self._selected_value = selected_value

        if is_early_termination(question.id, selected_value):
            return AdvanceResult.EARLY_TERMINATION

        if self.position >= len(questions) - 1:
            return AdvanceResult.SEQUENCE_END

        self._history.append(self.position + 1)
        self._selected_value = None
        return AdvanceResult.MOVED

    def retreat(self) -> RetreatResult:
        """Step back one question, restoring its previous answer."""
        if len(self._history) <= 1:
            return RetreatResult.EXIT

        self._history.pop()
        question = self.current_question()
        self._selected_value = self._answers.get(question.id) if question else None
        return RetreatResult.MOVED_BACK

    def restore_selection(self) -> None:
        """Pre-select the stored answer for the current question."""
        question = self.current_question()
        self._selected_value = self._answers.get(question.id) if question else None

    def load(self, answers: Dict[str, str], history: List[int]) -> None:
        """
        Replace the state with a previously exported snapshot.

        The history must start at 0, increase strictly and stay inside the
        question list relevant to ``answers``; otherwise nothing is changed.
        """
        history = list(history) or [0]
        total = len(relevant_questions(self._catalog, answers))
        if history[0] != 0 or history[-1] >= total:
            raise InvalidSnapshotError(f"history {history} is outside 0..{total - 1}")
        if any(later <= earlier for earlier, later in zip(history, history[1:])):
            raise InvalidSnapshotError(f"history {history} is not increasing")

        self._answers = dict(answers)
        self._history = history
        self.restore_selection()

    def path_answers(self) -> AnswerMap:
        """Answers to the questions from the start up to the current position."""
        path = self.relevant()[: self.position + 1]
        return {q.id: self._answers[q.id] for q in path if q.id in self._answers}

    def _prune_answers(self, questions: Sequence[Question]) -> None:
        """Drop answers to questions that are no longer part of the sequence."""
        relevant_ids = {q.id for q in questions}
        for question_id in list(self._answers):
            if question_id not in relevant_ids:
                del self._answers[question_id]
