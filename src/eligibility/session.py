"""Questionnaire Session.

Orchestrates the catalog, relevance filter, navigation controller and
decision table for one applicant.

State machine::

    IN_PROGRESS -> IN_PROGRESS   (answer recorded, next question)
    IN_PROGRESS -> BLOCKED       (no TIN)
    IN_PROGRESS -> COMPLETED     (last question answered or early termination)
    BLOCKED     -> IN_PROGRESS   (applicant revisits the TIN question)

COMPLETED and BLOCKED accept no answers. BLOCKED can step back to the TIN
question; COMPLETED only leaves through ``restart()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union
import uuid

from config.settings import QuestionnaireSettings, get_settings
from eligibility.errors import SessionTransitionError
from eligibility.navigation import AdvanceResult, NavigationController, RetreatResult
from eligibility.question_catalog import Option, Question
from eligibility.routing import Blocked, RoutingResult, decide
from services.logging_config import get_logger


class SessionStatus(str, Enum):
    """Lifecycle status of a questionnaire session."""
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    COMPLETED = "completed"


class GoBackResult(str, Enum):
    """Outcome of ``QuestionnaireSession.go_back``."""
    MOVED_BACK = "moved_back"
    RESUMED = "resumed"
    EXIT = "exit"


@dataclass(frozen=True)
class InProgress:
    """Reported by ``result()`` while questions remain."""
    question_id: str
    position: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": SessionStatus.IN_PROGRESS.value,
            "question_id": self.question_id,
            "position": self.position,
        }


SessionOutcome = Union[RoutingResult, Blocked, InProgress]


class QuestionnaireSession:
    """
    One applicant's pass through the eligibility questionnaire.

    Sessions share no state and do no I/O; ``export_state`` returns a plain
    dictionary the caller may persist as a draft.
    """

    def __init__(
        self,
        catalog: Optional[Sequence[Question]] = None,
        settings: Optional[QuestionnaireSettings] = None,
        session_id: Optional[str] = None,
    ):
        self._catalog = catalog
        self._settings = settings or get_settings().questionnaire
        self.session_id = session_id or str(uuid.uuid4())
        self._logger = get_logger(__name__, session_id=self.session_id)
        self._reset_state()
        self._logger.info("Questionnaire session started")

    def _reset_state(self) -> None:
        self._navigation = NavigationController(self._catalog)
        self._status = SessionStatus.IN_PROGRESS
        self._outcome: Optional[Union[RoutingResult, Blocked]] = None
        self.started_at = datetime.now().isoformat()
        self.last_activity = self.started_at

    # Read-only views

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def answers(self) -> Dict[str, str]:
        return self._navigation.answers

    @property
    def history(self) -> List[int]:
        return self._navigation.history

    @property
    def selected_value(self) -> Optional[str]:
        return self._navigation.selected_value

    def current_question(self) -> Optional[Question]:
        """The question on screen, or None once the session has completed."""
        if self._status == SessionStatus.COMPLETED:
            return None
        return self._navigation.current_question()

    def displayed_options(self) -> List[Option]:
        """Options to render for the current question."""
        question = self.current_question()
        if question is None:
            return []
        return question.displayed_options(
            include_hidden=self._settings.show_property_owner_option
        )

    def relevant_questions(self) -> List[Question]:
        return self._navigation.relevant()

    def is_at_start(self) -> bool:
        return self._navigation.is_at_start()

    def is_last_question(self) -> bool:
        return self._navigation.is_last_question()

    def result(self) -> SessionOutcome:
        """Current outcome: a routing result, the blocked state, or in progress."""
        if self._outcome is not None:
            return self._outcome
        return InProgress(
            question_id=self._navigation.current_question().id,
            position=self._navigation.position,
        )

    def get_progress(self) -> Dict[str, Any]:
        """Question N of M over the currently relevant questions."""
        total = len(self._navigation.relevant())
        number = min(self._navigation.position + 1, total)
        if self._status == SessionStatus.COMPLETED:
            percentage = 100.0
        else:
            percentage = number / total * 100 if total else 0.0
        return {
            "status": self._status.value,
            "question_number": number,
            "total_questions": total,
            "answered_questions": len(self._navigation.answers),
            "percentage_complete": percentage,
        }

    # Transitions

    def submit_answer(self, value: str) -> SessionOutcome:
        """Record an answer for the current question and advance."""
        if self._status != SessionStatus.IN_PROGRESS:
            raise SessionTransitionError(
                f"Cannot answer while session is {self._status.value}"
            )

        question = self._navigation.current_question()
        advance = self._navigation.advance(value)
        self.last_activity = datetime.now().isoformat()
        self._logger.info(
            "Answer recorded",
            extra={"extra_data": {"question_id": question.id, "value": value}},
        )

        if advance == AdvanceResult.MOVED:
            return self.result()

        if advance == AdvanceResult.EARLY_TERMINATION:
            self._logger.info(
                "Early termination",
                extra={"extra_data": {"question_id": question.id, "value": value}},
            )

        outcome = decide(self._navigation.path_answers())
        if isinstance(outcome, Blocked):
            self._status = SessionStatus.BLOCKED
            self._logger.warning(
                "Session blocked",
                extra={"extra_data": {"reason": outcome.reason}},
            )
        else:
            self._status = SessionStatus.COMPLETED
            self._logger.info(
                "Session completed",
                extra={"extra_data": {
                    "track": outcome.track.value,
                    "forms": list(outcome.forms),
                }},
            )
        self._outcome = outcome
        return outcome

    def go_back(self) -> GoBackResult:
        """
        Step back one question.

        From BLOCKED this reopens the TIN question with its answer
        pre-selected. At the first question it returns EXIT and the caller
        leaves the questionnaire.
        """
        if self._status == SessionStatus.COMPLETED:
            raise SessionTransitionError("Session is completed; restart to change answers")

        self.last_activity = datetime.now().isoformat()

        if self._status == SessionStatus.BLOCKED:
            if not self._settings.allow_resume_from_blocked:
                raise SessionTransitionError("Resuming a blocked session is disabled")
            self._status = SessionStatus.IN_PROGRESS
            self._outcome = None
            self._navigation.restore_selection()
            self._logger.info("Resumed from blocked state")
            return GoBackResult.RESUMED

        if self._navigation.retreat() == RetreatResult.EXIT:
            self._logger.info("Exit requested at first question")
            return GoBackResult.EXIT
        return GoBackResult.MOVED_BACK

    def restart(self) -> None:
        """Discard all answers and start over."""
        self._reset_state()
        self._logger.info("Questionnaire session restarted")

    # Draft snapshot

    def export_state(self) -> Dict[str, Any]:
        """Export session state for external persistence."""
        return {
            "session_id": self.session_id,
            "status": self._status.value,
            "answers": self._navigation.answers,
            "history": self._navigation.history,
            "started_at": self.started_at,
            "last_activity": self.last_activity,
        }

    def import_state(self, state: Dict[str, Any]) -> None:
        """
        Restore session state exported by ``export_state``.

        Raises:
            InvalidSnapshotError: the history does not fit the answers; the
                session keeps its previous state.
        """
        status = SessionStatus(state.get("status", SessionStatus.IN_PROGRESS.value))
        self._navigation.load(state.get("answers", {}), state.get("history", [0]))
        self._status = status
        self.session_id = state.get("session_id", self.session_id)
        self._logger = get_logger(__name__, session_id=self.session_id)
        self.started_at = state.get("started_at", self.started_at)
        self.last_activity = state.get("last_activity", self.last_activity)

        if self._status == SessionStatus.BLOCKED:
            self._outcome = Blocked()
        elif self._status == SessionStatus.COMPLETED:
            self._outcome = decide(self._navigation.path_answers())
        else:
            self._outcome = None
        self._logger.info("Restored questionnaire state")
