"""Exceptions raised by the eligibility questionnaire."""


class QuestionnaireError(Exception):
    """Base class for questionnaire errors."""
    pass


class InvalidAnswerError(QuestionnaireError, ValueError):
    """Raised when an answer is empty or not one of the question's options."""

    def __init__(self, question_id: str, value, message: str):
        self.question_id = question_id
        self.value = value
        super().__init__(f"{question_id}: {message}")


class SessionTransitionError(QuestionnaireError):
    """Raised when an action is not allowed in the session's current status."""
    pass


class InvalidSnapshotError(QuestionnaireError, ValueError):
    """Raised when an imported snapshot does not describe a reachable state."""
    pass
