"""Registration Eligibility Module.

Guided questionnaire that routes a taxpayer to the registration forms
they must complete:
- Static question catalog with conditional relevance
- Back/forward navigation over a changing question sequence
- Decision table mapping answers to a registration track and forms
- Registration plan handed to the long-form wizard
"""

from eligibility.errors import (
    InvalidAnswerError,
    InvalidSnapshotError,
    QuestionnaireError,
    SessionTransitionError,
)
from eligibility.question_catalog import (
    QUESTION_CATALOG,
    Option,
    Question,
    ValidationResult,
    evaluate_condition,
    get_question,
)
from eligibility.relevance import relevant_questions
from eligibility.navigation import AdvanceResult, NavigationController, RetreatResult
from eligibility.routing import (
    Blocked,
    PartnershipCorporation,
    PropertyOnly,
    RoutingResult,
    SoleProprietorship,
    Track,
    decide,
)
from eligibility.session import GoBackResult, InProgress, QuestionnaireSession, SessionStatus
from eligibility.registration_plan import (
    FORM_CATALOG,
    FormDefinition,
    RegistrationPlan,
    build_registration_plan,
)

__all__ = [
    "QuestionnaireError",
    "InvalidAnswerError",
    "InvalidSnapshotError",
    "SessionTransitionError",
    "QUESTION_CATALOG",
    "Option",
    "Question",
    "ValidationResult",
    "evaluate_condition",
    "get_question",
    "relevant_questions",
    "AdvanceResult",
    "NavigationController",
    "RetreatResult",
    "Blocked",
    "PartnershipCorporation",
    "PropertyOnly",
    "RoutingResult",
    "SoleProprietorship",
    "Track",
    "decide",
    "GoBackResult",
    "InProgress",
    "QuestionnaireSession",
    "SessionStatus",
    "FORM_CATALOG",
    "FormDefinition",
    "RegistrationPlan",
    "build_registration_plan",
]
