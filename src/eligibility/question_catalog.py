"""Question Catalog.

Static, ordered definitions of the registration eligibility questions and
the condition evaluator that decides whether a question applies to the
answers given so far.

Conditions are either plain callables ``(answers) -> bool`` or declarative
dictionaries in the same shape the onboarding interview uses::

    {"question_id": "applicant-type", "equals": "organization"}
    {"question_id": "applicant-type", "not_equals": "property-owner"}
    {"or": [cond, cond]}, {"and": [cond, cond]}, {"not": cond}

A condition may only reference questions that come earlier in the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

AnswerMap = Dict[str, str]
Condition = Union[Dict[str, Any], Callable[[Mapping[str, str]], bool]]


# Question ids
HAS_TIN = "has-tin"
APPLICANT_TYPE = "applicant-type"
REGISTER_BUSINESS = "register-business"
HAS_OWNERS = "has-owners"
HAS_BRANCHES = "has-branches"
DECLARE_PROPERTY = "declare-property"

# Answer tokens
YES = "yes"
NO = "no"
SOLE_PROPRIETOR = "sole-proprietor"
ORGANIZATION = "organization"
PROPERTY_OWNER = "property-owner"


@dataclass
class ValidationResult:
    """Result of validation."""
    is_valid: bool
    error_message: Optional[str] = None


@dataclass(frozen=True)
class Option:
    """A selectable answer for a question."""
    value: str
    label: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Question:
    """A single single-choice question in the catalog."""
    id: str
    prompt: str
    options: Tuple[Option, ...]
    help_text: Optional[str] = None

    # Conditional display
    show_if: Optional[Condition] = None

    # Option values defined for routing but not offered in the choice list
    hidden_options: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def option_values(self) -> List[str]:
        return [o.value for o in self.options]

    def is_relevant(self, answers: Mapping[str, str]) -> bool:
        """Whether this question applies given the answers so far."""
        return evaluate_condition(self.show_if, answers, default=True)

    def displayed_options(self, include_hidden: bool = False) -> List[Option]:
        """Options to render, leaving out hidden ones unless asked for."""
        if include_hidden:
            return list(self.options)
        return [o for o in self.options if o.value not in self.hidden_options]

    def get_option(self, value: str) -> Optional[Option]:
        for option in self.options:
            if option.value == value:
                return option
        return None

    def validate(self, answer: Any) -> ValidationResult:
        """Validate an answer against this question's options."""
        if answer is None or answer == "":
            return ValidationResult(False, "Please select an option")
        if answer not in self.option_values:
            return ValidationResult(False, "Please select a valid option")
        return ValidationResult(True)


def evaluate_condition(
    condition: Optional[Condition],
    answers: Mapping[str, str],
    default: bool = True,
) -> bool:
    """Evaluate a condition against a (possibly partial) answer map."""
    if condition is None:
        return default

    if callable(condition):
        return bool(condition(answers))

    if "question_id" in condition:
        actual = answers.get(condition["question_id"])

        if "equals" in condition:
            return actual == condition["equals"]

        if "not_equals" in condition:
            return actual != condition["not_equals"]

        if "in" in condition:
            return actual in condition["in"]

        if condition.get("answered"):
            return actual is not None and actual != ""

    if "and" in condition:
        return all(evaluate_condition(c, answers, default=True) for c in condition["and"])

    if "or" in condition:
        return any(evaluate_condition(c, answers, default=False) for c in condition["or"])

    if "not" in condition:
        return not evaluate_condition(condition["not"], answers, default=True)

    return default


def _yes_no(yes_description: str, no_description: str) -> Tuple[Option, ...]:
    return (
        Option(value=YES, label="Yes", description=yes_description),
        Option(value=NO, label="No", description=no_description),
    )


QUESTION_CATALOG: Tuple[Question, ...] = (
    Question(
        id=HAS_TIN,
        prompt="Do you have a Taxpayer Identification Number (TIN)?",
        help_text="A TIN is issued by the revenue authority and is required before registration.",
        options=_yes_no(
            "I already have a TIN",
            "I do not have a TIN yet",
        ),
    ),
    Question(
        id=APPLICANT_TYPE,
        prompt="Which best describes you?",
        options=(
            Option(
                value=SOLE_PROPRIETOR,
                label="Individual / Sole Proprietor",
                description="I am registering as an individual or a single-owner business",
            ),
            Option(
                value=ORGANIZATION,
                label="Partnership / Corporation / NGO",
                description="I am registering a formal entity with legal documents",
            ),
            Option(
                value=PROPERTY_OWNER,
                label="Residential Property Owner",
                description="I only need to declare residential property",
            ),
        ),
        hidden_options=frozenset({PROPERTY_OWNER}),
    ),
    Question(
        id=REGISTER_BUSINESS,
        prompt="Do you want to register a business as a sole proprietor?",
        show_if={"question_id": APPLICANT_TYPE, "equals": SOLE_PROPRIETOR},
        options=_yes_no(
            "I operate a business under my own name",
            "I am registering as an individual only",
        ),
    ),
    Question(
        id=HAS_OWNERS,
        prompt="Does your organization have owners or shareholders to declare?",
        show_if={"question_id": APPLICANT_TYPE, "equals": ORGANIZATION},
        options=_yes_no(
            "The organization has owners, partners or shareholders",
            "There are no owners or shareholders to declare",
        ),
    ),
    Question(
        id=HAS_BRANCHES,
        prompt="Does your business operate additional branches?",
        help_text="One BR01 form is completed for each additional branch.",
        show_if={
            "or": [
                {"question_id": APPLICANT_TYPE, "equals": ORGANIZATION},
                {
                    "and": [
                        {"question_id": APPLICANT_TYPE, "equals": SOLE_PROPRIETOR},
                        {"question_id": REGISTER_BUSINESS, "equals": YES},
                    ]
                },
            ]
        },
        options=_yes_no(
            "The business operates from more than one location",
            "The business operates from a single location",
        ),
    ),
    Question(
        id=DECLARE_PROPERTY,
        prompt="Do you own residential property that you need to declare?",
        # Property owners are routed straight to the declaration
        show_if={"question_id": APPLICANT_TYPE, "not_equals": PROPERTY_OWNER},
        options=_yes_no(
            "I own residential property that is rented out or must be declared",
            "I have no residential property to declare",
        ),
    ),
)


_QUESTIONS_BY_ID: Dict[str, Question] = {q.id: q for q in QUESTION_CATALOG}


def get_question(question_id: str) -> Question:
    """Look up a catalog question by id. Raises KeyError if unknown."""
    return _QUESTIONS_BY_ID[question_id]
