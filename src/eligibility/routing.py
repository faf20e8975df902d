"""Routing Decision Table.

Maps a completed answer set to the registration track and the forms the
applicant must complete. ``decide`` is total: every answer combination,
including ones a well-formed session cannot produce, yields an outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping, Tuple, Union

from eligibility.question_catalog import (
    APPLICANT_TYPE,
    DECLARE_PROPERTY,
    HAS_BRANCHES,
    HAS_OWNERS,
    HAS_TIN,
    NO,
    ORGANIZATION,
    PROPERTY_OWNER,
    REGISTER_BUSINESS,
    SOLE_PROPRIETOR,
    YES,
)


# Form identifiers
SP01 = "SP01"
RF01 = "RF01"
OS01 = "OS01"
BR01 = "BR01"
RESIDENTIAL_PROPERTY_DECLARATION = "Residential Property Declaration"


class Track(str, Enum):
    """Mutually exclusive registration paths."""
    SOLE_PROPRIETORSHIP = "sole-proprietorship"
    PARTNERSHIP_CORPORATION = "partnership-corporation"
    PROPERTY_ONLY = "property-only"

    @property
    def user_type(self) -> str:
        """Value echoed into the ``userType`` query parameter."""
        return {
            Track.SOLE_PROPRIETORSHIP: "SP-01",
            Track.PARTNERSHIP_CORPORATION: "RF-01",
            Track.PROPERTY_ONLY: "RP-01",
        }[self]

    @property
    def first_step(self) -> str:
        """First long-form step the wizard opens for this track."""
        return {
            Track.SOLE_PROPRIETORSHIP: "sole-proprietorship",
            Track.PARTNERSHIP_CORPORATION: "business",
            Track.PROPERTY_ONLY: "property",
        }[self]

    @property
    def display_name(self) -> str:
        return {
            Track.SOLE_PROPRIETORSHIP: "Sole Proprietorship",
            Track.PARTNERSHIP_CORPORATION: "Partnership / Corporation",
            Track.PROPERTY_ONLY: "Residential Property Only",
        }[self]


@dataclass(frozen=True)
class RoutingResult:
    """Base for the three routing outcomes."""
    track: ClassVar[Track]

    forms: Tuple[str, ...]
    description: str

    @property
    def needs_property(self) -> bool:
        return RESIDENTIAL_PROPERTY_DECLARATION in self.forms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "route": self.track.value,
            "forms": list(self.forms),
            "description": self.description,
            "has_owners": getattr(self, "has_owners", False),
            "has_branches": getattr(self, "has_branches", False),
            "needs_property": self.needs_property,
        }


@dataclass(frozen=True)
class SoleProprietorship(RoutingResult):
    track: ClassVar[Track] = Track.SOLE_PROPRIETORSHIP

    registers_business: bool = False
    has_branches: bool = False


@dataclass(frozen=True)
class PartnershipCorporation(RoutingResult):
    track: ClassVar[Track] = Track.PARTNERSHIP_CORPORATION

    has_owners: bool = False
    has_branches: bool = False


@dataclass(frozen=True)
class PropertyOnly(RoutingResult):
    track: ClassVar[Track] = Track.PROPERTY_ONLY

    forms: Tuple[str, ...] = (RESIDENTIAL_PROPERTY_DECLARATION,)
    description: str = "Residential Property Declaration only"


@dataclass(frozen=True)
class Blocked:
    """The applicant cannot be routed until a prerequisite is met offline."""
    question_id: str = HAS_TIN
    reason: str = "no-tin"
    message: str = (
        "You need a Taxpayer Identification Number (TIN) before registering. "
        "Please obtain a TIN from the revenue authority, then return to "
        "continue your registration."
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "blocked",
            "reason": self.reason,
            "question_id": self.question_id,
            "message": self.message,
        }


Outcome = Union[RoutingResult, Blocked]


# (question id, answer) pairs that settle the outcome as soon as they are given
EARLY_TERMINATIONS: Dict[str, Tuple[str, ...]] = {
    HAS_TIN: (NO,),
    APPLICANT_TYPE: (PROPERTY_OWNER,),
}


def is_early_termination(question_id: str, value: str) -> bool:
    """Whether answering ``question_id`` with ``value`` ends the questionnaire."""
    return value in EARLY_TERMINATIONS.get(question_id, ())


def decide(answers: Mapping[str, str]) -> Outcome:
    """
    Evaluate the decision table.

    Rules are applied in order: property owner, missing TIN, sole
    proprietor, organization, then the sole-proprietorship fallback.
    """
    applicant_type = answers.get(APPLICANT_TYPE)

    if applicant_type == PROPERTY_OWNER:
        return PropertyOnly()

    if answers.get(HAS_TIN) == NO:
        return Blocked()

    wants_property = answers.get(DECLARE_PROPERTY) == YES

    if applicant_type == SOLE_PROPRIETOR:
        return _decide_sole_proprietor(answers, wants_property)

    if applicant_type == ORGANIZATION:
        return _decide_organization(answers, wants_property)

    return SoleProprietorship(
        forms=(SP01, RESIDENTIAL_PROPERTY_DECLARATION),
        description="Sole Proprietorship registration (Form SP01)",
        registers_business=True,
    )


def _decide_sole_proprietor(answers: Mapping[str, str], wants_property: bool) -> SoleProprietorship:
    registers_business = answers.get(REGISTER_BUSINESS) == YES
    has_branches = registers_business and answers.get(HAS_BRANCHES) == YES

    forms: List[str] = []
    if registers_business:
        forms.append(SP01)
        if has_branches:
            forms.append(BR01)
        description = "Sole Proprietorship registration (Form SP01)"
    else:
        description = "No additional form needed"

    if wants_property:
        forms.append(RESIDENTIAL_PROPERTY_DECLARATION)

    return SoleProprietorship(
        forms=tuple(forms),
        description=description,
        registers_business=registers_business,
        has_branches=has_branches,
    )


def _decide_organization(answers: Mapping[str, str], wants_property: bool) -> PartnershipCorporation:
    has_owners = answers.get(HAS_OWNERS) == YES
    has_branches = answers.get(HAS_BRANCHES) == YES

    forms = [RF01]
    if has_owners:
        forms.append(OS01)
    if has_branches:
        forms.append(BR01)
    if wants_property:
        forms.append(RESIDENTIAL_PROPERTY_DECLARATION)

    return PartnershipCorporation(
        forms=tuple(forms),
        description="Partnership / Corporation registration (Form RF01)",
        has_owners=has_owners,
        has_branches=has_branches,
    )
