"""Registration Plan.

Describes each registration form and turns a routing result into the
step sequence the surrounding wizard walks through next.

Step sequences by track:
- property-only:            property -> review
- sole-proprietorship:      entry -> sole-proprietorship -> [branch] -> [property] -> review
- partnership-corporation:  entry -> business -> [branch] -> [property] -> review
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from eligibility.routing import (
    BR01,
    OS01,
    RESIDENTIAL_PROPERTY_DECLARATION,
    RF01,
    SP01,
    RoutingResult,
    Track,
)


@dataclass(frozen=True)
class FormDefinition:
    """Descriptive metadata for a registration form."""
    form_id: str
    title: str
    description: str
    requirements: Tuple[str, ...] = ()
    estimated_time: str = ""
    step: str = ""


FORM_CATALOG: Dict[str, FormDefinition] = {
    SP01: FormDefinition(
        form_id=SP01,
        title="Sole Proprietorship Registration (Form SP01)",
        description="For individuals operating a business under their own name.",
        requirements=(
            "Personal identification documents",
            "Proof of address",
            "Bank account information",
            "Business description",
        ),
        estimated_time="15-20 minutes",
        step="sole-proprietorship",
    ),
    RF01: FormDefinition(
        form_id=RF01,
        title="Business Registration (Form RF01)",
        description="For corporations, partnerships and NGOs; requires legal documents.",
        requirements=(
            "Business registration documents",
            "Articles of incorporation",
            "Financial statements",
            "Business address verification",
        ),
        estimated_time="25-30 minutes",
        step="business",
    ),
    OS01: FormDefinition(
        form_id=OS01,
        title="Owners & Shareholders (Form OS01)",
        description="Declares the owners, partners and shareholders of an organization.",
        requirements=("Shareholder/owner information",),
        estimated_time="10 minutes",
        step="business",
    ),
    BR01: FormDefinition(
        form_id=BR01,
        title="Branch Registration Appendix (BR01)",
        description="Complete one BR01 form for each additional branch of your entity.",
        requirements=("Branch address and contact details",),
        estimated_time="5 minutes per branch",
        step="branch",
    ),
    RESIDENTIAL_PROPERTY_DECLARATION: FormDefinition(
        form_id=RESIDENTIAL_PROPERTY_DECLARATION,
        title="Residential Property Declaration",
        description="Declares residential property owned by the applicant.",
        requirements=(
            "Property location and schedule",
            "Construction details",
            "Valuation information",
        ),
        estimated_time="10-15 minutes",
        step="property",
    ),
}


def get_form(form_id: str) -> FormDefinition:
    """Look up form metadata. Raises KeyError for unknown forms."""
    return FORM_CATALOG[form_id]


# Registration data seeded into the surrounding flow per track
_TRACK_ENTRY: Dict[Track, Dict[str, Any]] = {
    Track.SOLE_PROPRIETORSHIP: {
        "entry_point": "sole-proprietorship",
        "applicant_type": "sole-proprietorship",
        "business_type": "sole proprietorship",
    },
    Track.PARTNERSHIP_CORPORATION: {
        "entry_point": "business",
        "applicant_type": "business",
        "business_type": None,
    },
    Track.PROPERTY_ONLY: {
        "entry_point": "individual",
        "applicant_type": "property-only",
        "business_type": None,
    },
}


@dataclass(frozen=True)
class RegistrationPlan:
    """Hand-off from the questionnaire to the long-form registration screens."""
    track: Track
    forms: Tuple[str, ...]
    entry_point: str
    applicant_type: str
    business_type: Optional[str] = None
    has_branches: bool = False
    steps: Tuple[str, ...] = ()
    completed_steps: Tuple[str, ...] = ()

    @property
    def user_type(self) -> str:
        return self.track.user_type

    @property
    def first_step(self) -> str:
        """The first step not already completed."""
        for step in self.steps:
            if step not in self.completed_steps:
                return step
        return "review"

    def to_query_params(self) -> Dict[str, str]:
        return {"userType": self.user_type}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "route": self.track.value,
            "user_type": self.user_type,
            "forms": list(self.forms),
            "entry_point": self.entry_point,
            "applicant_type": self.applicant_type,
            "business_type": self.business_type,
            "has_branches": self.has_branches,
            "steps": list(self.steps),
            "completed_steps": list(self.completed_steps),
            "first_step": self.first_step,
        }


def build_registration_plan(result: RoutingResult) -> RegistrationPlan:
    """Build the downstream registration plan for a routing result."""
    track = result.track
    entry = _TRACK_ENTRY[track]
    has_branches = BR01 in result.forms

    steps: List[str] = []
    if track == Track.PROPERTY_ONLY:
        steps.extend([track.first_step, "review"])
    else:
        steps.extend(["entry", track.first_step])
        if has_branches:
            steps.append("branch")
        if result.needs_property:
            steps.append("property")
        steps.append("review")

    return RegistrationPlan(
        track=track,
        forms=result.forms,
        entry_point=entry["entry_point"],
        applicant_type=entry["applicant_type"],
        business_type=entry["business_type"],
        has_branches=has_branches,
        steps=tuple(steps),
        completed_steps=("entry",),
    )


def get_step_number(plan: RegistrationPlan, step: str) -> int:
    """1-based position of ``step`` in the plan, or 1 if it is not part of it."""
    if step in plan.steps:
        return plan.steps.index(step) + 1
    return 1


def get_total_steps(plan: RegistrationPlan) -> int:
    return len(plan.steps)


def get_progress_percentage(plan: RegistrationPlan, step: str) -> float:
    total = get_total_steps(plan)
    if not total:
        return 0.0
    return get_step_number(plan, step) / total * 100
