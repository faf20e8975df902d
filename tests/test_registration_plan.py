"""
Tests for the Form Catalog and Registration Plan

Verifies the hand-off from a routing result to the long-form wizard:
track identifiers, step sequences and form metadata.
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from eligibility.registration_plan import (
    FORM_CATALOG,
    build_registration_plan,
    get_form,
    get_progress_percentage,
    get_step_number,
    get_total_steps,
)
from eligibility.routing import (
    BR01,
    OS01,
    RESIDENTIAL_PROPERTY_DECLARATION,
    RF01,
    SP01,
    Track,
    decide,
)


@pytest.fixture
def sole_proprietor_plan():
    return build_registration_plan(decide({
        "has-tin": "yes",
        "applicant-type": "sole-proprietor",
        "register-business": "yes",
        "has-branches": "yes",
        "declare-property": "yes",
    }))


class TestFormCatalog:

    def test_every_form_is_described(self):
        for form_id in (SP01, RF01, OS01, BR01, RESIDENTIAL_PROPERTY_DECLARATION):
            form = get_form(form_id)
            assert form.form_id == form_id
            assert form.title
            assert form.requirements

    def test_unknown_form(self):
        with pytest.raises(KeyError):
            get_form("XX99")

    def test_catalog_size(self):
        assert len(FORM_CATALOG) == 5


class TestBuildPlan:

    def test_sole_proprietorship(self, sole_proprietor_plan):
        plan = sole_proprietor_plan
        assert plan.track == Track.SOLE_PROPRIETORSHIP
        assert plan.user_type == "SP-01"
        assert plan.entry_point == "sole-proprietorship"
        assert plan.business_type == "sole proprietorship"
        assert plan.has_branches is True
        assert plan.steps == ("entry", "sole-proprietorship", "branch", "property", "review")
        assert plan.completed_steps == ("entry",)
        assert plan.first_step == "sole-proprietorship"

    def test_sole_proprietor_without_forms(self):
        plan = build_registration_plan(decide({
            "has-tin": "yes",
            "applicant-type": "sole-proprietor",
            "register-business": "no",
            "declare-property": "no",
        }))
        assert plan.forms == ()
        assert plan.steps == ("entry", "sole-proprietorship", "review")
        assert plan.completed_steps == ("entry",)
        assert plan.first_step == "sole-proprietorship"

    def test_sole_proprietor_property_only_form(self):
        plan = build_registration_plan(decide({
            "has-tin": "yes",
            "applicant-type": "sole-proprietor",
            "register-business": "no",
            "declare-property": "yes",
        }))
        assert plan.steps == ("entry", "sole-proprietorship", "property", "review")
        assert plan.first_step == "sole-proprietorship"

    def test_partnership_corporation(self):
        plan = build_registration_plan(decide({
            "has-tin": "yes",
            "applicant-type": "organization",
            "has-owners": "yes",
            "has-branches": "no",
            "declare-property": "yes",
        }))
        assert plan.track == Track.PARTNERSHIP_CORPORATION
        assert plan.user_type == "RF-01"
        assert plan.entry_point == "business"
        assert plan.applicant_type == "business"
        assert plan.has_branches is False
        assert plan.steps == ("entry", "business", "property", "review")
        assert plan.first_step == "business"

    def test_property_only(self):
        plan = build_registration_plan(decide({"has-tin": "yes", "applicant-type": "property-owner"}))
        assert plan.track == Track.PROPERTY_ONLY
        assert plan.user_type == "RP-01"
        assert plan.applicant_type == "property-only"
        assert plan.steps == ("property", "review")
        assert plan.completed_steps == ("entry",)
        assert plan.first_step == "property"

    def test_plan_opens_on_track_first_step(self):
        for answers in (
            {"has-tin": "yes", "applicant-type": "sole-proprietor", "register-business": "no"},
            {"has-tin": "yes", "applicant-type": "organization", "has-owners": "no"},
            {"has-tin": "yes", "applicant-type": "property-owner"},
        ):
            plan = build_registration_plan(decide(answers))
            assert plan.first_step == plan.track.first_step

    def test_query_params(self, sole_proprietor_plan):
        assert sole_proprietor_plan.to_query_params() == {"userType": "SP-01"}

    def test_to_dict(self, sole_proprietor_plan):
        data = sole_proprietor_plan.to_dict()
        assert data["route"] == "sole-proprietorship"
        assert data["forms"] == ["SP01", "BR01", "Residential Property Declaration"]
        assert data["first_step"] == "sole-proprietorship"


class TestStepProgress:

    def test_step_numbers(self, sole_proprietor_plan):
        assert get_step_number(sole_proprietor_plan, "entry") == 1
        assert get_step_number(sole_proprietor_plan, "branch") == 3
        assert get_step_number(sole_proprietor_plan, "review") == 5

    def test_unknown_step_counts_as_first(self, sole_proprietor_plan):
        assert get_step_number(sole_proprietor_plan, "fees") == 1

    def test_total_steps(self, sole_proprietor_plan):
        assert get_total_steps(sole_proprietor_plan) == 5

    def test_progress_percentage(self, sole_proprietor_plan):
        assert get_progress_percentage(sole_proprietor_plan, "property") == pytest.approx(80.0)
