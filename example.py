#!/usr/bin/env python3
"""
Example script showing how to drive the registration questionnaire programmatically
"""
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from config.settings import get_settings
from eligibility import Blocked, QuestionnaireSession, build_registration_plan
from eligibility.registration_plan import get_form
from services.logging_config import configure_logging_from_settings


def run_answers(title, answers):
    """Answer questions in order and print the outcome"""
    print(title)
    print("=" * 60)

    session = QuestionnaireSession()
    outcome = session.result()
    for value in answers:
        question = session.current_question()
        print(f"Q: {question.prompt}")
        print(f"A: {value}")
        outcome = session.submit_answer(value)

    print()
    if isinstance(outcome, Blocked):
        print(f"Blocked: {outcome.message}")
    else:
        print(f"Track: {outcome.track.display_name}")
        print(f"Description: {outcome.description}")
        for form_id in outcome.forms:
            form = get_form(form_id)
            print(f"  - {form.title} ({form.estimated_time})")
        plan = build_registration_plan(outcome)
        print(f"Steps: {' -> '.join(plan.steps)}")
        print(f"Query: {plan.to_query_params()}")
    print()


def main():
    settings = get_settings()
    configure_logging_from_settings(settings)

    print(f"{settings.name} v{settings.version} ({settings.environment})")
    print()

    run_answers(
        "Example 1: Sole proprietor with a branch and property",
        ["yes", "sole-proprietor", "yes", "yes", "yes"],
    )
    run_answers(
        "Example 2: Organization with shareholders",
        ["yes", "organization", "yes", "no", "yes"],
    )
    run_answers(
        "Example 3: Applicant without a TIN",
        ["no"],
    )


if __name__ == "__main__":
    main()
