"""Relevance filter over the question catalog."""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence

from eligibility.question_catalog import QUESTION_CATALOG, Question


def relevant_questions(
    catalog: Optional[Sequence[Question]] = None,
    answers: Optional[Mapping[str, str]] = None,
) -> List[Question]:
    """
    Get the questions that currently apply, in catalog order.

    The list is rebuilt on every call so that changing an earlier answer
    can add or remove later questions.
    """
    if catalog is None:
        catalog = QUESTION_CATALOG
    answers = answers or {}
    return [q for q in catalog if q.is_relevant(answers)]
