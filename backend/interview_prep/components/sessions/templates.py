"""Built-in interview templates, loaded once from ``interview_templates.json``."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError

from .schemas import InterviewQuestion, InterviewTemplate

TEMPLATES_PATH = Path(__file__).with_name("interview_templates.json")
GENERAL_ROLE = "General"


def load_interview_templates(path: str | Path = TEMPLATES_PATH) -> List[InterviewTemplate]:
    with Path(path).open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Template file must hold a list: {path}")

    templates: List[InterviewTemplate] = []
    seen: set[str] = set()
    for raw in data:
        template_id = raw.get("id", "unknown") if isinstance(raw, dict) else "unknown"
        try:
            template = InterviewTemplate.model_validate(raw)
        except ValidationError as e:
            raise ValueError(f"Invalid interview template {template_id}: {e}") from e
        if template.id in seen:
            raise ValueError(f"Duplicate interview template id: {template.id}")
        seen.add(template.id)
        templates.append(template)
    return templates


@lru_cache(maxsize=1)
def _templates() -> Tuple[InterviewTemplate, ...]:
    return tuple(load_interview_templates())


def list_templates(
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    role: Optional[str] = None,
    industry: Optional[str] = None,
    seniority: Optional[str] = None,
) -> List[InterviewTemplate]:
    """Templates matching every given filter.

    ``role`` is a case-insensitive substring match; general templates match any role.
    """
    matches = []
    for template in _templates():
        if category and template.category != category:
            continue
        if difficulty and template.difficulty != difficulty:
            continue
        if industry and template.industry != industry:
            continue
        if seniority and template.seniority != seniority:
            continue
        if role and role.lower() not in template.role.lower() and template.role != GENERAL_ROLE:
            continue
        matches.append(template.model_copy(deep=True))
    return matches


def get_template(template_id: str) -> Optional[InterviewTemplate]:
    for template in _templates():
        if template.id == template_id:
            return template.model_copy(deep=True)
    return None


def available_industries() -> List[str]:
    return sorted({t.industry for t in _templates() if t.industry})


def template_questions(template: InterviewTemplate) -> List[InterviewQuestion]:
    return [
        q.model_copy(deep=True, update={"origin": q.origin or "template"})
        for q in template.questions
    ]
