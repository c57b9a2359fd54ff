from typing import List, Optional

from fastapi import APIRouter, HTTPException

from ...components.scoring.schemas import Difficulty, InterviewType
from ...components.sessions.schemas import InterviewTemplate, Seniority
from ...components.sessions.templates import available_industries, get_template, list_templates

router = APIRouter(prefix="/templates", tags=["Templates"])


@router.get("", response_model=List[InterviewTemplate])
def get_templates(
    category: Optional[InterviewType] = None,
    difficulty: Optional[Difficulty] = None,
    role: Optional[str] = None,
    industry: Optional[str] = None,
    seniority: Optional[Seniority] = None,
):
    return list_templates(
        category=category,
        difficulty=difficulty,
        role=role,
        industry=industry,
        seniority=seniority,
    )


@router.get("/industries", response_model=List[str])
def get_industries():
    return available_industries()


@router.get("/{template_id}", response_model=InterviewTemplate)
def get_template_by_id(template_id: str):
    template = get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Template {template_id} not found")
    return template
