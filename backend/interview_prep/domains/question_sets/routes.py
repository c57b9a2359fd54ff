from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...components.sessions.question_sets import QuestionSetService
from ...components.sessions.schemas import CreateQuestionSetRequest, QuestionSetParams, UserQuestionSet
from ...deps import get_question_set_service

router = APIRouter(prefix="/question-sets", tags=["Question Sets"])


def _not_found(set_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Question set {set_id} not found")


@router.post("", response_model=UserQuestionSet, status_code=status.HTTP_201_CREATED)
def create_question_set(
    data: CreateQuestionSetRequest,
    service: QuestionSetService = Depends(get_question_set_service),
):
    params = QuestionSetParams(**data.model_dump(exclude={"user_id"}))
    created = service.save_set(data.user_id, params)
    if created is None:
        raise HTTPException(status_code=500, detail="Failed to save question set")
    return created


@router.get("", response_model=List[UserQuestionSet])
def list_question_sets(
    user_id: str = Query(..., min_length=1),
    service: QuestionSetService = Depends(get_question_set_service),
):
    return service.list_sets(user_id)


@router.get("/{set_id}", response_model=UserQuestionSet)
def get_question_set(
    set_id: str,
    user_id: str = Query(..., min_length=1),
    service: QuestionSetService = Depends(get_question_set_service),
):
    question_set = service.get_set(user_id, set_id)
    if question_set is None:
        raise _not_found(set_id)
    return question_set


@router.put("/{set_id}", response_model=UserQuestionSet)
def update_question_set(
    set_id: str,
    data: CreateQuestionSetRequest,
    service: QuestionSetService = Depends(get_question_set_service),
):
    params = QuestionSetParams(**data.model_dump(exclude={"user_id"}))
    updated = service.save_set(data.user_id, params, set_id=set_id)
    if updated is None:
        raise _not_found(set_id)
    return updated


@router.delete("/{set_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question_set(
    set_id: str,
    user_id: str = Query(..., min_length=1),
    service: QuestionSetService = Depends(get_question_set_service),
):
    if not service.delete_set(user_id, set_id):
        raise _not_found(set_id)
