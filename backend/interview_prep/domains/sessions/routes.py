from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...components.analytics.schemas import SessionStats
from ...components.sessions.schemas import (
    AdaptiveSessionParams,
    AdaptiveSessionResult,
    CreateAdaptiveSessionRequest,
    CreateSessionRequest,
    PracticeSession,
    SaveResponseRequest,
    SessionCreateParams,
    StatusUpdateRequest,
)
from ...components.sessions.service import PracticeSessionService
from ...deps import get_session_service

router = APIRouter(prefix="/sessions", tags=["Sessions"])


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Session {session_id} not found")


@router.post("", response_model=PracticeSession, status_code=status.HTTP_201_CREATED)
def create_session(
    data: CreateSessionRequest,
    service: PracticeSessionService = Depends(get_session_service),
):
    params = SessionCreateParams(**data.model_dump(exclude={"user_id"}))
    return service.create_session(data.user_id, params)


@router.post("/adaptive", response_model=AdaptiveSessionResult, status_code=status.HTTP_201_CREATED)
def create_adaptive_session(
    data: CreateAdaptiveSessionRequest,
    service: PracticeSessionService = Depends(get_session_service),
):
    params = AdaptiveSessionParams(**data.model_dump(exclude={"user_id"}))
    return service.create_adaptive_session(data.user_id, params)


@router.get("", response_model=List[PracticeSession])
def list_sessions(
    user_id: str = Query(..., min_length=1),
    service: PracticeSessionService = Depends(get_session_service),
):
    return service.list_user_sessions(user_id)


@router.get("/{session_id}", response_model=PracticeSession)
def get_session(session_id: str, service: PracticeSessionService = Depends(get_session_service)):
    session = service.get_session(session_id)
    if session is None:
        raise _not_found(session_id)
    return session


@router.patch("/{session_id}/status", response_model=PracticeSession)
def update_status(
    session_id: str,
    data: StatusUpdateRequest,
    service: PracticeSessionService = Depends(get_session_service),
):
    session = service.update_session_status(session_id, data.status)
    if session is None:
        raise _not_found(session_id)
    return session


@router.put("/{session_id}/responses", response_model=PracticeSession)
def save_response(
    session_id: str,
    data: SaveResponseRequest,
    service: PracticeSessionService = Depends(get_session_service),
):
    session = service.save_response(session_id, data.question_id, data.response, data.duration_seconds)
    if session is None:
        raise _not_found(session_id)
    return session


@router.get("/{session_id}/stats", response_model=SessionStats)
def get_stats(session_id: str, service: PracticeSessionService = Depends(get_session_service)):
    stats = service.get_session_stats(session_id)
    if stats is None:
        raise _not_found(session_id)
    return stats


@router.get("/{session_id}/export")
def export_session(session_id: str, service: PracticeSessionService = Depends(get_session_service)):
    exported = service.export_session(session_id)
    if exported is None:
        raise _not_found(session_id)
    return exported.to_document()


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str, service: PracticeSessionService = Depends(get_session_service)):
    if not service.delete_session(session_id):
        raise _not_found(session_id)
