"""FastAPI routes for the adaptive interview lifecycle and history."""
from __future__ import annotations

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_engine
from api.schemas import ClearResp, EndReq, RespondReq, RolesResp, StartReq
from catalog.models import Persona
from interview_session.engine import AutoEndSignal, InterviewEngine, RespondResult, StartResult
from interview_session.errors import (
    CourseNotFound,
    DailyLimitReached,
    NoTopicsSelected,
    SessionNotFound,
    UpstreamGenerationFailure,
)
from interview_session.models import InterviewSession, SessionSummary
from services.eligibility import DailyLimitStatus, daily_limit_status
from storage.interviews import clear_interviews_for_course, list_interviews

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/interview")

SESSION_EXPIRED = "Interview session not found or expired"


@router.get("/eligibility", response_model=DailyLimitStatus)
def eligibility(engine: InterviewEngine = Depends(get_engine)) -> DailyLimitStatus:
    return daily_limit_status(active_questions=engine.active_question_count())


@router.get("/personas", response_model=List[Persona])
def personas(engine: InterviewEngine = Depends(get_engine)) -> List[Persona]:
    return engine.catalog.list_personas()


@router.get("/roles", response_model=RolesResp)
def roles(
    course_id: Optional[str] = Query(default=None, alias="courseId"),
    engine: InterviewEngine = Depends(get_engine),
) -> RolesResp:
    catalog = engine.catalog.roles()
    return RolesResp(
        generic_roles=catalog.generic_roles,
        course_roles=catalog.course_roles.get(course_id, []) if course_id else [],
    )


@router.post("/start", response_model=StartResult)
def start(payload: StartReq, engine: InterviewEngine = Depends(get_engine)) -> StartResult:
    try:
        return engine.start(
            payload.course_id,
            payload.selected_topics,
            persona_id=payload.persona_id,
            role_id=payload.role_id,
        )
    except CourseNotFound as exc:
        raise HTTPException(status_code=404, detail="Course not found") from exc
    except NoTopicsSelected as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except DailyLimitReached as exc:
        raise HTTPException(
            status_code=403,
            detail={"error": str(exc), "eligible": False, "daily_limit_reached": True},
        ) from exc
    except UpstreamGenerationFailure as exc:
        logger.error("Interview start failed: %s", exc)
        raise HTTPException(status_code=502, detail="Failed to start interview") from exc


@router.post("/respond", response_model=Union[AutoEndSignal, RespondResult])
def respond(payload: RespondReq, engine: InterviewEngine = Depends(get_engine)) -> Union[AutoEndSignal, RespondResult]:
    try:
        return engine.respond(payload.session_id, payload.message, skipped=payload.skipped)
    except SessionNotFound as exc:
        raise HTTPException(status_code=404, detail=SESSION_EXPIRED) from exc
    except UpstreamGenerationFailure as exc:
        logger.error("Interview turn failed: %s", exc)
        raise HTTPException(status_code=502, detail="Failed to get response") from exc


@router.post("/end", response_model=SessionSummary)
def end(payload: EndReq, engine: InterviewEngine = Depends(get_engine)) -> SessionSummary:
    try:
        return engine.end(payload.session_id)
    except SessionNotFound as exc:
        raise HTTPException(status_code=404, detail=SESSION_EXPIRED) from exc
    except UpstreamGenerationFailure as exc:
        logger.error("Interview summary failed: %s", exc)
        raise HTTPException(status_code=502, detail="Failed to generate summary") from exc


@router.get("/sessions", response_model=List[InterviewSession])
def sessions(course_id: Optional[str] = Query(default=None, alias="courseId")) -> List[InterviewSession]:
    return list_interviews(course_id)


@router.get("/sessions/{session_id}", response_model=InterviewSession)
def session_detail(session_id: str, engine: InterviewEngine = Depends(get_engine)) -> InterviewSession:
    session = engine.find_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.delete("/sessions/course/{course_id}", response_model=ClearResp)
def clear_course_sessions(course_id: str) -> ClearResp:
    removed = clear_interviews_for_course(course_id)
    return ClearResp(removed=removed)
