"""
Table Session Endpoints
Session lifecycle and per-session item tabs
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
import uuid

from cuehall.core.database import get_db
from cuehall.core.security import get_current_user
from cuehall.models import Profile, SessionStatus
from cuehall.schemas.session import (
    SessionCostResponse,
    SessionMoveRequest,
    TableSessionCreate,
    TableSessionResponse,
    TrackedItemResponse,
    TrackedItemsRequest,
)
from cuehall.services.session_service import SessionService

router = APIRouter()


@router.post("/", response_model=TableSessionResponse, status_code=201)
def start_session(
    session_data: TableSessionCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """
    Start a session on an available table
    The table becomes OCCUPIED
    """
    return SessionService(db).start_session(
        current_user,
        session_data.table_id,
        staff_id=session_data.staff_id,
        notes=session_data.staff_notes
    )


@router.get("/", response_model=List[TableSessionResponse])
def list_sessions(
    company_id: Optional[uuid.UUID] = None,
    table_id: Optional[uuid.UUID] = None,
    status: Optional[SessionStatus] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """List sessions, newest first"""
    return SessionService(db).list_sessions(current_user, company_id, table_id, status)


@router.get("/{session_id}", response_model=TableSessionResponse)
def get_session(
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return SessionService(db).get_session(current_user, session_id)


@router.post("/{session_id}/end", response_model=TableSessionResponse)
def end_session(
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """End an active session; computes total cost and frees the table"""
    return SessionService(db).end_session(current_user, session_id)


@router.post("/{session_id}/cancel", response_model=TableSessionResponse)
def cancel_session(
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Cancel a session without billing"""
    return SessionService(db).cancel_session(current_user, session_id)


@router.post("/{session_id}/move", response_model=TableSessionResponse)
def move_session(
    session_id: uuid.UUID,
    data: SessionMoveRequest,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Move an active session to another available table"""
    return SessionService(db).move_session(current_user, session_id, data.target_table_id)


@router.delete("/{session_id}")
def delete_session(
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    SessionService(db).delete_session(current_user, session_id)
    return {"message": "Session deleted successfully"}


@router.get("/{session_id}/cost", response_model=SessionCostResponse)
def get_session_cost(
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Running cost of an active session, or the final cost"""
    return SessionService(db).current_cost(current_user, session_id)


@router.get("/{session_id}/items", response_model=List[TrackedItemResponse])
def list_tracked_items(
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return SessionService(db).list_tracked_items(current_user, session_id)


@router.post("/{session_id}/items", response_model=List[TrackedItemResponse])
def add_tracked_items(
    session_id: uuid.UUID,
    data: TrackedItemsRequest,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Add items to the session tab; stock is drawn at checkout"""
    entries = [entry.model_dump() for entry in data.items]
    return SessionService(db).add_tracked_items(current_user, session_id, entries)


@router.delete("/{session_id}/items")
def clear_tracked_items(
    session_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    SessionService(db).clear_tracked_items(current_user, session_id)
    return {"message": "Tracked items cleared"}
