"""Meetup API endpoints."""

from fastapi import APIRouter

from meetapp.core.deps import CurrentUserId, DBSession
from meetapp.schemas.meetup import MeetupDTO
from meetapp.services.meetup_service import MeetupService

router = APIRouter()


@router.get("", response_model=list[MeetupDTO])
async def get_meetups(db: DBSession, user_id: CurrentUserId) -> list[MeetupDTO]:
    """List meetups that have not started yet, soonest first."""
    meetups = await MeetupService(db).list_upcoming()
    return [MeetupDTO.model_validate(m) for m in meetups]


@router.get("/{meetup_id}", response_model=MeetupDTO)
async def get_meetup(meetup_id: int, db: DBSession, user_id: CurrentUserId) -> MeetupDTO:
    """Get one meetup."""
    meetup = await MeetupService(db).get_required(meetup_id)
    return MeetupDTO.model_validate(meetup)
