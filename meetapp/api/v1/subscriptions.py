"""Subscription API endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from meetapp.core.deps import CurrentUserId, DBSession, Dispatcher
from meetapp.schemas.subscription import (
    RejectionDTO,
    SubscribedMeetupDTO,
    SubscriptionCreate,
    SubscriptionDTO,
)
from meetapp.services.admission import Decision
from meetapp.services.booking import BookingService
from meetapp.services.subscription_service import SubscriptionService

router = APIRouter()

REJECTION_STATUS = {
    Decision.ORGANIZER_CONFLICT: status.HTTP_400_BAD_REQUEST,
    Decision.EVENT_PAST: status.HTTP_400_BAD_REQUEST,
    Decision.ALREADY_SUBSCRIBED: status.HTTP_401_UNAUTHORIZED,
    Decision.TIME_SLOT_CONFLICT: status.HTTP_401_UNAUTHORIZED,
}


@router.get("", response_model=list[SubscribedMeetupDTO])
async def get_subscriptions(
    db: DBSession, user_id: CurrentUserId
) -> list[SubscribedMeetupDTO]:
    """List the current user's subscriptions to upcoming meetups."""
    subscriptions = await SubscriptionService(db).list_upcoming(user_id)
    return [SubscribedMeetupDTO.model_validate(s) for s in subscriptions]


@router.post(
    "",
    response_model=SubscriptionDTO,
    responses={
        400: {"model": RejectionDTO},
        401: {"model": RejectionDTO},
        404: {"description": "Meetup not found"},
        503: {"description": "Subscription store unavailable"},
    },
)
async def create_subscription(
    data: SubscriptionCreate,
    db: DBSession,
    user_id: CurrentUserId,
    dispatcher: Dispatcher,
):
    """
    Subscribe the current user to a meetup.

    - **meetup_id**: Meetup to subscribe to
    """
    booking = BookingService.for_session(db, dispatcher)
    result = await booking.book(user_id, data.meetup_id)

    if not result.booked:
        body = RejectionDTO(error=result.decision.message, reason=result.decision.value)
        return JSONResponse(
            status_code=REJECTION_STATUS[result.decision],
            content=body.model_dump(),
        )

    return SubscriptionDTO.model_validate(result.subscription)
