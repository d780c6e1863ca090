"""Tests for service layer."""

from datetime import timedelta

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from meetapp.core.errors import MeetupNotFoundError, StoreError, SubscriptionConflictError
from meetapp.core.security import read_token_subject
from meetapp.db.types import utc_now
from meetapp.models.subscription import Subscription
from meetapp.models.user import User
from meetapp.services.auth_service import AuthService, LoginFailure
from meetapp.services.meetup_service import MeetupService
from meetapp.services.subscription_service import SubscriptionService
from meetapp.services.user_service import UserService
from tests.conftest import tomorrow_at


@pytest.mark.asyncio
async def test_user_service_create(db_session):
    """Test user creation with a real bcrypt hash."""
    user_service = UserService(db_session)

    user = await user_service.create_user(
        name="New User",
        email="new@meetapp.com",
        password="password123",
    )

    assert user.id is not None
    assert user.hashed_password != "password123"
    assert UserService.password_matches(user, "password123")
    assert not UserService.password_matches(user, "wrong")


@pytest.mark.asyncio
async def test_auth_service_login(db_session, attendee: User):
    """Test auth service login."""
    auth_service = AuthService(db_session)

    result = await auth_service.login("arthur@meetapp.com", "secret123")
    assert result.session is not None
    assert read_token_subject(result.session.token) == attendee.id

    result = await auth_service.login("arthur@meetapp.com", "nope")
    assert result.failure is LoginFailure.WRONG_PASSWORD


@pytest.mark.asyncio
async def test_meetup_service_loads_organizer(db_session, organizer: User, meetup_tomorrow):
    meetup = await MeetupService(db_session).get_by_id(meetup_tomorrow.id)

    assert meetup.organizer.id == organizer.id
    assert meetup.organizer_id == organizer.id


@pytest.mark.asyncio
async def test_meetup_service_get_required(db_session):
    with pytest.raises(MeetupNotFoundError):
        await MeetupService(db_session).get_required(123)


@pytest.mark.asyncio
async def test_meetup_service_list_upcoming(db_session, make_meetup):
    later = await make_meetup(tomorrow_at(20), title="Later")
    sooner = await make_meetup(tomorrow_at(9), title="Sooner")
    await make_meetup(utc_now() - timedelta(days=1), title="Yesterday")

    meetups = await MeetupService(db_session).list_upcoming()

    assert [m.id for m in meetups] == [sooner.id, later.id]


@pytest.mark.asyncio
async def test_find_by_user_at_date_matches_exact_date_only(
    db_session, attendee: User, make_meetup
):
    meetup = await make_meetup(tomorrow_at(18, 15))
    db_session.add(Subscription(user_id=attendee.id, meetup_id=meetup.id))
    await db_session.commit()
    store = SubscriptionService(db_session)

    assert await store.find_by_user_at_date(attendee.id, tomorrow_at(18, 15)) is not None
    assert await store.find_by_user_at_date(attendee.id, tomorrow_at(18)) is None


@pytest.mark.asyncio
async def test_subscription_list_upcoming(db_session, attendee: User, make_meetup):
    past = await make_meetup(utc_now() - timedelta(days=2), title="Past")
    upcoming = await make_meetup(tomorrow_at(18), title="Upcoming")
    for meetup in (past, upcoming):
        db_session.add(Subscription(user_id=attendee.id, meetup_id=meetup.id))
    await db_session.commit()

    subscriptions = await SubscriptionService(db_session).list_upcoming(attendee.id)

    assert [s.meetup.title for s in subscriptions] == ["Upcoming"]


@pytest.mark.asyncio
async def test_insert_duplicate_raises_conflict(db_session, attendee: User, meetup_tomorrow):
    store = SubscriptionService(db_session)
    attendee_id, meetup_id = attendee.id, meetup_tomorrow.id
    await store.insert(attendee_id, meetup_id)

    with pytest.raises(SubscriptionConflictError):
        await store.insert(attendee_id, meetup_id)


@pytest.mark.asyncio
async def test_insert_foreign_key_violation_is_store_error(db_session, attendee: User):
    """Only the unique constraint means "already subscribed"."""
    attendee_id = attendee.id
    await db_session.execute(text("PRAGMA foreign_keys=ON"))
    store = SubscriptionService(db_session)

    with pytest.raises(StoreError) as exc_info:
        await store.insert(attendee_id, 424242)

    assert not isinstance(exc_info.value, SubscriptionConflictError)


class UnavailableStore(SubscriptionService):
    async def create(self, obj):
        raise OperationalError("INSERT INTO subscriptions", {}, Exception("disk I/O error"))


@pytest.mark.asyncio
async def test_insert_database_failure_is_store_error(db_session, attendee: User):
    store = UnavailableStore(db_session)

    with pytest.raises(StoreError) as exc_info:
        await store.insert(attendee.id, 1)

    assert not isinstance(exc_info.value, SubscriptionConflictError)
