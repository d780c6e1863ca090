"""Tests for the background mail queue."""

import asyncio
from datetime import datetime, timezone
from typing import ClassVar

import pytest

from meetapp.core.errors import DispatchError
from meetapp.workers.jobs import InscriptionMailJob, MailJob, MeetupSnapshot, UserSnapshot
from meetapp.workers.mail_queue import MailQueue


def inscription_job() -> InscriptionMailJob:
    return InscriptionMailJob(
        meetup=MeetupSnapshot(
            id=1,
            title="Python Meetup",
            location="Main Street 42",
            date=datetime(2026, 10, 20, 18, 0, tzinfo=timezone.utc),
        ),
        organizer=UserSnapshot(id=1, name="Olivia Organizer", email="olivia@meetapp.com"),
        subscriber=UserSnapshot(id=2, name="Arthur Attendee", email="arthur@meetapp.com"),
    )


class UnknownJob(MailJob):
    key: ClassVar[str] = "Unknown"


class FlakyHandler:
    """Fails the first ``failures`` calls, then succeeds."""

    def __init__(self, failures: int = 0):
        self.failures = failures
        self.calls: list[MailJob] = []

    async def __call__(self, job: MailJob) -> None:
        self.calls.append(job)
        if len(self.calls) <= self.failures:
            raise ConnectionError("smtp down")


async def start_worker(queue: MailQueue) -> asyncio.Task:
    queue.start()
    return asyncio.create_task(queue.run())


async def stop_worker(queue: MailQueue, task: asyncio.Task) -> None:
    await queue.stop()
    task.cancel()
    await task


@pytest.mark.asyncio
async def test_submit_does_not_run_job_inline():
    queue = MailQueue(retry_delay=0)
    handler = FlakyHandler()
    queue.register(InscriptionMailJob, handler)
    queue.start()

    queue.submit(inscription_job())

    assert handler.calls == []
    task = asyncio.create_task(queue.run())
    await queue.drain()
    assert len(handler.calls) == 1
    await stop_worker(queue, task)


@pytest.mark.asyncio
async def test_failed_job_is_retried():
    queue = MailQueue(max_attempts=3, retry_delay=0)
    handler = FlakyHandler(failures=1)
    queue.register(InscriptionMailJob, handler)
    task = await start_worker(queue)

    queue.submit(inscription_job())
    await queue.drain()

    assert len(handler.calls) == 2
    await stop_worker(queue, task)


@pytest.mark.asyncio
async def test_job_gives_up_after_max_attempts():
    queue = MailQueue(max_attempts=3, retry_delay=0)
    handler = FlakyHandler(failures=10)
    queue.register(InscriptionMailJob, handler)
    task = await start_worker(queue)

    queue.submit(inscription_job())
    await queue.drain()

    assert len(handler.calls) == 3
    await stop_worker(queue, task)


@pytest.mark.asyncio
async def test_submit_requires_running_queue():
    queue = MailQueue()
    queue.register(InscriptionMailJob, FlakyHandler())

    with pytest.raises(DispatchError):
        queue.submit(inscription_job())


@pytest.mark.asyncio
async def test_submit_rejects_unregistered_job():
    queue = MailQueue()
    queue.start()

    with pytest.raises(DispatchError):
        queue.submit(UnknownJob())


@pytest.mark.asyncio
async def test_submit_rejects_when_full():
    queue = MailQueue(max_size=1)
    queue.register(InscriptionMailJob, FlakyHandler())
    queue.start()

    queue.submit(inscription_job())
    with pytest.raises(DispatchError):
        queue.submit(inscription_job())


def test_explicit_zero_attempts_is_kept():
    assert MailQueue(max_attempts=0).max_attempts == 0


@pytest.mark.asyncio
async def test_single_attempt_is_not_retried():
    queue = MailQueue(max_attempts=1, retry_delay=0)
    handler = FlakyHandler(failures=10)
    queue.register(InscriptionMailJob, handler)
    task = await start_worker(queue)

    queue.submit(inscription_job())
    await queue.drain()

    assert len(handler.calls) == 1
    await stop_worker(queue, task)
