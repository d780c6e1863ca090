"""In-process mail queue that runs jobs outside the request cycle."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from loguru import logger

from meetapp.core.config import get_settings
from meetapp.core.errors import DispatchError
from meetapp.workers.jobs import MailJob

settings = get_settings()

JobType = TypeVar("JobType", bound=MailJob)
JobHandler = Callable[[JobType], Awaitable[None]]


class NotificationDispatcher(Protocol):
    """Accepts a job for later execution without running it."""

    def submit(self, job: MailJob) -> None: ...


class MailQueue:
    """Worker for delivering mail jobs in the background.

    ``submit`` only enqueues; ``run`` executes jobs on its own task and retries
    failed handlers up to ``max_attempts`` times.
    """

    def __init__(
        self,
        max_size: int | None = None,
        max_attempts: int | None = None,
        retry_delay: float | None = None,
    ):
        self._queue: asyncio.Queue[tuple[MailJob, int]] = asyncio.Queue(
            maxsize=max_size if max_size is not None else settings.mail_queue_max_size
        )
        self.max_attempts = (
            max_attempts if max_attempts is not None else settings.mail_max_attempts
        )
        self.retry_delay = (
            retry_delay if retry_delay is not None else settings.mail_retry_delay_seconds
        )
        self._handlers: dict[type[MailJob], JobHandler] = {}
        self._running = False
        self._retries: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._running

    def register(self, job_type: type[JobType], handler: JobHandler) -> None:
        """Attach the handler that executes one job kind."""
        self._handlers[job_type] = handler

    def start(self) -> None:
        """Start accepting jobs."""
        self._running = True
        logger.info("Mail queue started")

    async def stop(self) -> None:
        """Stop the worker and abandon pending retries."""
        self._running = False
        for task in list(self._retries):
            task.cancel()
        self._retries.clear()
        logger.info("Mail queue stopped")

    def submit(self, job: MailJob) -> None:
        """Add a job to the queue without waiting for it to run."""
        if not self._running:
            raise DispatchError(f"Mail queue is not running, dropped {job.key}")
        if type(job) not in self._handlers:
            raise DispatchError(f"No handler registered for {job.key}")

        try:
            self._queue.put_nowait((job, 1))
        except asyncio.QueueFull as e:
            raise DispatchError(f"Mail queue is full, dropped {job.key}") from e

        logger.debug(f"Queued {job.key} job")

    async def run(self) -> None:
        """Run the worker (blocking)."""
        self.start()

        try:
            while self._running:
                try:
                    job, attempt = await asyncio.wait_for(
                        self._queue.get(),
                        timeout=1.0,
                    )
                except asyncio.TimeoutError:
                    continue

                try:
                    await self._process(job, attempt)
                finally:
                    self._queue.task_done()
        except asyncio.CancelledError:
            pass
        finally:
            await self.stop()

    async def drain(self) -> None:
        """Wait until every queued job, retries included, has been processed."""
        while True:
            await self._queue.join()
            if not self._retries:
                return
            await asyncio.gather(*self._retries, return_exceptions=True)

    async def _process(self, job: MailJob, attempt: int) -> None:
        handler = self._handlers[type(job)]
        try:
            await handler(job)
        except Exception as e:
            if attempt >= self.max_attempts:
                logger.error(f"{job.key} job failed after {attempt} attempts: {e}")
                return

            logger.warning(f"{job.key} job attempt {attempt} failed, retrying: {e}")
            task = asyncio.create_task(self._requeue(job, attempt + 1))
            self._retries.add(task)
            task.add_done_callback(self._retries.discard)
            return

        logger.info(f"{job.key} job done")

    async def _requeue(self, job: MailJob, attempt: int) -> None:
        await asyncio.sleep(self.retry_delay)
        await self._queue.put((job, attempt))
