import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from threading import Lock
from typing import Callable, Iterable

from feedback_portal.core import config
from feedback_portal.core.errors import StoreError
from feedback_portal.models.course import Course
from feedback_portal.models.feedback import Feedback
from feedback_portal.models.user import User

logger = logging.getLogger(__name__)

USER_ID_PREFIX = 'user'
COURSE_ID_PREFIX = 'course'
FEEDBACK_ID_PREFIX = 'feedback'


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _id_number(record_id: str, prefix: str) -> int | None:
    head, _, tail = record_id.rpartition('-')
    if head != prefix or not tail.isdigit():
        return None
    return int(tail)


class Store:
    """In-memory home of the users, courses and feedback collections.

    Each collection maps id to record and keeps insertion order. Operations
    run their read-check-write step inside :meth:`operation`, which holds the
    write lock for the step and then waits out the simulated latency.
    """

    def __init__(
        self,
        latency_ms: int | None = None,
        auth_failure_latency_ms: int | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.latency_ms = config.STORE_LATENCY_MS if latency_ms is None else latency_ms
        self.auth_failure_latency_ms = (
            config.STORE_AUTH_FAILURE_LATENCY_MS if auth_failure_latency_ms is None else auth_failure_latency_ms
        )
        self.clock = clock

        self.users: dict[str, User] = {}
        self.courses: dict[str, Course] = {}
        self.feedback: dict[str, Feedback] = {}

        self.lock = Lock()
        self._last_ids = {USER_ID_PREFIX: 0, COURSE_ID_PREFIX: 0, FEEDBACK_ID_PREFIX: 0}

    def now(self) -> datetime:
        return self.clock()

    def next_id(self, prefix: str, collection: dict) -> str:
        while True:
            self._last_ids[prefix] += 1
            candidate = f'{prefix}-{self._last_ids[prefix]}'
            if candidate not in collection:
                return candidate

    def _reserve_id(self, prefix: str, record_id: str) -> None:
        number = _id_number(record_id, prefix)
        if number is not None and number > self._last_ids[prefix]:
            self._last_ids[prefix] = number

    def load(
        self,
        users: Iterable[User] = (),
        courses: Iterable[Course] = (),
        feedback: Iterable[Feedback] = (),
    ) -> None:
        """Bulk insert prepared records, appending in the given order."""
        with self.lock:
            for collection, prefix, records in (
                (self.users, USER_ID_PREFIX, users),
                (self.courses, COURSE_ID_PREFIX, courses),
                (self.feedback, FEEDBACK_ID_PREFIX, feedback),
            ):
                for record in records:
                    if record.id in collection:
                        raise ValueError(f'Duplicate {prefix} id: {record.id}')
                    collection[record.id] = record
                    self._reserve_id(prefix, record.id)

        logger.debug(
            'Loaded %d users, %d courses and %d feedback records.',
            len(self.users), len(self.courses), len(self.feedback),
        )

    def prepend_feedback(self, record: Feedback) -> None:
        self.feedback = {record.id: record, **self.feedback}

    def close(self) -> None:
        with self.lock:
            self.users.clear()
            self.courses.clear()
            self.feedback.clear()

    async def _wait(self, latency_ms: int) -> None:
        if latency_ms > 0:
            await asyncio.sleep(latency_ms / 1000)

    @asynccontextmanager
    async def operation(self, failure_latency_ms: int | None = None):
        # The body runs under a thread lock and must not await.
        try:
            with self.lock:
                yield self
        except StoreError:
            await self._wait(self.latency_ms if failure_latency_ms is None else failure_latency_ms)
            raise
        await self._wait(self.latency_ms)
