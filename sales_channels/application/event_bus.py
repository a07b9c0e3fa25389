"""Event bus: transaction-scoped emission through staged jobs, delivery after commit."""

import asyncio
import copy
import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sales_channels.application.query import FindConfig, build_query
from sales_channels.application.repository import EventPublisher, Repository
from sales_channels.infrastructure.database.models import generate_entity_id

Subscriber = Callable[[Dict[str, Any], str], Awaitable[None]]


class EventBusService:
    """
    Emission bound to a transaction is staged as a row in that transaction and only
    delivered by enqueue_staged_jobs() once committed: a rolled-back transaction
    takes its events with it. Unbound emission is delivered immediately.

    Delivery is at-least-once: broker publish first, then every local subscriber.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        staged_job_repository: Repository,
        logger: logging.Logger,
        publisher: Optional[EventPublisher] = None,
        exchange_name: str = "sales_channel_events",
        batch_size: int = 1000,
    ) -> None:
        self._session_factory = session_factory
        self._staged_jobs = staged_job_repository
        self._logger = logger
        self._publisher = publisher
        self._exchange_name = exchange_name
        self._batch_size = batch_size
        self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)
        self._transaction_session: Optional[AsyncSession] = None
        self._enqueuer_task: Optional[asyncio.Task] = None
        self._enqueuer_stop: Optional[asyncio.Event] = None

    def with_transaction(self, session: Optional[AsyncSession] = None) -> "EventBusService":
        """Clone sharing subscribers and publisher, bound to session."""
        if session is None:
            return self
        cloned = copy.copy(self)
        cloned._transaction_session = session
        return cloned

    def subscribe(self, event_name: str, subscriber: Subscriber) -> None:
        self._subscribers[event_name].append(subscriber)

    def unsubscribe(self, event_name: str, subscriber: Subscriber) -> None:
        handlers = self._subscribers.get(event_name, [])
        if subscriber in handlers:
            handlers.remove(subscriber)

    async def emit(
        self,
        event_name: str,
        data: Dict[str, Any],
        options: Optional[Dict[str, Any]] = None,
    ):
        """
        Bound to a transaction: stage the event there and return the staged job.
        Unbound: deliver now and return None. Delivery errors propagate.
        """
        if self._transaction_session is not None:
            job = self._staged_jobs.create(
                {"event_name": event_name, "data": data, "options": options}
            )
            job = await self._staged_jobs.save(self._transaction_session, job)
            self._logger.info(
                "event_staged",
                extra={"event_name": event_name, "job_id": job.id},
            )
            return job

        await self._deliver(event_name, data, idempotency_key=generate_entity_id("evt"))
        return None

    async def enqueue_staged_jobs(self, limit: Optional[int] = None) -> int:
        """
        Deliver committed staged jobs oldest first and delete them. A broker failure
        rolls the whole batch back so the jobs are retried on the next pass.

        Without a broker only jobs with a local subscriber are taken; the rest stay
        staged for a relay that can deliver them. Rows locked by a concurrent relay
        are skipped.
        """
        selector = None
        if self._publisher is None:
            deliverable = sorted(name for name, handlers in self._subscribers.items() if handlers)
            if not deliverable:
                return 0
            selector = {"event_name": deliverable}

        query = build_query(
            selector,
            FindConfig(
                order={"created_at": "ASC", "id": "ASC"},
                take=limit or self._batch_size,
                skip_locked=True,
            ),
        )
        async with self._session_factory() as session:
            async with session.begin():
                jobs = await self._staged_jobs.find(session, query)
                for job in jobs:
                    await self._deliver(job.event_name, job.data, idempotency_key=job.id)
                    await self._staged_jobs.remove(session, job)

        if jobs:
            self._logger.info("staged_jobs_enqueued", extra={"count": len(jobs)})
        return len(jobs)

    async def _deliver(
        self,
        event_name: str,
        data: Dict[str, Any],
        idempotency_key: str,
    ) -> None:
        if self._publisher is not None:
            await self._publisher.publish(
                self._exchange_name,
                event_name,
                {"event_name": event_name, "data": data},
                idempotency_key,
            )

        for subscriber in list(self._subscribers.get(event_name, [])):
            try:
                await subscriber(data, event_name)
            except Exception as e:
                # One failing subscriber must not starve the others.
                self._logger.error(
                    "subscriber_failed",
                    extra={"event_name": event_name, "error": str(e)},
                )

    # ------------------------------------------------------------------
    # Background relay
    # ------------------------------------------------------------------

    def start_enqueuer(self, interval: float = 5.0) -> None:
        if self._enqueuer_task is not None and not self._enqueuer_task.done():
            return
        self._enqueuer_stop = asyncio.Event()
        self._enqueuer_task = asyncio.create_task(self._run_enqueuer(interval))

    async def stop_enqueuer(self) -> None:
        if self._enqueuer_task is None:
            return
        self._enqueuer_stop.set()
        await self._enqueuer_task
        self._enqueuer_task = None
        self._enqueuer_stop = None

    async def _run_enqueuer(self, interval: float) -> None:
        while not self._enqueuer_stop.is_set():
            try:
                await self.enqueue_staged_jobs()
            except Exception as e:
                self._logger.exception("enqueue_staged_jobs_failed", extra={"error": str(e)})
            try:
                await asyncio.wait_for(self._enqueuer_stop.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass
