"""Transactional base for services: one atomic unit of work per call, new or caller-supplied."""

import copy
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

T = TypeVar("T")

Work = Callable[[AsyncSession], Awaitable[T]]
ErrorHandler = Callable[[Exception], Awaitable[None]]


class TransactionBaseService:
    """
    Services extend this to run their operations through atomic_phase().

    A service bound with with_transaction(session) reuses the caller's session and
    leaves begin/commit/rollback to the caller, so several service calls can be
    composed into one larger transaction.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        logger: logging.Logger,
    ) -> None:
        self._session_factory = session_factory
        self._logger = logger
        self._transaction_session: Optional[AsyncSession] = None

    def with_transaction(self, session: Optional[AsyncSession] = None):
        """Return a clone bound to session, or self when session is None."""
        if session is None:
            return self
        cloned = copy.copy(self)
        cloned._transaction_session = session
        return cloned

    async def atomic_phase(
        self,
        work: Work[T],
        error_handler: Optional[ErrorHandler] = None,
    ) -> T:
        """
        Run work inside a transaction. If error_handler is given it sees the failure
        first and may raise a domain error in its place; if it returns, the original
        error is re-raised unchanged.
        """
        if self._transaction_session is not None:
            try:
                return await work(self._transaction_session)
            except Exception as err:
                await self._handle_error(err, error_handler)
                raise

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    return await work(session)
        except Exception as err:
            await self._handle_error(err, error_handler)
            raise

    async def _handle_error(
        self,
        err: Exception,
        error_handler: Optional[ErrorHandler],
    ) -> None:
        if error_handler is None:
            return
        self._logger.debug(
            "transaction_error_handler",
            extra={"error": f"{type(err).__name__}: {err}"},
        )
        await error_handler(err)
