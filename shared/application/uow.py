"""
Unit of Work Pattern

Wraps a database transaction and guarantees that domain events are
published only after that transaction has committed.
"""

from abc import ABC, abstractmethod
from typing import List

import structlog
from django.db import transaction

from shared.domain.base import DomainEvent

logger = structlog.get_logger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""

    @abstractmethod
    def add_event(self, event: DomainEvent):
        """Queue a domain event for publication after commit"""


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Usage:
        with DjangoUnitOfWork() as uow:
            repository.lock_resource(warehouse_id, resource_type)
            booking = Booking.objects.create(...)
            uow.add_event(BookingAdmitted(...))
            # Transaction commits here
        # Events are published after commit
    """

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._transaction = None

    def __enter__(self):
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def add_event(self, event: DomainEvent):
        self._events.append(event)

    def commit(self):
        """
        Schedule event publishing with transaction.on_commit() so that a
        rolled-back outer transaction never leaks events.
        """
        events = self._events.copy()
        self._events.clear()
        logger.debug("uow.commit", events=len(events))

        if events:
            transaction.on_commit(lambda: self._publish_events(events))

    def rollback(self):
        if self._events:
            logger.warning("uow.rollback", discarded_events=len(self._events))
        self._events.clear()

    def _publish_events(self, events: List[DomainEvent]):
        from shared.application.message_bus import message_bus

        try:
            message_bus.publish_events(events)
        except Exception:
            # Data is already committed; publication failures are left to monitoring
            logger.exception("uow.publish_failed", events=len(events))
