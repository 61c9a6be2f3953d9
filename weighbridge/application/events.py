"""
In-process domain event publisher.

Handlers collect the pending events of an aggregate after it is saved and
hand them here; subscribers registered for an event type are called in
registration order.
"""

import logging
from collections import defaultdict
from collections.abc import Callable, Iterable

from ..domain.shared.base import AggregateRoot, DomainEvent

logger = logging.getLogger(__name__)

EventSubscriber = Callable[[DomainEvent], None]


class DomainEventPublisher:
    """Dispatches domain events to subscribers keyed by event type."""

    def __init__(self) -> None:
        self._subscribers: dict[type[DomainEvent], list[EventSubscriber]] = (
            defaultdict(list)
        )

    def subscribe(
        self, event_type: type[DomainEvent], subscriber: EventSubscriber
    ) -> None:
        """Register a subscriber for an event type and its subclasses."""
        self._subscribers[event_type].append(subscriber)

    def publish(self, event: DomainEvent) -> None:
        """Publish a single domain event."""
        logger.debug(
            "Publishing %s for aggregate %s", event.event_type, event.aggregate_id
        )
        for event_type, subscribers in self._subscribers.items():
            if isinstance(event, event_type):
                for subscriber in subscribers:
                    subscriber(event)

    def publish_batch(self, events: Iterable[DomainEvent]) -> None:
        """Publish multiple domain events in order."""
        for event in events:
            self.publish(event)

    def publish_pending(self, aggregate: AggregateRoot) -> int:
        """Publish and clear the pending events of an aggregate."""
        events = aggregate.get_domain_events()
        self.publish_batch(events)
        aggregate.clear_domain_events()
        return len(events)
