"""Change notification bus — payload-free broadcast fired after every cart write.

Observers (header badge, cart drawer, checkout summary) subscribe independently
and re-read the cart store when signalled. The bus knows nothing about them
beyond the callables they registered.
"""

from collections.abc import Callable

import structlog

logger = structlog.get_logger(__name__)

Listener = Callable[[], None]


class Subscription:
    """Handle returned by ``ChangeBus.subscribe``; detaches the listener on ``unsubscribe``."""

    def __init__(self, bus: "ChangeBus", listener: Listener):
        self._bus = bus
        self.listener = listener
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._bus._detach(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


class ChangeBus:
    def __init__(self):
        self._subscriptions: list[Subscription] = []

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, listener: Listener) -> Subscription:
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        return subscription

    def _detach(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def emit(self) -> None:
        """Signal every current subscriber once.

        Subscribers added or removed while the signal is being delivered take
        effect from the next emit. A failing listener is logged and the rest
        still receive the signal.
        """
        for subscription in list(self._subscriptions):
            try:
                subscription.listener()
            except Exception:
                logger.exception("Cart change listener failed", listener=repr(subscription.listener))
