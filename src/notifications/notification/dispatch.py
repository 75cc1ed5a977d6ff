"""Order notification dispatcher — announces a new order by email.

Two steps run in order through the mail transport:

1. Operator copy to the shop mailbox: always attempted, always first.
2. Customer copy: only when the customer opted in and gave an address;
   otherwise the step is skipped, which is not an error.

How step outcomes combine is a policy. The default, ``fail_fast``, stops at
the first failed step and reports the whole dispatch as failed, so the
customer copy is never attempted after an operator failure and a customer
failure also fails the dispatch. ``best_effort`` attempts every step and
still reports failure if any of them failed. Neither policy retries.
"""

import asyncio
import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum

import structlog

from notifications.channel import get_transport, smtp_credentials
from notifications.channel.email_port import MailMessage, MailTransport
from notifications.templates import get_template
from ordering.order.order import Order

logger = structlog.get_logger(__name__)

DISPATCH_FAILED = "Failed to send emails"


class StepStatus(Enum):
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class StepResult:
    name: str
    status: StepStatus
    recipient: str | None = None
    message_id: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == StepStatus.FAILED


@dataclass(frozen=True)
class NotificationStep:
    """One send; ``build`` returns None when the step should be skipped."""

    name: str
    build: Callable[[], MailMessage | None]


@dataclass(frozen=True)
class DispatchResult:
    success: bool
    steps: list[StepResult] = field(default_factory=list)
    error: str | None = None


StepRunner = Callable[[NotificationStep], Awaitable[StepResult]]
DispatchPolicy = Callable[[list[NotificationStep], StepRunner], Awaitable[list[StepResult]]]


async def fail_fast(steps: list[NotificationStep], run: StepRunner) -> list[StepResult]:
    """Run steps in order and stop at the first failure."""
    results = []
    for step in steps:
        result = await run(step)
        results.append(result)
        if result.failed:
            break
    return results


async def best_effort(steps: list[NotificationStep], run: StepRunner) -> list[StepResult]:
    """Run every step in order regardless of earlier failures."""
    return [await run(step) for step in steps]


class OrderNotificationDispatcher:
    def __init__(
        self,
        transport: MailTransport,
        operator_address: str,
        sender: str | None = None,
        policy: DispatchPolicy = fail_fast,
        timeout: float | None = None,
        store_name: str = "TLECTRIC",
    ):
        self.transport = transport
        self.operator_address = operator_address
        self.sender = sender or operator_address
        self.policy = policy
        self.timeout = timeout
        self.store_name = store_name

    def _message(self, kind: str, order: Order, to: str) -> MailMessage:
        rendered = get_template(kind).render(order, store_name=self.store_name)
        return MailMessage(
            sender=self.sender,
            to=to,
            subject=rendered["subject"],
            html_body=rendered["html_body"],
        )

    def steps_for(self, order: Order, customer_email: str | None, should_notify_customer: bool) -> list[NotificationStep]:
        email = (customer_email or "").strip()

        def build_customer():
            if not (should_notify_customer and email):
                return None
            return self._message("customer", order, email)

        return [
            NotificationStep("operator", lambda: self._message("operator", order, self.operator_address)),
            NotificationStep("customer", build_customer),
        ]

    async def _run(self, step: NotificationStep) -> StepResult:
        message = None
        try:
            message = step.build()
            if message is None:
                return StepResult(step.name, StepStatus.SKIPPED)
            message_id = await asyncio.wait_for(self.transport.send(message), timeout=self.timeout)
        except Exception as exc:
            error = str(exc) or type(exc).__name__
            recipient = message.to if message else None
            logger.error("Order email failed", step=step.name, to=recipient, error=error)
            return StepResult(step.name, StepStatus.FAILED, recipient=recipient, error=error)

        logger.info("Order email sent", step=step.name, to=message.to, message_id=message_id)
        return StepResult(step.name, StepStatus.SENT, recipient=message.to, message_id=message_id)

    async def dispatch(
        self,
        order: Order,
        customer_email: str | None,
        should_notify_customer: bool,
    ) -> DispatchResult:
        steps = self.steps_for(order, customer_email, should_notify_customer)
        results = await self.policy(steps, self._run)

        if any(result.failed for result in results):
            logger.error("Order notification failed", order_id=order.order_id)
            return DispatchResult(success=False, steps=results, error=DISPATCH_FAILED)

        return DispatchResult(success=True, steps=results)


def dispatcher_from_env(transport: MailTransport | None = None) -> OrderNotificationDispatcher:
    """Build the dispatcher from environment configuration.

    The operator mailbox is the SMTP sender (SMTP_EMAIL); without credentials
    the simulated transport is used and OPERATOR_EMAIL (or a placeholder)
    names the operator.
    """
    credentials = smtp_credentials()
    operator = credentials[0] if credentials else os.environ.get("OPERATOR_EMAIL", "operator@localhost")
    timeout = os.environ.get("MAIL_TIMEOUT_SECONDS", "30")

    return OrderNotificationDispatcher(
        transport=transport or get_transport(),
        operator_address=operator,
        timeout=float(timeout) if timeout else None,
        store_name=os.environ.get("STORE_NAME", "TLECTRIC"),
    )
