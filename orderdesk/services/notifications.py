"""Fire-and-forget dispatch of customer and staff notifications.

Jobs run after the response is sent, each with retry and backoff. A job that
still fails is logged as a dead letter; the order transition that triggered it
is never affected.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from typing import Any

from fastapi import BackgroundTasks

from orderdesk.core.config import settings
from orderdesk.db.records import OrderRecord
from orderdesk.services import email as email_service
from orderdesk.services import push as push_service
from orderdesk.services import sms as sms_service
from orderdesk.utils.retry import call_with_retry
from orderdesk.utils.time import format_local_hhmm

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    def __init__(
        self,
        background: BackgroundTasks,
        *,
        retries: int | None = None,
        base_delay: float | None = None,
    ) -> None:
        self._background = background
        self.retries = settings.notify_retries if retries is None else retries
        self.base_delay = settings.notify_retry_delay if base_delay is None else base_delay

    def submit(self, kind: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self._background.add_task(self.run, kind, partial(func, *args, **kwargs))

    def run(self, kind: str, job: Callable[[], Any]) -> None:
        try:
            call_with_retry(job, retries=self.retries, base_delay=self.base_delay, label=kind)
        except Exception:
            logger.error("Dead letter: %s failed after %d attempts", kind, self.retries + 1, exc_info=True)


def get_dispatcher(background_tasks: BackgroundTasks) -> NotificationDispatcher:
    return NotificationDispatcher(background_tasks)


def notify_order_accepted(dispatcher: NotificationDispatcher, order: OrderRecord, minutes: float) -> None:
    """Queue the acceptance e-mail and SMS for whichever contacts the order has."""
    if order.delivery_time is None:
        return
    time_str = format_local_hhmm(order.delivery_time)

    if order.contact_email:
        dispatcher.submit(
            "order_accepted_email",
            email_service.send_order_accepted_email,
            order.contact_email,
            name=order.name or "Kliencie",
            minutes=minutes,
            time_str=time_str,
            mode=order.selected_option or "takeaway",
        )

    if order.phone:
        message = (
            f"{settings.sms_brand}: Zamówienie #{order.id} zaakceptowane. "
            f"Planowany czas: {time_str}. Dziękujemy!"
        )
        dispatcher.submit("order_accepted_sms", sms_service.send_sms, order.phone, message)


def notify_staff_push(dispatcher: NotificationDispatcher, restaurant_id: str, payload: dict[str, str]) -> None:
    dispatcher.submit("push", push_service.send_push_for_restaurant, restaurant_id, payload)
