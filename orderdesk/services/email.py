"""Transactional e-mail through Resend."""

from __future__ import annotations

import logging
from html import escape

import resend

from orderdesk.core.config import settings

logger = logging.getLogger(__name__)

MODE_LABELS: dict[str, str] = {
    "delivery": "dostawy",
    "local": "na miejscu",
}
DEFAULT_MODE_LABEL = "na wynos"


def send_email(to: str | list[str], subject: str, *, html: str | None = None, text: str | None = None) -> bool:
    """Send one message; returns False when e-mail is not configured.

    Provider errors propagate so the notification dispatcher can retry them.
    """
    if not settings.resend_api_key:
        logger.warning("[email] RESEND_API_KEY not set; skipping %r", subject)
        return False

    resend.api_key = settings.resend_api_key
    params: dict = {
        "from": settings.mail_from,
        "to": [to] if isinstance(to, str) else list(to),
        "subject": subject,
    }
    if html:
        params["html"] = html
    if text:
        params["text"] = text

    result = resend.Emails.send(params)
    logger.info("[email] sent %r (id=%s)", subject, result.get("id") if isinstance(result, dict) else None)
    return True


def render_order_accepted_html(*, name: str, minutes: float, time_str: str, mode: str) -> str:
    mode_label = MODE_LABELS.get(mode, DEFAULT_MODE_LABEL)
    return (
        f"<p>Dzień dobry {escape(name)},</p>"
        "<p>Twoje zamówienie zostało <b>przyjęte</b>.</p>"
        f"<p>Szacowany czas {mode_label}: <b>{minutes:g} min</b> (ok. {escape(time_str)}).</p>"
        "<p>Dziękujemy za zamówienie.</p>"
    )


def send_order_accepted_email(to: str, *, name: str, minutes: float, time_str: str, mode: str) -> bool:
    html = render_order_accepted_html(name=name, minutes=minutes, time_str=time_str, mode=mode)
    return send_email(to, "Zamówienie przyjęte", html=html)
