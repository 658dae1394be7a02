"""Outbound SMS through SMSAPI or SerwerSMS."""

from __future__ import annotations

import logging
import re

import httpx

from orderdesk.core.config import settings

logger = logging.getLogger(__name__)

SMS_PROVIDERS = ("smsapi", "serwersms", "none")
_NON_DIGITS_RE = re.compile(r"\D")


class SmsError(Exception):
    """Provider rejected the message or could not be reached."""


def to_msisdn_pl(raw: str | None) -> str | None:
    """Normalize a phone number to ``48XXXXXXXXX``.

    Numbers from other countries pass through when they have at least 10 digits.
    """
    digits = _NON_DIGITS_RE.sub("", str(raw or ""))
    if not digits:
        return None
    if len(digits) == 9:
        return "48" + digits
    if digits.startswith("0048") and len(digits) == 13:
        return digits[2:]
    if digits.startswith("48") and len(digits) == 11:
        return digits
    return digits if len(digits) >= 10 else None


def _send_smsapi(client: httpx.Client, msisdn: str, message: str) -> bool:
    if not settings.smsapi_token:
        logger.warning("[sms] SMSAPI_TOKEN not set; skipping")
        return False

    # test accounts only accept the "Test" sender
    sender = settings.sms_sender_id or ("" if settings.is_production else "Test")
    form = {"to": msisdn, "message": message, "encoding": "utf-8"}
    if sender:
        form["from"] = sender

    response = client.post(
        settings.smsapi_url,
        data=form,
        headers={"Authorization": f"Bearer {settings.smsapi_token}"},
    )
    body = response.text
    # SMSAPI can answer 200 with an "ERROR:<code>" body
    if not response.is_success or body.startswith("ERROR"):
        raise SmsError(f"smsapi {response.status_code}: {body[:200]}")
    return True


def _send_serwersms(client: httpx.Client, msisdn: str, message: str) -> bool:
    if not settings.serversms_login or not settings.serversms_password:
        logger.warning("[sms] SerwerSMS credentials not set; skipping")
        return False

    response = client.post(
        settings.serversms_url,
        json={"phone": f"+{msisdn}", "text": message, "sender": settings.sms_sender_id},
        auth=(settings.serversms_login, settings.serversms_password),
    )
    if not response.is_success:
        raise SmsError(f"serwersms {response.status_code}: {response.text[:200]}")
    return True


def send_sms(to: str | None, message: str, *, client: httpx.Client | None = None) -> bool:
    """Send one SMS. Returns False when skipped; raises SmsError on provider failure."""
    provider = settings.sms_provider
    if not to or not message or provider == "none":
        return False
    if provider not in SMS_PROVIDERS:
        logger.warning("[sms] unknown SMS_PROVIDER %r; skipping", provider)
        return False

    msisdn = to_msisdn_pl(to)
    if msisdn is None:
        logger.info("[sms] unusable phone number; skipping")
        return False

    owns_client = client is None
    http = client or httpx.Client(timeout=settings.http_timeout_seconds)
    try:
        if provider == "smsapi":
            return _send_smsapi(http, msisdn, message)
        return _send_serwersms(http, msisdn, message)
    except httpx.HTTPError as exc:
        raise SmsError(f"{provider} transport error: {exc}") from exc
    finally:
        if owns_client:
            http.close()
