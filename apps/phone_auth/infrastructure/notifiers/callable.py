from __future__ import annotations

import logging
from typing import Any, Callable

from apps.phone_auth.domain.errors import DeliveryError
from apps.phone_auth.domain.ports import NotifierPort

logger = logging.getLogger("phone_auth.notifier")


class CallableNotifier(NotifierPort):
    """Adapts a host supplied `send_otp(phone, code)` hook to the notifier port."""

    def __init__(self, send_otp: Callable[[str, str], Any]):
        self.send_otp = send_otp

    def send(self, *, phone: str, code: str) -> Any:
        try:
            return self.send_otp(phone, code)
        except Exception as exc:
            logger.error("otp_delivery_failed", extra={"phone": phone, "error": str(exc)})
            raise DeliveryError(phone=phone) from exc
