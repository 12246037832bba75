from __future__ import annotations

import logging

logger = logging.getLogger("phone_auth.notifier")


def send_otp(phone: str, code: str) -> bool:
    """Dev/testing hook that writes the code to the log instead of delivering it."""
    logger.info("OTP code for %s: %s", phone, code)
    return True
