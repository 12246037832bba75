from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable

from django.db import transaction
from django.utils import timezone

from apps.phone_auth.domain.errors import DeliveryError
from apps.phone_auth.domain.otp_policies import OtpGeneratorOptions, generate_otp_code
from apps.phone_auth.domain.ports import NotifierPort, OtpRecord, OtpRecordStorePort

logger = logging.getLogger("phone_auth.otp")

OTP_SENT_MESSAGE = "OTP sent successfully, please verify"


class OtpService:
    """
    Issues and verifies phone bound one-time passcodes.

    - request_otp: generate, optionally deliver, then persist
    - verify_otp: consume the most recent matching unverified record
    """

    def __init__(
        self,
        *,
        store: OtpRecordStorePort,
        notifier: NotifierPort | None = None,
        generator_options: OtpGeneratorOptions | None = None,
        otp_ttl: timedelta | None = None,
        code_generator: Callable[[OtpGeneratorOptions], str] = generate_otp_code,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.store = store
        self.notifier = notifier
        self.generator_options = generator_options or OtpGeneratorOptions()
        self.otp_ttl = otp_ttl
        self.code_generator = code_generator
        self.clock = clock

    def request_otp(self, phone: str) -> str:
        code = self.code_generator(self.generator_options)
        now = self.clock()
        record = OtpRecord(
            phone=phone,
            code=code,
            verified=False,
            expires_at=now + self.otp_ttl if self.otp_ttl else None,
        )

        if self.notifier is None:
            record_id = self.store.save(record)
            logger.info("otp_issued", extra={"phone": phone, "otp_id": record_id, "delivered": False})
            return OTP_SENT_MESSAGE

        try:
            self.notifier.send(phone=phone, code=code)
        except DeliveryError:
            logger.error("otp_request_aborted", extra={"phone": phone, "reason": "delivery_failed"})
            raise

        record_id = self.store.save(record)
        logger.info("otp_issued", extra={"phone": phone, "otp_id": record_id, "delivered": True})
        return OTP_SENT_MESSAGE

    def verify_otp(self, phone: str, code: str) -> bool:
        with transaction.atomic(using=getattr(self.store, "using", None)):
            match = self.store.find_unverified_match(phone=phone, code=code, now=self.clock())
            if match is None:
                logger.info("otp_verify_failed", extra={"phone": phone, "reason_code": "no_match"})
                return False
            consumed = self.store.mark_verified(match.id)

        if not consumed:
            logger.warning("otp_verify_failed", extra={"phone": phone, "otp_id": match.id, "reason_code": "already_consumed"})
            return False

        logger.info("otp_verified", extra={"phone": phone, "otp_id": match.id})
        return True
