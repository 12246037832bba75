from __future__ import annotations

import logging
from datetime import datetime

from django.db import DEFAULT_DB_ALIAS, DatabaseError
from django.db.models import Q

from apps.phone_auth.domain.errors import StorageError
from apps.phone_auth.domain.ports import OtpRecord
from apps.phone_auth.models import PhoneOtp

logger = logging.getLogger("phone_auth.otp")


def _to_record(row: PhoneOtp) -> OtpRecord:
    return OtpRecord(
        id=row.id,
        phone=row.phone,
        code=row.code,
        verified=row.verified,
        created_at=row.created_at,
        expires_at=row.expires_at,
    )


class DjangoOtpRecordStore:
    """OTP records persisted through the ORM on the given database alias."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def _queryset(self):
        return PhoneOtp.objects.using(self.using)

    def save(self, record: OtpRecord) -> int:
        try:
            row = self._queryset().create(
                phone=record.phone,
                code=record.code,
                verified=record.verified,
                expires_at=record.expires_at,
            )
        except DatabaseError as exc:
            logger.error("otp_save_failed", extra={"phone": record.phone, "error": str(exc)})
            raise StorageError("Failed to persist OTP record.") from exc
        return row.id

    def find_unverified_match(self, *, phone: str, code: str, now: datetime) -> OtpRecord | None:
        try:
            candidates = (
                self._queryset()
                .filter(phone=phone, code=code, verified=False)
                .filter(Q(expires_at__isnull=True) | Q(expires_at__gt=now))
                .order_by("-created_at", "-id")
            )
            # exact, case-sensitive match regardless of the backend collation
            row = next((c for c in candidates if c.code == code and c.phone == phone), None)
        except DatabaseError as exc:
            raise StorageError("Failed to query OTP records.") from exc
        return _to_record(row) if row is not None else None

    def mark_verified(self, record_id: int) -> bool:
        try:
            updated = self._queryset().filter(pk=record_id, verified=False).update(verified=True)
            if updated:
                return True
            exists = self._queryset().filter(pk=record_id).exists()
        except DatabaseError as exc:
            raise StorageError("Failed to mark OTP record verified.") from exc
        if not exists:
            raise StorageError(f"OTP record {record_id} does not exist.")
        return False
