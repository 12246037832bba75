from __future__ import annotations

from django.db import models


class PhoneOtp(models.Model):
    phone = models.CharField(max_length=64, db_index=True)
    code = models.CharField(max_length=64)
    verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    expires_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["phone", "code", "verified"], name="phone_otp_match_idx"),
        ]

    def __str__(self) -> str:
        return f"PhoneOtp({self.phone}, verified={self.verified})"
