from __future__ import annotations

from dataclasses import dataclass

from apps.phone_auth.application.services.otp_service import OtpService


@dataclass(frozen=True)
class RequestOtpCommand:
    phone: str


@dataclass(frozen=True)
class RequestOtpResult:
    phone: str
    message: str


class RequestOtpUseCase:
    @staticmethod
    def execute(cmd: RequestOtpCommand, *, otp_service: OtpService) -> RequestOtpResult:
        message = otp_service.request_otp(cmd.phone)
        return RequestOtpResult(phone=cmd.phone, message=message)
