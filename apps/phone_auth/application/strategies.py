from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Mapping

from django.db import transaction

from apps.phone_auth.application.options import coerce_default_user_data
from apps.phone_auth.application.services.otp_service import OtpService
from apps.phone_auth.domain.auth_flow import (
    PHONE_STRATEGY_NAME,
    AuthenticationStrategy,
    AuthFailure,
    AuthFailureReason,
    AuthResult,
)
from apps.phone_auth.domain.errors import DirectoryError, DirectoryInconsistencyError
from apps.phone_auth.domain.ports import DefaultUserData, Identity, IdentityDirectoryPort
from apps.phone_auth.interfaces.api.serializers import PhoneAuthInputSerializer

logger = logging.getLogger("phone_auth.auth")


class PhoneAuthenticationStrategy(AuthenticationStrategy):
    """
    Verify-then-bind: a consumed OTP resolves to the directory identity keyed
    by the phone number, creating it from the default profile on first login.
    """

    name = PHONE_STRATEGY_NAME

    def __init__(
        self,
        *,
        otp_service: OtpService,
        directory: IdentityDirectoryPort,
        default_user_data_builder: Callable[[str], Any],
    ):
        self.otp_service = otp_service
        self.directory = directory
        self.default_user_data_builder = default_user_data_builder

    def define_credential_shape(self) -> type:
        return PhoneAuthInputSerializer

    def authenticate(self, request, data: Mapping[str, Any]) -> AuthResult:
        phone = data["phone"]
        # verification and provisioning commit or roll back together
        with transaction.atomic():
            verified = self.otp_service.verify_otp(phone, data["otp"])
            if not verified:
                return AuthFailure(AuthFailureReason.INVALID_OTP)

            identity = self.directory.find_by_external_identifier(strategy_name=self.name, identifier=phone)
            if identity is not None:
                logger.info("phone_login_succeeded", extra={"phone": phone, "user_id": identity.id})
                return identity

            defaults = coerce_default_user_data(self.default_user_data_builder(phone))
            if not defaults.email_address:
                logger.error("Valid default email address is required", extra={"phone": phone})
                return AuthFailure(AuthFailureReason.EMAIL_REQUIRED)

            try:
                identity = self._provision(phone, defaults)
            except DirectoryInconsistencyError:
                raise
            except DirectoryError:
                # a concurrent first login for the same phone may have won the insert
                existing = self.directory.find_by_external_identifier(strategy_name=self.name, identifier=phone)
                if existing is None:
                    raise
                logger.info("phone_login_succeeded", extra={"phone": phone, "user_id": existing.id})
                return existing

        logger.info("phone_identity_created", extra={"phone": phone, "user_id": identity.id})
        return identity

    def _provision(self, phone: str, defaults: DefaultUserData) -> Identity:
        with transaction.atomic():
            identity = self.directory.create_identity(
                strategy=self.name,
                external_identifier=phone,
                verified=True,
                email_address=defaults.email_address,
                first_name=defaults.first_name,
                last_name=defaults.last_name,
            )
            customer = self.directory.find_customer_by_user_id(identity.id)
            if customer is None:
                raise DirectoryInconsistencyError(user_id=identity.id)
            # first_name is overwritten with the phone number as well
            self.directory.update_customer(customer.id, phone_number=phone, first_name=phone)
        return replace(identity, first_name=phone)
