from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend

from apps.phone_auth.apps import get_components
from apps.phone_auth.domain.auth_flow import PHONE_STRATEGY_NAME, AuthFailure

logger = logging.getLogger("phone_auth.auth")


class PhoneOtpBackend(BaseBackend):
    """
    Plugs the phone strategy into AUTHENTICATION_BACKENDS:
    `authenticate(request, phone=..., otp=...)` returns the user or None.
    """

    strategy_name = PHONE_STRATEGY_NAME

    def authenticate(self, request, phone=None, otp=None, **kwargs):
        if not phone or not otp:
            return None

        strategy = get_components().strategies.get(self.strategy_name)
        result = strategy.authenticate(request, {"phone": str(phone).strip(), "otp": str(otp).strip()})
        if isinstance(result, AuthFailure):
            logger.info("phone_backend_rejected", extra={"phone": phone, "reason": result.message})
            return None

        user = result.user
        if user is None or not getattr(user, "is_active", True):
            return None
        return user

    def get_user(self, user_id):
        UserModel = get_user_model()
        try:
            user = UserModel._default_manager.get(pk=user_id)
        except UserModel.DoesNotExist:
            return None
        return user if getattr(user, "is_active", True) else None
