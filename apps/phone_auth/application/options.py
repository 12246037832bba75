from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Mapping

from django.core.exceptions import ImproperlyConfigured

from apps.phone_auth.domain.otp_policies import OtpGeneratorOptions
from apps.phone_auth.domain.ports import DefaultUserData


def _resolve_callable(value: Any, *, setting: str) -> Callable | None:
    if value is None or value == "":
        return None
    if callable(value):
        return value
    if not isinstance(value, str) or "." not in value:
        raise ImproperlyConfigured(f"PHONE_AUTH['{setting}'] must be a callable or a dotted path.")
    module_path, attr = value.rsplit(".", 1)
    try:
        module = importlib.import_module(module_path)
        resolved = getattr(module, attr)
    except (ImportError, AttributeError) as exc:
        raise ImproperlyConfigured(f"Cannot import PHONE_AUTH['{setting}'] = '{value}'.") from exc
    if not callable(resolved):
        raise ImproperlyConfigured(f"PHONE_AUTH['{setting}'] = '{value}' is not callable.")
    return resolved


def coerce_default_user_data(raw: Any) -> DefaultUserData:
    """Accept a DefaultUserData, or a mapping with camelCase or snake_case keys."""
    if isinstance(raw, DefaultUserData):
        return raw
    if not isinstance(raw, Mapping):
        raise TypeError("Default user data builder must return a mapping or DefaultUserData.")

    def pick(*keys: str) -> str:
        for key in keys:
            if raw.get(key) is not None:
                return str(raw[key])
        return ""

    return DefaultUserData(
        email_address=pick("email_address", "emailAddress"),
        first_name=pick("first_name", "firstName"),
        last_name=pick("last_name", "lastName"),
    )


@dataclass(frozen=True)
class PhoneAuthOptions:
    default_user_data_builder: Callable[[str], Any]
    send_otp: Callable[[str, str], Any] | None = None
    generator_options: OtpGeneratorOptions = field(default_factory=OtpGeneratorOptions)
    otp_ttl: timedelta | None = None

    @classmethod
    def from_settings(cls, raw: Mapping | None) -> "PhoneAuthOptions":
        raw = raw or {}
        builder = _resolve_callable(raw.get("DEFAULT_USER_DATA_BUILDER"), setting="DEFAULT_USER_DATA_BUILDER")
        if builder is None:
            raise ImproperlyConfigured("PHONE_AUTH['DEFAULT_USER_DATA_BUILDER'] is required.")

        try:
            generator_options = OtpGeneratorOptions.from_mapping(raw.get("OTP_GENERATOR_OPTIONS"))
        except (TypeError, ValueError) as exc:
            raise ImproperlyConfigured(f"Invalid PHONE_AUTH['OTP_GENERATOR_OPTIONS']: {exc}") from exc
        if generator_options.length < 1:
            raise ImproperlyConfigured("PHONE_AUTH['OTP_GENERATOR_OPTIONS']['length'] must be at least 1.")

        ttl_seconds = raw.get("OTP_TTL_SECONDS")
        return cls(
            default_user_data_builder=builder,
            send_otp=_resolve_callable(raw.get("SEND_OTP"), setting="SEND_OTP"),
            generator_options=generator_options,
            otp_ttl=timedelta(seconds=int(ttl_seconds)) if ttl_seconds else None,
        )
