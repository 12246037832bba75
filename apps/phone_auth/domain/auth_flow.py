from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Mapping

from apps.phone_auth.domain.ports import Identity

PHONE_STRATEGY_NAME = "phone"


class AuthFailureReason(StrEnum):
    INVALID_OTP = "Invalid OTP"
    EMAIL_REQUIRED = "Valid default email address is required"


@dataclass(frozen=True)
class AuthFailure:
    reason: str

    @property
    def message(self) -> str:
        return str(self.reason)


AuthResult = Identity | AuthFailure


class AuthenticationStrategy(ABC):
    """
    A named, pluggable authentication method.

    `define_credential_shape` returns the serializer class describing the
    credentials `authenticate` accepts; `authenticate` returns the resolved
    identity or an `AuthFailure` carrying a user-facing reason.
    """

    name: str

    @abstractmethod
    def define_credential_shape(self) -> type:
        ...

    @abstractmethod
    def authenticate(self, request, data: Mapping[str, Any]) -> AuthResult:
        ...
