from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol


@dataclass(frozen=True)
class OtpRecord:
    phone: str
    code: str
    verified: bool = False
    id: int | None = None
    created_at: datetime | None = None
    expires_at: datetime | None = None


@dataclass(frozen=True)
class Identity:
    id: int
    external_identifier: str
    strategy_name: str
    email_address: str = ""
    first_name: str = ""
    last_name: str = ""
    user: Any = None


@dataclass(frozen=True)
class DefaultUserData:
    email_address: str
    first_name: str = ""
    last_name: str = ""


class OtpRecordStorePort(Protocol):
    def save(self, record: OtpRecord) -> int:
        ...

    def find_unverified_match(self, *, phone: str, code: str, now: datetime) -> OtpRecord | None:
        ...

    def mark_verified(self, record_id: int) -> bool:
        ...


class NotifierPort:
    def send(self, *, phone: str, code: str) -> Any:  # pragma: no cover - interface
        raise NotImplementedError


class IdentityDirectoryPort(Protocol):
    def find_by_external_identifier(self, *, strategy_name: str, identifier: str) -> Identity | None:
        ...

    def create_identity(
        self,
        *,
        strategy: str,
        external_identifier: str,
        verified: bool,
        email_address: str,
        first_name: str,
        last_name: str,
    ) -> Identity:
        ...

    def find_customer_by_user_id(self, user_id: int) -> Any | None:
        ...

    def update_customer(self, customer_id: int, **fields: Any) -> Any:
        ...
