from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction

from apps.customers.models import Customer, ExternalAuthenticationMethod
from apps.phone_auth.domain.errors import DirectoryError
from apps.phone_auth.domain.ports import Identity

logger = logging.getLogger("phone_auth.directory")

_CUSTOMER_FIELDS = {"email_address", "first_name", "last_name", "phone_number", "verified"}


def _identity(method: ExternalAuthenticationMethod) -> Identity:
    user = method.user
    customer = getattr(user, "customer", None)
    return Identity(
        id=user.id,
        external_identifier=method.external_identifier,
        strategy_name=method.strategy,
        email_address=customer.email_address if customer else user.email,
        first_name=customer.first_name if customer else user.first_name,
        last_name=customer.last_name if customer else user.last_name,
        user=user,
    )


class DjangoIdentityDirectory:
    """Account directory backed by the auth user model and Customer records."""

    def find_by_external_identifier(self, *, strategy_name: str, identifier: str) -> Identity | None:
        method = (
            ExternalAuthenticationMethod.objects.select_related("user", "user__customer")
            .filter(strategy=strategy_name, external_identifier=identifier)
            .first()
        )
        if method is None:
            return None
        return _identity(method)

    @transaction.atomic
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
        UserModel = get_user_model()
        try:
            user = UserModel.objects.create_user(
                username=f"{strategy}_{external_identifier}",
                email=email_address,
                password=None,
                first_name=first_name,
                last_name=last_name,
            )
            Customer.objects.create(
                user=user,
                email_address=email_address,
                first_name=first_name,
                last_name=last_name,
                verified=verified,
            )
            method = ExternalAuthenticationMethod.objects.create(
                user=user,
                strategy=strategy,
                external_identifier=external_identifier,
            )
        except DatabaseError as exc:
            logger.error(
                "identity_create_failed",
                extra={"strategy": strategy, "external_identifier": external_identifier, "error": str(exc)},
            )
            raise DirectoryError("Failed to create customer and user.") from exc

        logger.info("identity_created", extra={"strategy": strategy, "user_id": user.id})
        return _identity(method)

    def find_customer_by_user_id(self, user_id: int) -> Customer | None:
        return Customer.objects.filter(user_id=user_id).first()

    def update_customer(self, customer_id: int, **fields) -> Customer:
        unknown = set(fields) - _CUSTOMER_FIELDS
        if unknown:
            raise DirectoryError(f"Unknown customer fields: {', '.join(sorted(unknown))}.")
        customer = Customer.objects.filter(pk=customer_id).first()
        if customer is None:
            raise DirectoryError(f"Customer {customer_id} not found.")
        for name, value in fields.items():
            setattr(customer, name, value)
        try:
            customer.save(update_fields=[*fields, "updated_at"])
        except DatabaseError as exc:
            raise DirectoryError("Failed to update customer.") from exc
        return customer
