from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase

from apps.customers.infrastructure.directory import DjangoIdentityDirectory
from apps.customers.models import Customer, ExternalAuthenticationMethod
from apps.phone_auth.domain.errors import DirectoryError


class IdentityDirectoryTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.directory = DjangoIdentityDirectory()

    def _create(self, identifier: str = "+1000", email: str = "u@x.com"):
        return self.directory.create_identity(
            strategy="phone",
            external_identifier=identifier,
            verified=True,
            email_address=email,
            first_name="Jane",
            last_name="Doe",
        )

    def test_create_identity_provisions_user_customer_and_method(self):
        identity = self._create()

        user = get_user_model().objects.get(pk=identity.id)
        self.assertEqual(user.email, "u@x.com")
        self.assertFalse(user.has_usable_password())
        customer = Customer.objects.get(user=user)
        self.assertTrue(customer.verified)
        self.assertEqual(customer.first_name, "Jane")
        self.assertTrue(
            ExternalAuthenticationMethod.objects.filter(user=user, strategy="phone", external_identifier="+1000").exists()
        )
        self.assertEqual(identity.external_identifier, "+1000")
        self.assertEqual(identity.strategy_name, "phone")
        self.assertEqual(identity.user, user)

    def test_find_by_external_identifier(self):
        created = self._create()
        found = self.directory.find_by_external_identifier(strategy_name="phone", identifier="+1000")
        self.assertEqual(found.id, created.id)
        self.assertEqual(found.email_address, "u@x.com")
        self.assertIsNone(self.directory.find_by_external_identifier(strategy_name="phone", identifier="+2000"))
        self.assertIsNone(self.directory.find_by_external_identifier(strategy_name="google", identifier="+1000"))

    def test_duplicate_identifier_is_directory_error(self):
        self._create()
        with self.assertLogs("phone_auth.directory", level="ERROR"):
            with self.assertRaises(DirectoryError):
                self._create()
        self.assertEqual(get_user_model().objects.count(), 1)

    def test_shared_default_email_is_allowed(self):
        first = self._create("+1000", email="shared@x.com")
        second = self._create("+2000", email="shared@x.com")
        self.assertNotEqual(first.id, second.id)
        self.assertEqual(Customer.objects.filter(email_address="shared@x.com").count(), 2)

    def test_update_customer(self):
        identity = self._create()
        customer = self.directory.find_customer_by_user_id(identity.id)
        updated = self.directory.update_customer(customer.id, phone_number="+1000", first_name="+1000")
        self.assertEqual(updated.phone_number, "+1000")
        customer.refresh_from_db()
        self.assertEqual(customer.first_name, "+1000")
        self.assertEqual(customer.last_name, "Doe")

    def test_update_customer_rejects_unknown_fields_and_ids(self):
        identity = self._create()
        customer = self.directory.find_customer_by_user_id(identity.id)
        with self.assertRaises(DirectoryError):
            self.directory.update_customer(customer.id, password="x")
        with self.assertRaises(DirectoryError):
            self.directory.update_customer(customer.id + 100, phone_number="+1")

    def test_find_customer_by_unknown_user(self):
        self.assertIsNone(self.directory.find_customer_by_user_id(424242))
