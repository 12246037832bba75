from __future__ import annotations

import random
import string
from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import MagicMock, patch

from django.contrib.auth import authenticate, get_user_model
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase, override_settings
from rest_framework.test import APIClient

from apps.customers.infrastructure.directory import DjangoIdentityDirectory
from apps.customers.models import Customer, ExternalAuthenticationMethod
from apps.phone_auth.application.container import build_phone_auth
from apps.phone_auth.application.options import PhoneAuthOptions, coerce_default_user_data
from apps.phone_auth.application.registry import AuthenticationStrategyRegistry
from apps.phone_auth.application.services.otp_service import OTP_SENT_MESSAGE, OtpService
from apps.phone_auth.application.strategies import PhoneAuthenticationStrategy
from apps.phone_auth.apps import get_components
from apps.phone_auth.domain.auth_flow import AuthFailure, AuthFailureReason
from apps.phone_auth.domain.errors import DeliveryError, DirectoryError, DirectoryInconsistencyError, StorageError
from apps.phone_auth.domain.otp_policies import (
    SPECIAL_CHARS,
    OtpGeneratorOptions,
    generate_otp_code,
)
from apps.phone_auth.domain.ports import DefaultUserData, Identity, OtpRecord
from apps.phone_auth.infrastructure.notifiers.callable import CallableNotifier
from apps.phone_auth.infrastructure.stores import DjangoOtpRecordStore
from apps.phone_auth.interfaces.api.serializers import PhoneAuthInputSerializer
from apps.phone_auth.models import PhoneOtp


def _builder(email: str = "u@x.com"):
    def build(phone: str) -> dict:
        return {"emailAddress": email, "firstName": "", "lastName": ""}

    return build


def _failing_send(phone: str, code: str):
    raise ConnectionError("sms gateway down")


class CodeGeneratorTests(SimpleTestCase):
    def test_default_policy_is_six_digits(self):
        code = generate_otp_code()
        self.assertEqual(len(code), 6)
        self.assertTrue(code.isdigit())

    def test_length_and_classes_are_respected(self):
        policies = [
            (OtpGeneratorOptions(length=4), string.digits),
            (OtpGeneratorOptions(length=10, digits=False, upper_case_alphabets=True), string.ascii_uppercase),
            (OtpGeneratorOptions(length=8, digits=False, lower_case_alphabets=True), string.ascii_lowercase),
            (OtpGeneratorOptions(length=12, digits=False, special_chars=True), SPECIAL_CHARS),
            (
                OtpGeneratorOptions(length=32, upper_case_alphabets=True, lower_case_alphabets=True),
                string.digits + string.ascii_letters,
            ),
        ]
        for options, allowed in policies:
            for _ in range(20):
                code = generate_otp_code(options)
                self.assertEqual(len(code), options.length)
                self.assertTrue(set(code) <= set(allowed), code)

    def test_no_enabled_class_falls_back_to_digits(self):
        options = OtpGeneratorOptions(length=7, digits=False)
        code = generate_otp_code(options)
        self.assertEqual(len(code), 7)
        self.assertTrue(code.isdigit())

    def test_seeded_rng_is_deterministic(self):
        first = generate_otp_code(OtpGeneratorOptions(length=8), rng=random.Random(42))
        second = generate_otp_code(OtpGeneratorOptions(length=8), rng=random.Random(42))
        self.assertEqual(first, second)

    def test_non_positive_length_is_rejected(self):
        with self.assertRaises(ValueError):
            generate_otp_code(OtpGeneratorOptions(length=0))

    def test_options_from_camel_case_mapping(self):
        options = OtpGeneratorOptions.from_mapping(
            {"length": "4", "upperCaseAlphabets": True, "specialChars": False, "digits": False}
        )
        self.assertEqual(options, OtpGeneratorOptions(length=4, digits=False, upper_case_alphabets=True))
        self.assertEqual(OtpGeneratorOptions.from_mapping(None), OtpGeneratorOptions())

    def test_unknown_option_is_rejected(self):
        with self.assertRaises(ValueError):
            OtpGeneratorOptions.from_mapping({"alphabet": "abc"})


class OtpRecordStoreTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.store = DjangoOtpRecordStore()
        self.now = datetime.now(dt_timezone.utc)

    def test_save_persists_unverified_record(self):
        record_id = self.store.save(OtpRecord(phone="+15551234567", code="123456"))
        row = PhoneOtp.objects.get(pk=record_id)
        self.assertEqual(row.phone, "+15551234567")
        self.assertEqual(row.code, "123456")
        self.assertFalse(row.verified)
        self.assertIsNone(row.expires_at)

    def test_most_recent_unverified_match_wins(self):
        older = self.store.save(OtpRecord(phone="+1", code="111111"))
        newer = self.store.save(OtpRecord(phone="+1", code="111111"))
        match = self.store.find_unverified_match(phone="+1", code="111111", now=self.now)
        self.assertEqual(match.id, newer)
        self.assertNotEqual(match.id, older)

    def test_verified_and_expired_records_do_not_match(self):
        verified_id = self.store.save(OtpRecord(phone="+2", code="222222"))
        PhoneOtp.objects.filter(pk=verified_id).update(verified=True)
        self.store.save(OtpRecord(phone="+3", code="333333", expires_at=self.now - timedelta(seconds=1)))
        self.assertIsNone(self.store.find_unverified_match(phone="+2", code="222222", now=self.now))
        self.assertIsNone(self.store.find_unverified_match(phone="+3", code="333333", now=self.now))

    def test_match_is_case_sensitive(self):
        self.store.save(OtpRecord(phone="+4", code="AbC123"))
        self.assertIsNone(self.store.find_unverified_match(phone="+4", code="abc123", now=self.now))
        self.assertIsNotNone(self.store.find_unverified_match(phone="+4", code="AbC123", now=self.now))

    def test_mark_verified_flips_exactly_once(self):
        record_id = self.store.save(OtpRecord(phone="+5", code="555555"))
        self.assertTrue(self.store.mark_verified(record_id))
        self.assertFalse(self.store.mark_verified(record_id))
        self.assertTrue(PhoneOtp.objects.get(pk=record_id).verified)

    def test_mark_verified_unknown_id_raises(self):
        with self.assertRaises(StorageError):
            self.store.mark_verified(987654)

    def test_database_failure_on_save_is_storage_error(self):
        queryset = MagicMock()
        queryset.create.side_effect = DatabaseError("disk I/O error")
        with patch.object(DjangoOtpRecordStore, "_queryset", return_value=queryset):
            with self.assertRaises(StorageError):
                self.store.save(OtpRecord(phone="+6", code="666666"))


class OtpServiceTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.store = DjangoOtpRecordStore()

    def _service(self, **kwargs) -> OtpService:
        return OtpService(store=self.store, **kwargs)

    def test_request_without_notifier_persists_one_record(self):
        message = self._service().request_otp("+15551234567")
        self.assertEqual(message, OTP_SENT_MESSAGE)
        rows = list(PhoneOtp.objects.filter(phone="+15551234567"))
        self.assertEqual(len(rows), 1)
        self.assertFalse(rows[0].verified)
        self.assertEqual(len(rows[0].code), 6)

    def test_request_uses_configured_generator_options(self):
        service = self._service(generator_options=OtpGeneratorOptions(length=4, digits=False, upper_case_alphabets=True))
        service.request_otp("+7")
        code = PhoneOtp.objects.get(phone="+7").code
        self.assertEqual(len(code), 4)
        self.assertTrue(code.isupper())

    def test_request_never_logs_the_code(self):
        service = self._service(code_generator=lambda options: "918273")
        with self.assertLogs("phone_auth.otp", level="INFO") as captured:
            service.request_otp("+8")
        self.assertTrue(any("otp_issued" in line for line in captured.output))
        self.assertFalse(any("918273" in line for line in captured.output))

    def test_request_with_notifier_sends_then_persists(self):
        send = MagicMock(return_value=True)
        service = self._service(notifier=CallableNotifier(send), code_generator=lambda options: "424242")
        self.assertEqual(service.request_otp("+9"), OTP_SENT_MESSAGE)
        send.assert_called_once_with("+9", "424242")
        self.assertTrue(PhoneOtp.objects.filter(phone="+9", code="424242", verified=False).exists())

    def test_delivery_failure_raises_and_persists_nothing(self):
        service = self._service(notifier=CallableNotifier(_failing_send))
        with self.assertLogs("phone_auth", level="ERROR"):
            with self.assertRaises(DeliveryError) as ctx:
                service.request_otp("+10")
        self.assertEqual(ctx.exception.phone, "+10")
        self.assertFalse(PhoneOtp.objects.filter(phone="+10").exists())

    def test_verify_succeeds_exactly_once(self):
        service = self._service(code_generator=lambda options: "135790")
        service.request_otp("+11")
        self.assertTrue(service.verify_otp("+11", "135790"))
        self.assertFalse(service.verify_otp("+11", "135790"))

    def test_wrong_code_leaves_records_untouched(self):
        service = self._service(code_generator=lambda options: "246802")
        service.request_otp("+12")
        service.request_otp("+12")
        self.assertFalse(service.verify_otp("+12", "000000"))
        self.assertFalse(service.verify_otp("+13", "246802"))
        self.assertEqual(PhoneOtp.objects.filter(verified=True).count(), 0)

    def test_older_outstanding_codes_stay_valid(self):
        codes = iter(["111111", "222222"])
        service = self._service(code_generator=lambda options: next(codes))
        service.request_otp("+14")
        service.request_otp("+14")
        self.assertTrue(service.verify_otp("+14", "111111"))
        self.assertTrue(service.verify_otp("+14", "222222"))

    def test_ttl_expires_codes(self):
        issued_at = datetime(2026, 1, 1, 12, 0, tzinfo=dt_timezone.utc)
        clock = MagicMock(return_value=issued_at)
        service = self._service(otp_ttl=timedelta(minutes=5), clock=clock, code_generator=lambda options: "999000")
        service.request_otp("+15")
        row = PhoneOtp.objects.get(phone="+15")
        self.assertEqual(row.expires_at, issued_at + timedelta(minutes=5))

        clock.return_value = issued_at + timedelta(minutes=6)
        self.assertFalse(service.verify_otp("+15", "999000"))
        clock.return_value = issued_at + timedelta(minutes=4)
        self.assertTrue(service.verify_otp("+15", "999000"))

    def test_lost_race_on_mark_verified_returns_false(self):
        store = MagicMock()
        store.find_unverified_match.return_value = OtpRecord(id=1, phone="+16", code="123123")
        store.mark_verified.return_value = False
        service = OtpService(store=store)
        self.assertFalse(service.verify_otp("+16", "123123"))
        store.mark_verified.assert_called_once_with(1)


class PhoneAuthenticationStrategyTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.otp_service = OtpService(store=DjangoOtpRecordStore(), code_generator=lambda options: "482913")
        self.directory = DjangoIdentityDirectory()

    def _strategy(self, builder=None, directory=None) -> PhoneAuthenticationStrategy:
        return PhoneAuthenticationStrategy(
            otp_service=self.otp_service,
            directory=directory or self.directory,
            default_user_data_builder=builder or _builder(),
        )

    def test_credential_shape(self):
        strategy = self._strategy()
        self.assertEqual(strategy.name, "phone")
        self.assertIs(strategy.define_credential_shape(), PhoneAuthInputSerializer)

    def test_invalid_otp_returns_failure_without_directory_access(self):
        directory = MagicMock()
        result = self._strategy(directory=directory).authenticate(None, {"phone": "+1000", "otp": "000000"})
        self.assertEqual(result, AuthFailure(AuthFailureReason.INVALID_OTP))
        self.assertEqual(result.message, "Invalid OTP")
        directory.find_by_external_identifier.assert_not_called()
        directory.create_identity.assert_not_called()
        directory.update_customer.assert_not_called()

    def test_empty_default_email_creates_no_identity(self):
        self.otp_service.request_otp("+2000")
        with self.assertLogs("phone_auth.auth", level="ERROR"):
            result = self._strategy(builder=_builder(email="")).authenticate(None, {"phone": "+2000", "otp": "482913"})
        self.assertIsInstance(result, AuthFailure)
        self.assertEqual(result.message, "Valid default email address is required")
        self.assertFalse(get_user_model().objects.exists())
        self.assertFalse(ExternalAuthenticationMethod.objects.exists())

    def test_end_to_end_creates_identity(self):
        self.assertEqual(self.otp_service.request_otp("+1000"), OTP_SENT_MESSAGE)
        result = self._strategy().authenticate(None, {"phone": "+1000", "otp": "482913"})

        self.assertIsInstance(result, Identity)
        self.assertEqual(result.external_identifier, "+1000")
        self.assertEqual(result.strategy_name, "phone")
        self.assertEqual(result.email_address, "u@x.com")
        self.assertEqual(result.first_name, "+1000")
        customer = Customer.objects.get(user_id=result.id)
        self.assertEqual(customer.phone_number, "+1000")
        self.assertEqual(customer.first_name, "+1000")
        self.assertTrue(customer.verified)
        self.assertTrue(PhoneOtp.objects.get(phone="+1000").verified)

    def test_replayed_code_is_rejected(self):
        self.otp_service.request_otp("+3000")
        strategy = self._strategy()
        self.assertIsInstance(strategy.authenticate(None, {"phone": "+3000", "otp": "482913"}), Identity)
        replay = strategy.authenticate(None, {"phone": "+3000", "otp": "482913"})
        self.assertEqual(replay.message, "Invalid OTP")

    def test_existing_identity_is_returned_without_creating(self):
        existing = self.directory.create_identity(
            strategy="phone",
            external_identifier="+4000",
            verified=True,
            email_address="old@x.com",
            first_name="Old",
            last_name="User",
        )
        builder = MagicMock()
        self.otp_service.request_otp("+4000")
        result = self._strategy(builder=builder).authenticate(None, {"phone": "+4000", "otp": "482913"})
        self.assertEqual(result.id, existing.id)
        builder.assert_not_called()
        self.assertEqual(get_user_model().objects.count(), 1)

    def test_missing_customer_after_create_is_inconsistency(self):
        directory = MagicMock()
        directory.find_by_external_identifier.return_value = None
        directory.create_identity.return_value = Identity(id=77, external_identifier="+5000", strategy_name="phone")
        directory.find_customer_by_user_id.return_value = None
        self.otp_service.request_otp("+5000")
        with self.assertRaises(DirectoryInconsistencyError) as ctx:
            self._strategy(directory=directory).authenticate(None, {"phone": "+5000", "otp": "482913"})
        self.assertEqual(ctx.exception.user_id, 77)
        directory.update_customer.assert_not_called()

    def test_directory_errors_propagate(self):
        directory = MagicMock()
        directory.find_by_external_identifier.return_value = None
        directory.create_identity.side_effect = DirectoryError("boom")
        self.otp_service.request_otp("+6000")
        with self.assertRaises(DirectoryError):
            self._strategy(directory=directory).authenticate(None, {"phone": "+6000", "otp": "482913"})
        self.assertFalse(PhoneOtp.objects.get(phone="+6000").verified)

    def test_failed_provisioning_keeps_code_usable(self):
        self.otp_service.request_otp("+6100")
        strategy = self._strategy()
        with patch.object(DjangoIdentityDirectory, "create_identity", side_effect=DirectoryError("boom")):
            with self.assertRaises(DirectoryError):
                strategy.authenticate(None, {"phone": "+6100", "otp": "482913"})
        self.assertFalse(PhoneOtp.objects.get(phone="+6100").verified)

        retry = strategy.authenticate(None, {"phone": "+6100", "otp": "482913"})
        self.assertIsInstance(retry, Identity)
        self.assertTrue(PhoneOtp.objects.get(phone="+6100").verified)

    def test_concurrent_first_login_returns_existing_identity(self):
        winner = Identity(id=91, external_identifier="+6200", strategy_name="phone")
        directory = MagicMock()
        directory.find_by_external_identifier.side_effect = [None, winner]
        directory.create_identity.side_effect = DirectoryError("duplicate")
        self.otp_service.request_otp("+6200")

        result = self._strategy(directory=directory).authenticate(None, {"phone": "+6200", "otp": "482913"})

        self.assertEqual(result, winner)
        directory.update_customer.assert_not_called()
        self.assertTrue(PhoneOtp.objects.get(phone="+6200").verified)


class StrategyRegistryTests(SimpleTestCase):
    def _strategy(self, name: str):
        strategy = MagicMock()
        strategy.name = name
        return strategy

    def test_registration_order_is_kept(self):
        registry = AuthenticationStrategyRegistry([self._strategy("native"), self._strategy("phone")])
        self.assertEqual(registry.names(), ["native", "phone"])
        self.assertEqual(registry.get("phone").name, "phone")
        self.assertEqual(len(registry), 2)

    def test_duplicate_names_are_rejected(self):
        registry = AuthenticationStrategyRegistry([self._strategy("phone")])
        with self.assertRaises(ValueError):
            registry.register(self._strategy("phone"))

    def test_unknown_strategy(self):
        with self.assertRaises(KeyError):
            AuthenticationStrategyRegistry().get("phone")


class PhoneAuthOptionsTests(SimpleTestCase):
    def test_builder_is_required(self):
        with self.assertRaises(ImproperlyConfigured):
            PhoneAuthOptions.from_settings({})

    def test_dotted_paths_are_resolved(self):
        options = PhoneAuthOptions.from_settings(
            {
                "DEFAULT_USER_DATA_BUILDER": "phone_auth_site.users.default_user_data",
                "SEND_OTP": "apps.phone_auth.infrastructure.notifiers.console.send_otp",
                "OTP_GENERATOR_OPTIONS": {"length": 8},
                "OTP_TTL_SECONDS": 300,
            }
        )
        self.assertEqual(options.generator_options.length, 8)
        self.assertEqual(options.otp_ttl, timedelta(minutes=5))
        self.assertIsNotNone(options.send_otp)
        defaults = coerce_default_user_data(options.default_user_data_builder("+1 (000)"))
        self.assertEqual(defaults.email_address, "1000@phone.local")

    def test_container_wires_delivery_hook(self):
        send = MagicMock()
        options = PhoneAuthOptions(default_user_data_builder=_builder(), send_otp=send)
        components = build_phone_auth(options, store=MagicMock(), directory=MagicMock())
        self.assertIsInstance(components.otp_service.notifier, CallableNotifier)
        components.otp_service.notifier.send(phone="+1", code="123456")
        send.assert_called_once_with("+1", "123456")
        self.assertIsInstance(components.strategies.get("phone"), PhoneAuthenticationStrategy)

    def test_bad_dotted_path(self):
        with self.assertRaises(ImproperlyConfigured):
            PhoneAuthOptions.from_settings({"DEFAULT_USER_DATA_BUILDER": "phone_auth_site.users.missing"})

    def test_invalid_generator_options(self):
        with self.assertRaises(ImproperlyConfigured):
            PhoneAuthOptions.from_settings(
                {"DEFAULT_USER_DATA_BUILDER": _builder(), "OTP_GENERATOR_OPTIONS": {"length": 0}}
            )

    def test_generator_flags_from_env_strings(self):
        options = PhoneAuthOptions.from_settings(
            {
                "DEFAULT_USER_DATA_BUILDER": _builder(),
                "OTP_GENERATOR_OPTIONS": {"length": "8", "digits": "false", "upperCaseAlphabets": "true"},
            }
        )
        self.assertEqual(options.generator_options.length, 8)
        self.assertFalse(options.generator_options.digits)
        self.assertTrue(options.generator_options.upper_case_alphabets)
        self.assertEqual(options.generator_options.alphabet(), string.ascii_uppercase)

    def test_default_user_data_accepts_both_key_styles(self):
        self.assertEqual(
            coerce_default_user_data({"email_address": "a@b.c", "first_name": "A"}),
            DefaultUserData(email_address="a@b.c", first_name="A"),
        )
        self.assertEqual(
            coerce_default_user_data({"emailAddress": "a@b.c", "lastName": "B"}),
            DefaultUserData(email_address="a@b.c", last_name="B"),
        )

    @override_settings(ENVIRONMENT="production", PHONE_AUTH={"DEFAULT_USER_DATA_BUILDER": _builder()})
    def test_production_requires_delivery_hook(self):
        from django.apps import apps

        with self.assertRaises(ImproperlyConfigured):
            apps.get_app_config("phone_auth").build_components()

    @override_settings(ENVIRONMENT="development", PHONE_AUTH={"DEFAULT_USER_DATA_BUILDER": _builder()})
    def test_missing_delivery_hook_warns(self):
        from django.apps import apps

        with self.assertLogs("phone_auth", level="WARNING"):
            components = apps.get_app_config("phone_auth").build_components()
        self.assertIsNone(components.otp_service.notifier)
        self.assertEqual(components.strategies.names(), ["phone"])


class PhoneOtpBackendTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.otp_service = get_components().otp_service

    def _issue(self, phone: str) -> str:
        self.otp_service.request_otp(phone)
        return PhoneOtp.objects.filter(phone=phone).latest("id").code

    def test_authenticate_through_backend_pipeline(self):
        code = self._issue("+447700900123")
        user = authenticate(None, phone="+447700900123", otp=code)
        self.assertIsNotNone(user)
        self.assertEqual(user.backend, "apps.phone_auth.infrastructure.auth_backends.PhoneOtpBackend")
        self.assertTrue(
            ExternalAuthenticationMethod.objects.filter(
                user=user, strategy="phone", external_identifier="+447700900123"
            ).exists()
        )

    def test_backend_rejects_wrong_code(self):
        self._issue("+447700900124")
        self.assertIsNone(authenticate(None, phone="+447700900124", otp="not-it"))

    def test_backend_ignores_other_credentials(self):
        self.assertIsNone(authenticate(None, username="someone", password="secret"))


class PhoneAuthApiTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client = APIClient()

    def test_request_otp_api_contract(self):
        response = self.client.post("/api/auth/phone/otp/request/", data={"phone": "+15551234567"}, format="json")
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["data"]["message"], OTP_SENT_MESSAGE)
        self.assertEqual(PhoneOtp.objects.filter(phone="+15551234567", verified=False).count(), 1)

    def test_request_otp_requires_phone(self):
        response = self.client.post("/api/auth/phone/otp/request/", data={}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_request_otp_delivery_failure(self):
        otp_service = get_components().otp_service
        with patch.object(otp_service, "notifier", CallableNotifier(_failing_send)):
            response = self.client.post("/api/auth/phone/otp/request/", data={"phone": "+1999"}, format="json")
        self.assertEqual(response.status_code, 502)
        self.assertFalse(response.json()["success"])
        self.assertFalse(PhoneOtp.objects.filter(phone="+1999").exists())

    def test_login_issues_tokens(self):
        self.client.post("/api/auth/phone/otp/request/", data={"phone": "+1000"}, format="json")
        code = PhoneOtp.objects.get(phone="+1000").code

        response = self.client.post("/api/auth/phone/login/", data={"phone": "+1000", "otp": code}, format="json")
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["external_identifier"], "+1000")
        self.assertIn("access", data)
        self.assertIn("refresh", data)
        self.assertEqual(get_user_model().objects.get(pk=data["user_id"]).email, "1000@phone.local")

    def test_login_directory_failure_uses_error_envelope(self):
        self.client.post("/api/auth/phone/otp/request/", data={"phone": "+1000"}, format="json")
        code = PhoneOtp.objects.get(phone="+1000").code
        directory = get_components().strategies.get("phone").directory

        with patch.object(directory, "create_identity", side_effect=DirectoryError("Directory unavailable.")):
            response = self.client.post("/api/auth/phone/login/", data={"phone": "+1000", "otp": code}, format="json")

        self.assertEqual(response.status_code, 500)
        payload = response.json()
        self.assertFalse(payload["success"])
        self.assertEqual(payload["error"]["message"], "Directory unavailable.")
        self.assertFalse(PhoneOtp.objects.get(phone="+1000").verified)

    def test_login_with_invalid_otp(self):
        response = self.client.post("/api/auth/phone/login/", data={"phone": "+1000", "otp": "123456"}, format="json")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"]["message"], "Invalid OTP")

    def test_login_requires_credentials(self):
        response = self.client.post("/api/auth/phone/login/", data={"phone": "+1000"}, format="json")
        self.assertEqual(response.status_code, 400)


class ConsoleNotifierTests(SimpleTestCase):
    def test_console_hook_logs_code(self):
        from apps.phone_auth.infrastructure.notifiers.console import send_otp

        with self.assertLogs("phone_auth.notifier", level="INFO") as captured:
            self.assertTrue(send_otp("+1000", "482913"))
        self.assertIn("482913", captured.output[0])
