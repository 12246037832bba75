import logging

from django.apps import AppConfig, apps
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger("phone_auth")


class PhoneAuthConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.phone_auth"
    verbose_name = "Phone authentication"

    components = None

    def ready(self) -> None:
        self.components = self.build_components()

    def build_components(self):
        from apps.customers.infrastructure.directory import DjangoIdentityDirectory
        from apps.phone_auth.application.container import build_phone_auth
        from apps.phone_auth.application.options import PhoneAuthOptions
        from apps.phone_auth.infrastructure.stores import DjangoOtpRecordStore

        options = PhoneAuthOptions.from_settings(getattr(settings, "PHONE_AUTH", None))
        if options.send_otp is None:
            env = (getattr(settings, "ENVIRONMENT", "") or "").strip().lower()
            if env in {"prod", "production"}:
                raise ImproperlyConfigured("PHONE_AUTH['SEND_OTP'] must be configured in production.")
            logger.warning("SEND_OTP is not defined, OTP codes will be stored but never delivered.")

        return build_phone_auth(options, store=DjangoOtpRecordStore(), directory=DjangoIdentityDirectory())


def get_components():
    return apps.get_app_config("phone_auth").components
