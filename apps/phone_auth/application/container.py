from __future__ import annotations

from dataclasses import dataclass

from apps.phone_auth.application.options import PhoneAuthOptions
from apps.phone_auth.application.registry import AuthenticationStrategyRegistry
from apps.phone_auth.application.services.otp_service import OtpService
from apps.phone_auth.application.strategies import PhoneAuthenticationStrategy
from apps.phone_auth.domain.ports import IdentityDirectoryPort, OtpRecordStorePort
from apps.phone_auth.infrastructure.notifiers.callable import CallableNotifier


@dataclass(frozen=True)
class PhoneAuthComponents:
    options: PhoneAuthOptions
    otp_service: OtpService
    strategies: AuthenticationStrategyRegistry


def build_phone_auth(
    options: PhoneAuthOptions,
    *,
    store: OtpRecordStorePort,
    directory: IdentityDirectoryPort,
) -> PhoneAuthComponents:
    otp_service = OtpService(
        store=store,
        notifier=CallableNotifier(options.send_otp) if options.send_otp else None,
        generator_options=options.generator_options,
        otp_ttl=options.otp_ttl,
    )
    strategies = AuthenticationStrategyRegistry()
    strategies.register(
        PhoneAuthenticationStrategy(
            otp_service=otp_service,
            directory=directory,
            default_user_data_builder=options.default_user_data_builder,
        )
    )
    return PhoneAuthComponents(options=options, otp_service=otp_service, strategies=strategies)
