from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from apps.phone_auth.application.use_cases.request_otp import RequestOtpCommand, RequestOtpUseCase
from apps.phone_auth.apps import get_components
from apps.phone_auth.domain.auth_flow import PHONE_STRATEGY_NAME, AuthFailure
from apps.phone_auth.domain.errors import DeliveryError, DirectoryError, StorageError
from apps.phone_auth.interfaces.api.serializers import OtpRequestSerializer


def _success(*, data: dict, http_status: int = status.HTTP_200_OK) -> Response:
    return Response({"success": True, "data": data}, status=http_status)


def _error(*, message: str, field: str | None = None, http_status: int = 400) -> Response:
    payload: dict = {"success": False, "data": {}, "error": {"message": message}}
    if field:
        payload["error"]["field"] = field
    return Response(payload, status=http_status)


class PhoneOtpRequestAPI(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = OtpRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return _error(message="Invalid input.", field="phone", http_status=status.HTTP_400_BAD_REQUEST)

        try:
            result = RequestOtpUseCase.execute(
                RequestOtpCommand(phone=serializer.validated_data["phone"]),
                otp_service=get_components().otp_service,
            )
        except DeliveryError as exc:
            return _error(message=str(exc), http_status=status.HTTP_502_BAD_GATEWAY)
        except StorageError as exc:
            return _error(message=str(exc), http_status=status.HTTP_503_SERVICE_UNAVAILABLE)

        return _success(data={"phone": result.phone, "message": result.message}, http_status=status.HTTP_201_CREATED)


class PhoneLoginAPI(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    strategy_name = PHONE_STRATEGY_NAME

    def post(self, request):
        strategy = get_components().strategies.get(self.strategy_name)
        serializer = strategy.define_credential_shape()(data=request.data)
        if not serializer.is_valid():
            return _error(message="Invalid input.", http_status=status.HTTP_400_BAD_REQUEST)

        try:
            result = strategy.authenticate(request, serializer.validated_data)
        except StorageError as exc:
            return _error(message=str(exc), http_status=status.HTTP_503_SERVICE_UNAVAILABLE)
        except DirectoryError as exc:
            return _error(message=str(exc), http_status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        if isinstance(result, AuthFailure):
            return _error(message=result.message, http_status=status.HTTP_401_UNAUTHORIZED)

        refresh = RefreshToken.for_user(result.user)
        return _success(
            data={
                "user_id": result.id,
                "external_identifier": result.external_identifier,
                "access": str(refresh.access_token),
                "refresh": str(refresh),
            }
        )
