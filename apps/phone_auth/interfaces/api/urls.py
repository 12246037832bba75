from django.urls import path

from .views import PhoneLoginAPI, PhoneOtpRequestAPI

urlpatterns = [
    path("auth/phone/otp/request/", PhoneOtpRequestAPI.as_view(), name="api_phone_otp_request"),
    path("auth/phone/login/", PhoneLoginAPI.as_view(), name="api_phone_login"),
]
