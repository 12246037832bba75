from __future__ import annotations

from rest_framework import serializers


class OtpRequestSerializer(serializers.Serializer):
    phone = serializers.CharField(max_length=64, trim_whitespace=True)


class PhoneAuthInputSerializer(serializers.Serializer):
    phone = serializers.CharField(max_length=64, trim_whitespace=True)
    otp = serializers.CharField(max_length=64, trim_whitespace=True)
