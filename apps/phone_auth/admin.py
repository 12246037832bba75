from django.contrib import admin

from .models import PhoneOtp


@admin.register(PhoneOtp)
class PhoneOtpAdmin(admin.ModelAdmin):
    list_display = ("id", "phone", "verified", "created_at", "expires_at")
    search_fields = ("phone",)
    list_filter = ("verified",)
    readonly_fields = ("phone", "code", "verified", "created_at", "expires_at")
