from django.contrib import admin

from .models import Customer, ExternalAuthenticationMethod


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "email_address", "first_name", "last_name", "phone_number", "verified", "created_at")
    search_fields = ("email_address", "phone_number", "first_name", "last_name", "user__username")
    list_select_related = ("user",)


@admin.register(ExternalAuthenticationMethod)
class ExternalAuthenticationMethodAdmin(admin.ModelAdmin):
    list_display = ("id", "strategy", "external_identifier", "user", "created_at")
    search_fields = ("external_identifier", "user__username", "user__email")
    list_filter = ("strategy",)
    list_select_related = ("user",)
