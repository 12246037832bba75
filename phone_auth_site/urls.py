"""
URL configuration for phone_auth_site project.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("phone_auth_site.api_urls")),
]
