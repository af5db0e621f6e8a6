"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /accounts/                     - allauth (login, signup, provider callbacks)
    /api/v1/accounts/              - Account endpoints
        me/                        - Current account (GET/PATCH)
        me/finish-signup/          - Complete an external identity signup
        search/                    - Account search (moderators)
        {id}/block/                - Block account (moderators)
        {id}/erase/                - Erase account (moderators)
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
api_v1_patterns = [
    path("accounts/", include("accounts.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # allauth login, signup and provider callbacks
    path("accounts/", include("allauth.urls")),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Participation Admin"
admin.site.site_title = "Participation Admin"
admin.site.index_title = "Accounts, content and moderation"
