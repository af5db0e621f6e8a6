"""
Tests for accounts app.

This package contains test modules for:
- test_models.py: User rules, moderation, Organization, Lock, Identity
- test_managers.py: UserManager creation, scopes and search
- test_services.py: AccountService tests
- test_adapters.py: allauth adapter tests
- test_views.py: API endpoint tests
- test_admin.py: Admin pages and moderation actions

Usage:
    pytest accounts/tests/
    pytest accounts/tests/test_models.py
"""
