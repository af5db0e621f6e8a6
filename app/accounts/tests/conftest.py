"""
Test configuration and fixtures for account tests.

This module provides:
- Account fixtures for each role (individual, moderator, administrator,
  organization)
- API client helpers for authenticated requests

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get('/api/v1/accounts/me/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient

from accounts.models import User
from accounts.tests.factories import (
    AdministratorFactory,
    ModeratorFactory,
    OrganizationFactory,
    UserFactory,
)


# =============================================================================
# Account Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a regular individual account."""
    return UserFactory(username="bob", email="bob@example.com")


@pytest.fixture
def other_user(db):
    """Create a second individual account."""
    return UserFactory(username="alice", email="alice@example.com")


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com", password="AdminPass123!", username="admin"
    )


@pytest.fixture
def moderator_user(db):
    """Create an account holding the moderator role."""
    return ModeratorFactory(user__username="moderator").user


@pytest.fixture
def administrator_user(db):
    """Create an account holding the administrator role."""
    return AdministratorFactory(user__username="administrator").user


@pytest.fixture
def organization(db):
    """Create an organization and its owning account."""
    return OrganizationFactory(name="Neighbours United", responsible_name="Ana Pérez")


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated DRF API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(api_client, user):
    """API client authenticated as the regular account."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def moderator_client(moderator_user):
    """API client authenticated as a moderator."""
    client = APIClient()
    client.force_authenticate(user=moderator_user)
    return client
