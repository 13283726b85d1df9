"""
Shared pytest fixtures for all tests.

This module provides common fixtures used across multiple test modules.
Individual test modules can override these fixtures if needed.

Factories
---------
Import factories directly from their modules:

    from tests.accounts.factories import UserFactory, AccountFactory, SessionFactory

Example usage:

    @pytest.mark.django_db
    def test_something():
        user = UserFactory.create(phone_number="+14155551234")
        AccountFactory.create(user=user, raw_password="secret-password")
"""

import pytest
from django.test import Client, RequestFactory


@pytest.fixture(autouse=True)
def reset_phone_number_auth():
    """
    Rebuild the cached PhoneNumberAuth around every test.

    Options are read from settings when the instance is first built, so
    tests that change settings must not see a stale instance.
    """
    from apps.phone_number.services import get_phone_number_auth

    get_phone_number_auth.cache_clear()
    yield
    get_phone_number_auth.cache_clear()


@pytest.fixture
def request_factory() -> RequestFactory:
    """
    Django request factory for unit testing views.

    Use this when you need to test view functions directly without going through
    the full HTTP stack.
    """
    return RequestFactory()


@pytest.fixture
def api_client() -> Client:
    """
    Django test client for full HTTP request/response cycle tests.

    Use this when you need to test the complete HTTP flow including middleware,
    routing, and response handling.

    Example:
        def test_api_returns_200(api_client):
            response = api_client.get("/api/v1/health")
            assert response.status_code == 200
    """
    return Client()
