"""
Tests for accounts models.
"""

import pytest
from django.db import IntegrityError

from apps.accounts.models import User
from tests.accounts.factories import AccountFactory, UserFactory


@pytest.mark.django_db
class TestUserManager:
    def test_create_user_has_no_usable_password(self):
        user = User.objects.create_user(email="Someone@EXAMPLE.com")

        assert user.email == "Someone@example.com"
        assert not user.has_usable_password()
        assert user.phone_number is None
        assert user.phone_number_verified is False

    def test_create_user_requires_email(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email="")

    def test_create_superuser(self):
        user = User.objects.create_superuser(email="admin@example.com", password="admin-pass")

        assert user.is_staff
        assert user.is_superuser
        assert user.check_password("admin-pass")


@pytest.mark.django_db
class TestUser:
    def test_phone_number_is_unique(self):
        UserFactory.create(phone_number="+14155551234")

        with pytest.raises(IntegrityError):
            UserFactory.create(phone_number="+14155551234")

    def test_many_users_without_phone_number(self):
        UserFactory.create_batch(3)

        assert User.objects.filter(phone_number__isnull=True).count() == 3


@pytest.mark.django_db
class TestAccount:
    def test_one_credential_account_per_user(self):
        account = AccountFactory.create()

        with pytest.raises(IntegrityError):
            AccountFactory.create(user=account.user, account_id="other")
