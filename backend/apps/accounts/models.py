"""
Accounts models - users, credential accounts and sessions.
"""

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone

from apps.core.models import TimestampedModel


class UserManager(BaseUserManager):
    """Custom manager for User model."""

    def create_user(
        self,
        email: str,
        **extra_fields,
    ) -> "User":
        """Create and return a regular user."""
        if not email:
            raise ValueError("Email is required")

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        # Passwords live on the credential Account, not the user row
        user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(
        self,
        email: str,
        password: str | None = None,
        **extra_fields,
    ) -> "User":
        """Create and return a superuser (for Django admin access)."""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        user = self.create_user(email, **extra_fields)
        if password:
            user.set_password(password)
            user.save(update_fields=["password"])
        return user


class User(AbstractBaseUser, PermissionsMixin):
    """
    Identity record.

    Email is the primary identifier. A phone number can be attached and
    verified through the phone number flows; ``phone_number_verified`` is
    not editable through forms or the admin.
    """

    email = models.EmailField(unique=True, db_index=True)
    email_verified = models.BooleanField(default=False)
    name = models.CharField(max_length=255, blank=True)
    image = models.URLField(max_length=500, blank=True)

    phone_number = models.CharField(
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        help_text="Phone number, usually E.164 (e.g., +14155551234)",
    )
    phone_number_verified = models.BooleanField(default=False, editable=False)

    # Django auth compatibility
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(
        default=False,
        help_text="Can access Django admin",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []  # Email is already required via USERNAME_FIELD

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["phone_number", "phone_number_verified"], name="accounts_user_phone_idx"),
        ]

    def __str__(self) -> str:
        return self.email


class Account(TimestampedModel):
    """
    A way for a user to sign in.

    Phone + password sign-in looks for the ``credential`` account and
    checks its password hash.
    """

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="accounts",
    )
    provider_id = models.CharField(max_length=50, help_text="e.g. 'credential'")
    account_id = models.CharField(max_length=255, help_text="Identifier within the provider")
    password = models.CharField(max_length=255, blank=True, help_text="Password hash")

    class Meta:
        ordering = ["-created_at"]
        unique_together = [["provider_id", "account_id"], ["user", "provider_id"]]

    def __str__(self) -> str:
        return f"{self.provider_id} account for {self.user_id}"


class Session(TimestampedModel):
    """Opaque session token issued after sign-in or phone verification."""

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="sessions",
    )
    token = models.CharField(max_length=64, unique=True)
    expires_at = models.DateTimeField(db_index=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Session {self.pk} for {self.user_id}"

    @property
    def is_expired(self) -> bool:
        return timezone.now() > self.expires_at
