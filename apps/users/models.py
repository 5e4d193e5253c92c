"""User domain models for the Rambo marketplace.

The marketplace distinguishes two roles: customers, who browse, bookmark
and book properties, and owners, who list properties and must pass a
document verification. Users sign in without a password: a one-time code
is emailed to them and exchanged for a session.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{7,15}$",
    message=_("Invalid phone number. Use the international format without spaces."),
)


class CustomUserManager(BaseUserManager):
    """User manager that uses the email address as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("An email address is required to create a user.")
        email = self.normalize_email(email)

        phone = extra_fields.get("phone")
        if phone:
            extra_fields["phone"] = self.normalize_phone(phone)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.CUSTOMER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def normalize_phone(phone: str) -> str:
        """Strip spaces and dashes so phones are stored uniformly."""
        return phone.replace(" ", "").replace("-", "")


class CustomUser(AbstractUser):
    """Marketplace user: a customer or a property owner."""

    class RoleChoices(models.TextChoices):
        CUSTOMER = "customer", _("Customer")
        OWNER = "owner", _("Owner")

    class VerificationStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        VERIFIED = "verified", _("Verified")
        REJECTED = "rejected", _("Rejected")

    username = models.CharField(
        _("Username"),
        max_length=150,
        blank=True,
        help_text=_("Optional, unused for login."),
    )
    email = models.EmailField(_("Email"), unique=True)
    name = models.CharField(_("Full name"), max_length=255, blank=True)
    phone = models.CharField(
        _("Phone"),
        max_length=20,
        blank=True,
        validators=[PHONE_VALIDATOR],
    )
    role = models.CharField(
        _("Role"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.CUSTOMER,
    )
    verification_status = models.CharField(
        _("Owner verification"),
        max_length=20,
        choices=VerificationStatus.choices,
        null=True,
        blank=True,
    )
    verification_documents = models.JSONField(
        _("Verification documents"),
        default=list,
        blank=True,
        help_text=_("URLs of documents uploaded by owners for verification."),
    )
    is_email_verified = models.BooleanField(_("Email verified"), default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS: list[str] = []

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    # --- Domain helpers -----------------------------------------------------
    def is_owner(self) -> bool:
        return self.role == self.RoleChoices.OWNER

    def is_customer(self) -> bool:
        return self.role == self.RoleChoices.CUSTOMER

    def mark_email_verified(self) -> None:
        if not self.is_email_verified:
            self.is_email_verified = True
            self.save(update_fields=["is_email_verified"])


class OneTimePassword(models.Model):
    """Numeric sign-in code emailed to a user, time-boxed and single-use."""

    email = models.EmailField()
    code = models.CharField(max_length=6)
    expires_at = models.DateTimeField()
    used = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("One-time password")
        verbose_name_plural = _("One-time passwords")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["email", "used"], name="users_otp_email_used_idx"),
        ]

    def __str__(self) -> str:
        return f"OTP for {self.email} (used={self.used})"

    @property
    def is_expired(self) -> bool:
        return timezone.now() > self.expires_at

    def mark_used(self) -> None:
        self.used = True
        self.save(update_fields=["used"])


# Short alias used across apps and tests
User = CustomUser
