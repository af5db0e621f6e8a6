"""
Custom user manager and queryset for accounts.

This module provides:
- UserQuerySet: Role scopes, document lookup and search
- UserManager: Account creation plus hidden-account filtering

Hidden (blocked) accounts are excluded from User.objects; use
with_hidden() or User.all_objects to reach them.

Related files:
    - models.py: User model that uses this manager
    - core/managers.py: SoftDeleteQuerySet this queryset extends

Security:
    - Passwords are automatically hashed via set_password()
    - Email addresses are normalized (lowercase domain)
"""

from django.contrib.auth.models import BaseUserManager
from django.db.models import Q

from core.managers import SoftDeleteQuerySet


class UserQuerySet(SoftDeleteQuerySet):
    """
    Chainable account queries.

    Usage:
        User.objects.officials().for_render()
        User.objects.by_document("1", "12345678Z")
        User.objects.search("bob")
    """

    def administrators(self):
        return self.filter(administrator__isnull=False)

    def moderators(self):
        return self.filter(moderator__isnull=False)

    def organizations(self):
        return self.filter(organization__isnull=False)

    def officials(self):
        return self.filter(official_level__gt=0)

    def for_render(self):
        return self.select_related("organization")

    def by_document(self, document_type, document_number):
        return self.filter(document_type=document_type, document_number=document_number)

    def search(self, term):
        """
        Find accounts by exact email or case-insensitive username fragment.

        Args:
            term: Search term; blank terms match nothing

        Returns:
            QuerySet of matching accounts
        """
        if not term or not str(term).strip():
            return self.none()
        return self.filter(Q(email=term) | Q(username__icontains=term))


class UserManager(BaseUserManager.from_queryset(UserQuerySet)):
    """
    Custom manager for the User model.

    Creates accounts with email as the login identifier and hides
    blocked accounts from default queries.

    Args:
        include_hidden: When True, hidden accounts are returned too.

    Usage:
        user = User.objects.create_user(
            email='user@example.com',
            password='securepassword',
            username='user',
        )
    """

    use_in_migrations = True

    def __init__(self, *args, include_hidden=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.include_hidden = include_hidden

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.include_hidden:
            return queryset
        return queryset.filter(hidden_at__isnull=True)

    def with_hidden(self):
        return UserQuerySet(self.model, using=self._db)

    def only_hidden(self):
        return self.with_hidden().only_hidden()

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save an account with the given email and password.

        Organization owners and OAuth registrations may pass email=None;
        the model's own validation decides what is required.

        Args:
            email: Account email address
            password: Raw password (None leaves the password unusable)
            **extra_fields: Additional fields to set on the account

        Returns:
            User: The created account
        """
        if email:
            email = self.normalize_email(email)
        else:
            email = None

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser with the given email and password.

        Raises:
            ValueError: If email is missing or is_staff/is_superuser is not True
        """
        if not email:
            raise ValueError("The Email field must be set")

        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)
