"""
Account models.

This module defines the account record and the entities hanging off it:
- User: Registered account (individual or organization owner)
- Administrator / Moderator: Role records (one per account)
- Organization: Organization profile owned by an account
- Lock: Failed-verification lockout state per account
- Identity: External identity provider link (provider + uid)
- FailedCensusCall: Audit of residence checks that did not match

Related files:
    - managers.py: UserManager / UserQuerySet (scopes, search)
    - verification.py: Verification level predicates
    - services.py: AccountService (OAuth lookup, validated saves)
    - signals.py: Sign-in tracking

Security:
    - Passwords hashed with Django's configured hasher
    - Erased accounts keep their row but lose every identifying field
    - Blocked accounts are hidden from default queries and cannot log in
"""

import logging
import re
from datetime import datetime, timedelta, timezone as dt_timezone

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone

from accounts.apps import get_username_max_length
from accounts.managers import UserManager
from accounts.verification import VerificationMixin
from core.model_mixins import SoftDeleteMixin
from core.models import BaseModel, Setting

logger = logging.getLogger(__name__)

OFFICIAL_LEVELS = range(0, 6)

# Values accepted as "terms of service accepted"
ACCEPTED_VALUES = frozenset([True, 1, "1", "true", "on", "yes"])


def validate_available_locale(value):
    """Validate that the locale is one of the configured LANGUAGES."""
    available = {code for code, _name in settings.LANGUAGES}
    if value and value not in available:
        raise ValidationError(
            f"'{value}' is not an available locale.",
            code="invalid_choice",
        )


def clean_document_number(value):
    """Strip everything but letters and digits and uppercase the rest."""
    if not value:
        return value
    return re.sub(r"[^a-z0-9]+", "", value, flags=re.IGNORECASE).upper()


def transient_attribute(name, doc=None):
    """
    Build a property for a non-persisted model attribute.

    Properties are accepted as keyword arguments by Model.__init__, so
    User(terms_of_service="1") works like a regular field.
    """
    attr = f"_{name}"

    def getter(self):
        return getattr(self, attr, None)

    def setter(self, value):
        setattr(self, attr, value)

    return property(getter, setter, doc=doc)


class User(VerificationMixin, SoftDeleteMixin, AbstractBaseUser, PermissionsMixin):
    """
    Account record.

    Email is the login identifier. Username is the public handle and is
    only required for individual accounts that are neither erased nor
    in the middle of an external identity registration.

    Fields (grouped):
        Identity: username, email, unconfirmed_email, document_type,
            document_number, phone_number, confirmed_phone
        Credentials: password, confirmation_token, reset_password_token,
            email_verification_token, confirmed_at
        Official: official_position, official_level (0 = not an official)
        Verification: residence_verified_at, level_two_verified_at, verified_at
        Tracking: sign_in_count, current/last sign-in time and IP
        Lifecycle: hidden_at (blocked), erased_at, erase_reason
        Preferences: locale, public_activity, newsletter, email_on_comment,
            email_on_comment_reply

    Transient attributes (never stored):
        terms_of_service: Must be accepted when the account is created
        skip_password_validation: Disables the password requirement
        registering_with_oauth: Set during external identity signup

    Usage:
        user = User.objects.create_user(
            email="bob@example.com", password="12345678", username="bob",
        )
        user.add_official_position("Mayor", 5)
        user.block()
        user.erase("Requested by the user")
    """

    username = models.CharField(
        max_length=60,
        null=True,
        blank=True,
        db_index=True,
        help_text="Public handle",
    )
    email = models.EmailField(
        max_length=254,
        unique=True,
        null=True,
        blank=True,
        help_text="Login email address",
    )
    unconfirmed_email = models.EmailField(
        max_length=254,
        null=True,
        blank=True,
        help_text="New email address awaiting confirmation",
    )

    # Confirmation and recovery
    confirmed_at = models.DateTimeField(null=True, blank=True)
    confirmation_token = models.CharField(max_length=64, null=True, blank=True)
    reset_password_token = models.CharField(max_length=64, null=True, blank=True)
    email_verification_token = models.CharField(max_length=64, null=True, blank=True)

    # Identity documents
    document_type = models.CharField(max_length=20, null=True, blank=True)
    document_number = models.CharField(max_length=50, null=True, blank=True)
    phone_number = models.CharField(max_length=30, null=True, blank=True)
    confirmed_phone = models.CharField(max_length=30, null=True, blank=True)

    # Official position
    official_position = models.CharField(max_length=200, null=True, blank=True)
    official_level = models.PositiveSmallIntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(5)],
        help_text="0 = not an official, 1-5 = official level",
    )

    # Verification
    residence_verified_at = models.DateTimeField(null=True, blank=True)
    level_two_verified_at = models.DateTimeField(null=True, blank=True)
    verified_at = models.DateTimeField(null=True, blank=True)

    # Sign-in tracking
    sign_in_count = models.PositiveIntegerField(default=0)
    current_sign_in_at = models.DateTimeField(null=True, blank=True)
    last_sign_in_at = models.DateTimeField(null=True, blank=True)
    current_sign_in_ip = models.GenericIPAddressField(null=True, blank=True)
    last_sign_in_ip = models.GenericIPAddressField(null=True, blank=True)

    # Erasure
    erased_at = models.DateTimeField(null=True, blank=True)
    erase_reason = models.TextField(null=True, blank=True)

    # Preferences
    locale = models.CharField(
        max_length=10,
        null=True,
        blank=True,
        validators=[validate_available_locale],
    )
    public_activity = models.BooleanField(default=True)
    newsletter = models.BooleanField(default=True)
    email_on_comment = models.BooleanField(default=False)
    email_on_comment_reply = models.BooleanField(default=False)

    # Django auth flags
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    date_joined = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    terms_of_service = transient_attribute(
        "terms_of_service", "Must be accepted when the account is created"
    )
    skip_password_validation = transient_attribute(
        "skip_password_validation", "Disables the password requirement"
    )
    registering_with_oauth = transient_attribute(
        "registering_with_oauth", "Set while registering through an identity provider"
    )

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    objects = UserManager()
    all_objects = UserManager(include_hidden=True)

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]
        constraints = [
            models.UniqueConstraint(
                fields=["document_type", "document_number"],
                name="unique_document_per_type",
                condition=models.Q(document_number__isnull=False),
            ),
        ]

    def __str__(self):
        return self.name or self.email or f"User #{self.pk}"

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def clean_fields(self, exclude=None):
        errors = {}
        try:
            super().clean_fields(exclude=exclude)
        except ValidationError as e:
            errors = e.update_error_dict(errors)

        limit = get_username_max_length()
        checks_username = not exclude or "username" not in exclude
        if checks_username and "username" not in errors and self.username:
            if len(self.username) > limit:
                errors["username"] = [
                    ValidationError(
                        f"Ensure this value has at most {limit} characters "
                        f"(it has {len(self.username)}).",
                        code="max_length",
                    )
                ]

        if errors:
            raise ValidationError(errors)

    def clean(self):
        """
        Normalize identity fields and apply the conditional account rules.

        Raises:
            ValidationError: Dict of field name -> messages
        """
        super().clean()
        self.document_number = clean_document_number(self.document_number) or None
        self.email = self.email or None
        self.unconfirmed_email = self.unconfirmed_email or None
        self.username = self.username or None

        errors = {}
        blank = self._meta.get_field("username").error_messages["blank"]

        if self.username_required():
            if not self.username:
                errors.setdefault("username", []).append(
                    ValidationError(blank, code="blank")
                )
            elif self._username_taken():
                errors.setdefault("username", []).append(
                    ValidationError(
                        self.unique_error_message(type(self), ["username"]),
                        code="unique",
                    )
                )

        if self.email_required() and not self.email:
            errors.setdefault("email", []).append(ValidationError(blank, code="blank"))
        elif self.email and self._email_taken():
            errors.setdefault("email", []).append(
                ValidationError(
                    self.unique_error_message(type(self), ["email"]),
                    code="unique",
                )
            )

        if self.document_number and self._document_taken():
            errors.setdefault("document_number", []).append(
                ValidationError(
                    "An account with this document number already exists.",
                    code="unique",
                )
            )

        if self._state.adding and self.terms_of_service not in ACCEPTED_VALUES:
            errors.setdefault("terms_of_service", []).append(
                ValidationError("You must accept the terms of service.", code="accepted")
            )

        if self.password_required():
            errors.update(self._password_errors())

        organization = self._one_to_one("organization")
        if organization is not None:
            try:
                organization.full_clean(exclude=["user"])
            except ValidationError as e:
                errors["organization"] = [
                    message for messages in e.message_dict.values() for message in messages
                ]

        if errors:
            raise ValidationError(errors)

    def _username_taken(self):
        others = type(self).all_objects.filter(username=self.username)
        if self.pk:
            others = others.exclude(pk=self.pk)
        return others.exists()

    def _email_taken(self):
        others = type(self).all_objects.filter(email=self.email)
        if self.pk:
            others = others.exclude(pk=self.pk)
        return others.exists()

    def _document_taken(self):
        others = type(self).all_objects.filter(
            document_type=self.document_type,
            document_number=self.document_number,
        )
        if self.pk:
            others = others.exclude(pk=self.pk)
        return others.exists()

    def _password_errors(self):
        raw = getattr(self, "_password", None)
        minimum = settings.ACCOUNT_PASSWORD_MIN_LENGTH
        maximum = settings.ACCOUNT_PASSWORD_MAX_LENGTH
        if not raw:
            return {"password": [ValidationError("This field cannot be blank.", code="blank")]}
        if not minimum <= len(raw) <= maximum:
            return {
                "password": [
                    ValidationError(
                        f"Password must be between {minimum} and {maximum} characters.",
                        code="length",
                    )
                ]
            }
        return {}

    # -------------------------------------------------------------------------
    # Requirement policies
    # -------------------------------------------------------------------------

    def password_required(self):
        """A password is required for new accounts or when one is being set."""
        if self.skip_password_validation:
            return False
        return self._state.adding or getattr(self, "_password", None) is not None

    def username_required(self):
        return (
            not self.is_organization
            and not self.is_erased
            and not self.registering_with_oauth
        )

    def email_required(self):
        return not self.is_erased and not self.registering_with_oauth

    # -------------------------------------------------------------------------
    # Roles
    # -------------------------------------------------------------------------

    def _one_to_one(self, name):
        try:
            return getattr(self, name)
        except ObjectDoesNotExist:
            return None

    @property
    def name(self):
        """Organization name for organization accounts, username otherwise."""
        if self.is_organization:
            return self.organization.name
        return self.username

    @property
    def is_administrator(self):
        return self._one_to_one("administrator") is not None

    @property
    def is_moderator(self):
        return self._one_to_one("moderator") is not None

    @property
    def is_organization(self):
        return self._one_to_one("organization") is not None

    @property
    def is_verified_organization(self):
        organization = self._one_to_one("organization")
        return organization is not None and organization.is_verified

    @property
    def is_official(self):
        return bool(self.official_level and self.official_level > 0)

    def add_official_position(self, position, level):
        """
        Make this account an official.

        Empty position or level is ignored. Returns True when saved,
        False when the level is out of range, None when ignored.
        """
        if not position or level in (None, ""):
            return None
        self.official_position = position
        self.official_level = int(level)
        return self._save_validated("official_position", "official_level")

    def remove_official_position(self):
        self.official_position = None
        self.official_level = 0
        return self._save_validated("official_position", "official_level")

    def _save_validated(self, *field_names):
        exclude = [f.name for f in self._meta.concrete_fields if f.name not in field_names]
        try:
            self.clean_fields(exclude=exclude)
        except ValidationError as e:
            logger.warning(
                "Account update rejected",
                extra={"user_id": self.pk, "errors": e.message_dict},
            )
            return False
        self.save(update_fields=list(field_names))
        return True

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_confirmed(self):
        return self.confirmed_at is not None

    @property
    def is_erased(self):
        return self.erased_at is not None

    @property
    def is_locked(self):
        lock, _ = Lock.objects.get_or_create(user=self)
        return lock.is_locked

    @property
    def show_welcome_screen(self):
        return (
            self.sign_in_count == 1
            and self.is_unverified
            and not self.is_organization
            and not self.is_administrator
        )

    @property
    def has_official_email(self):
        domain = Setting.get("email_domain_for_officials", settings.OFFICIAL_EMAIL_DOMAIN)
        if not self.email or not domain:
            return False
        return self.email.endswith(f"@{domain}") or self.email.endswith(f".{domain}")

    @property
    def pending_finish_signup(self):
        return not self.email and not self.unconfirmed_email

    def get_locale(self):
        """
        Return the stored locale, storing the default locale when unset.
        """
        if not self.locale:
            self.locale = settings.LANGUAGE_CODE
            if self.pk:
                self.save(update_fields=["locale"])
        return self.locale

    # -------------------------------------------------------------------------
    # Votes and flags
    # -------------------------------------------------------------------------

    def votes_for(self, votables, model=None):
        """
        Map votable id -> vote_flag for this account's votes on votables.

        Args:
            votables: QuerySet or iterable of votable instances (or ids with model)
            model: Votable model class; inferred from the queryset or instances
        """
        from participation.models import Vote

        if not isinstance(votables, models.QuerySet):
            votables = list(votables)
            if not votables:
                return {}
        votes = Vote.objects.for_votables(votables, model=model).filter(voter=self)
        return dict(votes.values_list("votable_id", "vote_flag"))

    def debate_votes(self, debates):
        from participation.models import Debate

        return self.votes_for(debates, model=Debate)

    def proposal_votes(self, proposals):
        from participation.models import Proposal

        return self.votes_for(proposals, model=Proposal)

    def flags_for(self, flaggables, model=None):
        """Map flaggable id -> True for items this account has flagged."""
        from participation.models import Flag

        if not isinstance(flaggables, models.QuerySet):
            flaggables = list(flaggables)
            if not flaggables:
                return {}
        flags = Flag.objects.for_flaggables(flaggables, model=model).filter(user=self)
        return {flaggable_id: True for flaggable_id in flags.values_list("flaggable_id", flat=True)}

    def comment_flags(self, comments):
        from participation.models import Comment

        return self.flags_for(comments, model=Comment)

    # -------------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------------

    def block(self):
        """
        Hide this account and everything it has authored so far.

        Content ids are collected before hiding so content created later
        is not affected.
        """
        from participation.models import Comment, Debate, Proposal

        with transaction.atomic():
            debate_ids = list(Debate.all_objects.filter(author=self).values_list("pk", flat=True))
            comment_ids = list(Comment.all_objects.filter(user=self).values_list("pk", flat=True))
            proposal_ids = list(
                Proposal.all_objects.filter(author=self).values_list("pk", flat=True)
            )

            self.hide()

            Debate.objects.hide_all(debate_ids)
            Comment.objects.hide_all(comment_ids)
            Proposal.objects.hide_all(proposal_ids)

        logger.info(
            "Account blocked",
            extra={
                "user_id": self.pk,
                "debates": len(debate_ids),
                "comments": len(comment_ids),
                "proposals": len(proposal_ids),
            },
        )

    def erase(self, erase_reason=None):
        """
        Irreversibly remove personal data while keeping the row.

        Erasing an already erased account changes nothing.

        Returns:
            True when the account was erased by this call
        """
        if self.is_erased:
            return False

        self.erased_at = timezone.now()
        self.erase_reason = erase_reason
        self.username = None
        self.email = None
        self.unconfirmed_email = None
        self.document_number = None
        self.phone_number = None
        self.confirmation_token = None
        self.reset_password_token = None
        self.email_verification_token = None
        self.set_unusable_password()
        self.save(
            update_fields=[
                "erased_at",
                "erase_reason",
                "username",
                "email",
                "unconfirmed_email",
                "document_number",
                "phone_number",
                "confirmation_token",
                "reset_password_token",
                "email_verification_token",
                "password",
            ]
        )
        logger.info("Account erased", extra={"user_id": self.pk})
        return True


class Administrator(BaseModel):
    """Administrator role; the account has full back-office access."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="administrator",
    )

    class Meta:
        db_table = "accounts_administrator"

    def __str__(self):
        return f"Administrator {self.user}"


class Moderator(BaseModel):
    """Moderator role; the account may hide content and block accounts."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="moderator",
    )

    class Meta:
        db_table = "accounts_moderator"

    def __str__(self):
        return f"Moderator {self.user}"


class Organization(BaseModel):
    """
    Organization profile owned by an account.

    An organization is verified by an administrator before its activity
    counts as a verified organization's. Verification and rejection are
    timestamps; the most recent of the two wins.

    Fields:
        user: Owning account
        name: Public organization name (unique)
        responsible_name: Person responsible for the organization
        verified_at: When an administrator verified it
        rejected_at: When an administrator rejected it
    """

    NAME_MAX_LENGTH = 60

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="organization",
    )
    name = models.CharField(max_length=NAME_MAX_LENGTH, unique=True)
    responsible_name = models.CharField(max_length=60)
    verified_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "accounts_organization"
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def is_verified(self):
        if self.verified_at is None:
            return False
        return self.rejected_at is None or self.rejected_at < self.verified_at

    @property
    def is_rejected(self):
        if self.rejected_at is None:
            return False
        return self.verified_at is None or self.verified_at < self.rejected_at

    def verify(self):
        self.verified_at = timezone.now()
        self.save(update_fields=["verified_at", "updated_at"])

    def reject(self):
        self.rejected_at = timezone.now()
        self.save(update_fields=["rejected_at", "updated_at"])


def default_locked_until():
    return datetime(2000, 1, 1, tzinfo=dt_timezone.utc)


class Lock(BaseModel):
    """
    Lockout state after repeated failed verification attempts.

    Every LOCK_MAX_TRIES-th failed try locks the account for 2**tries
    minutes, so each lockout is longer than the previous one.

    Fields:
        user: Locked account
        tries: Failed attempts so far
        locked_until: Lock expiry (in the past when not locked)
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="lock",
    )
    tries = models.PositiveIntegerField(default=0)
    locked_until = models.DateTimeField(default=default_locked_until)

    class Meta:
        db_table = "accounts_lock"

    def __str__(self):
        return f"Lock for {self.user} until {self.locked_until:%Y-%m-%d %H:%M}"

    @property
    def is_locked(self):
        return self.locked_until > timezone.now()

    @property
    def too_many_tries(self):
        if not self.tries:
            return False
        return self.tries % settings.LOCK_MAX_TRIES == 0

    def lock_time(self):
        return timezone.now() + timedelta(minutes=2**self.tries)

    def save(self, *args, **kwargs):
        if self.too_many_tries:
            self.locked_until = self.lock_time()
            update_fields = kwargs.get("update_fields")
            if update_fields is not None and "locked_until" not in update_fields:
                kwargs["update_fields"] = [*update_fields, "locked_until"]
        super().save(*args, **kwargs)

    @classmethod
    def increase_tries(cls, user):
        """Record one more failed attempt for user and return the lock."""
        lock, _ = cls.objects.get_or_create(user=user)
        cls.objects.filter(pk=lock.pk).update(tries=F("tries") + 1)
        lock.refresh_from_db(fields=["tries"])
        lock.save()
        return lock


class Identity(BaseModel):
    """
    External identity provider link.

    An identity is created as soon as a provider authenticates someone and
    is attached to an account once the account exists.

    Fields:
        user: Account this identity belongs to (null until attached)
        provider: Provider name (e.g. google, facebook)
        uid: Identifier given by the provider
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="identities",
    )
    provider = models.CharField(max_length=50, db_index=True)
    uid = models.CharField(max_length=255)

    class Meta:
        db_table = "accounts_identity"
        verbose_name_plural = "identities"
        constraints = [
            models.UniqueConstraint(
                fields=["provider", "uid"],
                name="unique_provider_uid",
            ),
        ]

    def __str__(self):
        return f"{self.provider}:{self.uid}"

    @classmethod
    def first_or_create_from_oauth(cls, payload):
        identity, _ = cls.objects.get_or_create(provider=payload.provider, uid=payload.uid)
        return identity


class FailedCensusCall(BaseModel):
    """A residence check whose document did not match the census."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="failed_census_calls",
    )
    document_number = models.CharField(max_length=50, blank=True)
    document_type = models.CharField(max_length=20, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    postal_code = models.CharField(max_length=10, blank=True)

    class Meta:
        db_table = "accounts_failed_census_call"

    def __str__(self):
        return f"Failed census call {self.document_type}/{self.document_number}"
