"""
Tests for account models.

This module tests:
- User: Conditional validation rules, roles, officials, moderation
  (block/erase), locale, lockout and vote/flag lookups
- Organization: Verification state
- Lock: Escalating lockout after repeated failures
- Identity: Idempotent creation from provider data

Test Organization:
    - Each model has its own test class
    - Tests use descriptive names: test_<scenario>_<expected_outcome>

Dependencies:
    - pytest and pytest-django for test framework
    - freezegun for time-based tests (lockout, verification order)
    - Factory Boy factories from accounts/tests and participation/tests
"""

from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import patch

import pytest
from django.apps import apps
from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.utils import timezone
from freezegun import freeze_time

from accounts.models import Identity, Lock, Organization, User, clean_document_number
from accounts.oauth import OAuthPayload
from accounts.tests.factories import (
    AdministratorFactory,
    IdentityFactory,
    ModeratorFactory,
    OrganizationFactory,
    UserFactory,
)
from core.models import Setting
from participation.models import Comment, Debate, Proposal
from participation.tests.factories import (
    CommentFactory,
    DebateFactory,
    FlagFactory,
    ProposalFactory,
    VoteFactory,
)


def new_user(**fields):
    """Build an unsaved account the way a signup form would."""
    password = fields.pop("password", "12345678")
    fields.setdefault("email", "new@example.com")
    fields.setdefault("username", "newbie")
    fields.setdefault("terms_of_service", "1")
    user = User(**fields)
    if password is not None:
        user.set_password(password)
    return user


def errors_for(user):
    with pytest.raises(ValidationError) as exc_info:
        user.full_clean()
    return exc_info.value.message_dict


# =============================================================================
# Validation
# =============================================================================


@pytest.mark.django_db
class TestUserValidation:
    """
    Tests for the conditional account rules applied by full_clean().

    Why it matters: every signup path (email form, identity provider,
    organization registration) saves through these rules.
    """

    def test_valid_individual_account_passes(self):
        new_user().full_clean()

    def test_username_required_for_individual_account(self):
        assert "username" in errors_for(new_user(username=None))

    def test_blank_username_is_treated_as_missing(self):
        assert "username" in errors_for(new_user(username=""))

    def test_duplicate_username_fails(self, user):
        assert "username" in errors_for(new_user(username=user.username))

    def test_username_of_blocked_account_is_still_taken(self, user):
        user.block()
        assert "username" in errors_for(new_user(username=user.username))

    def test_duplicate_email_fails(self, user):
        assert "email" in errors_for(new_user(email=user.email))

    def test_email_of_blocked_account_is_still_taken(self, user):
        user.block()

        with pytest.raises(ValidationError) as exc_info:
            new_user(email=user.email).full_clean()

        codes = [error.code for error in exc_info.value.error_dict["email"]]
        assert codes == ["unique"]

    def test_own_email_is_not_taken(self, user):
        user.full_clean()

    def test_username_over_column_length_reports_one_error(self):
        messages = errors_for(new_user(username="u" * 61))["username"]
        assert len(messages) == 1

    @pytest.mark.parametrize(
        ("configured", "expected"),
        [(None, 60), (20, 20), (100, 60)],
    )
    def test_configured_limit_cannot_exceed_column(
        self, settings, monkeypatch, configured, expected
    ):
        config = apps.get_app_config("accounts")
        monkeypatch.setattr(config, "username_max_length", config.username_max_length)
        settings.USERNAME_MAX_LENGTH = configured

        config.ready()

        assert config.username_max_length == expected

    def test_username_length_follows_configured_limit(self, monkeypatch):
        monkeypatch.setattr(apps.get_app_config("accounts"), "username_max_length", 10)

        assert "username" in errors_for(new_user(username="u" * 11))
        new_user(username="u" * 10).full_clean()

    def test_organization_account_needs_no_username(self):
        user = new_user(username=None)
        user.organization = Organization(name="Neighbours United", responsible_name="Ana")
        user.full_clean()

    def test_invalid_organization_is_reported_on_the_account(self):
        user = new_user(username=None)
        user.organization = Organization(name="", responsible_name="")

        assert "organization" in errors_for(user)

    def test_erased_account_needs_no_username_or_email(self, user):
        user.erase("Requested")
        user.full_clean()

    def test_oauth_registration_needs_no_username_or_email(self):
        user = new_user(username=None, email=None, registering_with_oauth=True)
        user.full_clean()

    def test_email_required_for_regular_account(self):
        assert "email" in errors_for(new_user(email=None))

    def test_terms_of_service_required_on_create(self):
        assert "terms_of_service" in errors_for(new_user(terms_of_service=None))
        assert "terms_of_service" in errors_for(new_user(terms_of_service="0"))

    def test_terms_of_service_not_required_on_update(self, user):
        user.full_clean()

    @pytest.mark.parametrize("password", ["1234567", "x" * 129])
    def test_password_length_outside_bounds_fails(self, password):
        assert "password" in errors_for(new_user(password=password))

    def test_password_required_on_create(self):
        user = new_user(password=None)
        user.password = "!"
        assert "password" in errors_for(user)

    def test_skip_password_validation_disables_requirement(self):
        user = new_user(password="short", skip_password_validation=True)
        user.full_clean()

    def test_password_not_required_when_unchanged(self, user):
        user.refresh_from_db()
        assert user.password_required() is False

    def test_locale_must_be_available(self):
        assert "locale" in errors_for(new_user(locale="xx"))
        new_user(locale="es").full_clean()


@pytest.mark.django_db
class TestDocumentNumber:
    """Tests for document number normalization and uniqueness."""

    def test_document_number_is_normalized(self):
        user = new_user(document_type="1", document_number=" 12.345-678 z ")
        user.full_clean()
        assert user.document_number == "12345678Z"

    def test_clean_document_number_keeps_empty_values(self):
        assert clean_document_number(None) is None
        assert clean_document_number("") == ""

    def test_same_document_and_type_fails(self):
        UserFactory(document_type="1", document_number="12345678Z")
        user = new_user(document_type="1", document_number="12345678z")

        assert "document_number" in errors_for(user)

    def test_same_document_different_type_passes(self):
        UserFactory(document_type="1", document_number="12345678Z")
        new_user(document_type="2", document_number="12345678Z").full_clean()

    def test_missing_documents_never_collide(self):
        UserFactory(document_type="1", document_number=None)
        new_user(document_type="1", document_number=None).full_clean()

    def test_database_rejects_duplicate_documents(self):
        UserFactory(document_type="1", document_number="X1")
        with pytest.raises(IntegrityError):
            UserFactory(document_type="1", document_number="X1")


# =============================================================================
# Requirement Policies and Roles
# =============================================================================


@pytest.mark.django_db
class TestRequirementPolicies:
    def test_username_required_for_individual(self, user):
        assert user.username_required() is True

    def test_username_not_required_for_organization(self, organization):
        assert organization.user.username_required() is False

    def test_username_not_required_when_erased(self, user):
        user.erase()
        assert user.username_required() is False

    def test_username_not_required_while_registering_with_oauth(self, user):
        user.registering_with_oauth = True
        assert user.username_required() is False
        assert user.email_required() is False


@pytest.mark.django_db
class TestRoles:
    def test_regular_account_has_no_roles(self, user):
        assert not user.is_administrator
        assert not user.is_moderator
        assert not user.is_organization

    def test_administrator_role(self):
        assert AdministratorFactory().user.is_administrator

    def test_moderator_role(self):
        assert ModeratorFactory().user.is_moderator

    def test_name_is_username_for_individuals(self, user):
        assert user.name == "bob"

    def test_name_is_organization_name_for_organizations(self, organization):
        assert organization.user.name == "Neighbours United"

    def test_verified_organization(self, organization):
        assert not organization.user.is_verified_organization

        organization.verify()

        assert organization.user.is_verified_organization


@pytest.mark.django_db
class TestOfficialPosition:
    """
    Tests for add_official_position/remove_official_position.

    Why it matters: official_level outside 0..5 must never be stored.
    """

    def test_add_official_position(self, user):
        assert user.add_official_position("Mayor", 5) is True

        user.refresh_from_db()
        assert user.official_position == "Mayor"
        assert user.official_level == 5
        assert user.is_official

    def test_level_is_converted_from_text(self, user):
        assert user.add_official_position("Councillor", "3") is True
        assert user.official_level == 3

    @pytest.mark.parametrize("position,level", [("", 3), (None, 3), ("Mayor", None), ("Mayor", "")])
    def test_empty_input_is_ignored(self, user, position, level):
        assert user.add_official_position(position, level) is None

        user.refresh_from_db()
        assert user.official_level == 0
        assert user.official_position is None

    def test_level_out_of_range_is_not_saved(self, user):
        assert user.add_official_position("Emperor", 6) is False

        user.refresh_from_db()
        assert user.official_level == 0

    def test_remove_official_position(self, user):
        user.add_official_position("Mayor", 5)

        user.remove_official_position()

        user.refresh_from_db()
        assert user.official_position is None
        assert user.official_level == 0
        assert not user.is_official

    def test_officials_scope(self, user, other_user):
        user.add_official_position("Mayor", 1)
        assert list(User.objects.officials()) == [user]


# =============================================================================
# State
# =============================================================================


@pytest.mark.django_db
class TestAccountState:
    def test_is_confirmed(self, user):
        assert not user.is_confirmed
        user.confirmed_at = timezone.now()
        assert user.is_confirmed

    def test_show_welcome_screen_on_first_sign_in(self):
        assert UserFactory(sign_in_count=1).show_welcome_screen

    def test_no_welcome_screen_after_first_sign_in(self):
        assert not UserFactory(sign_in_count=2).show_welcome_screen

    def test_no_welcome_screen_for_verified_accounts(self):
        user = UserFactory(sign_in_count=1, level_two_verified_at=timezone.now())
        assert not user.show_welcome_screen

    def test_no_welcome_screen_for_organizations_or_administrators(self, organization):
        organization.user.sign_in_count = 1
        admin = AdministratorFactory(user__sign_in_count=1).user

        assert not organization.user.show_welcome_screen
        assert not admin.show_welcome_screen

    def test_pending_finish_signup(self, user):
        assert not user.pending_finish_signup

        user.email = None
        assert user.pending_finish_signup

        user.unconfirmed_email = "new@example.com"
        assert not user.pending_finish_signup

    def test_official_email_from_settings(self, settings):
        settings.OFFICIAL_EMAIL_DOMAIN = "officials.es"

        assert UserFactory(email="mayor@officials.es").has_official_email
        assert UserFactory(email="clerk@dep.officials.es").has_official_email
        assert not UserFactory(email="someone@notofficials.es").has_official_email

    def test_official_email_setting_overrides_settings(self, settings):
        settings.OFFICIAL_EMAIL_DOMAIN = "officials.es"
        Setting.set("email_domain_for_officials", "city.gov")

        assert UserFactory(email="mayor@city.gov").has_official_email
        assert not UserFactory(email="mayor@officials.es").has_official_email

    def test_no_official_email_without_domain(self, settings):
        settings.OFFICIAL_EMAIL_DOMAIN = ""
        assert not UserFactory(email="mayor@officials.es").has_official_email


@pytest.mark.django_db
class TestLocale:
    def test_get_locale_returns_stored_locale(self):
        assert UserFactory(locale="es").get_locale() == "es"

    def test_get_locale_persists_default_when_unset(self, user, settings):
        settings.LANGUAGE_CODE = "fr"

        assert user.get_locale() == "fr"

        user.refresh_from_db()
        assert user.locale == "fr"

    def test_get_locale_on_unsaved_account_does_not_save(self, settings):
        settings.LANGUAGE_CODE = "de"
        user = new_user()

        assert user.get_locale() == "de"
        assert user.pk is None


# =============================================================================
# Moderation
# =============================================================================


@pytest.mark.django_db
class TestBlock:
    """
    Tests for User.block().

    Why it matters: blocking hides the account and everything it authored
    at that moment, but nothing created afterwards.
    """

    def test_block_hides_account_and_existing_content(self, user, other_user):
        debate = DebateFactory(author=user)
        proposal = ProposalFactory(author=user)
        comment = CommentFactory(user=user, commentable=debate)
        other_debate = DebateFactory(author=other_user)

        user.block()

        for obj in (user, debate, proposal, comment, other_debate):
            obj.refresh_from_db()
        assert user.is_hidden
        assert debate.is_hidden
        assert proposal.is_hidden
        assert comment.is_hidden
        assert not other_debate.is_hidden

    def test_blocked_account_excluded_from_default_queries(self, user):
        user.block()

        assert not User.objects.filter(pk=user.pk).exists()
        assert User.all_objects.filter(pk=user.pk).exists()
        assert list(User.objects.only_hidden()) == [user]

    def test_content_created_after_block_is_visible(self, user):
        user.block()

        later = DebateFactory(author=user)

        assert Debate.objects.filter(pk=later.pk).exists()

    def test_reverse_relations_include_hidden_content(self, user):
        DebateFactory(author=user)
        CommentFactory(user=user)
        user.block()
        DebateFactory(author=user)

        assert user.debates.count() == 2
        assert user.comments.count() == 1
        assert Debate.objects.filter(author=user).count() == 1
        assert Comment.objects.filter(user=user).count() == 0

    def test_block_logs_hidden_counts(self, user):
        ProposalFactory(author=user)

        with patch("accounts.models.logger") as mock_logger:
            user.block()

        mock_logger.info.assert_called_once()
        message = mock_logger.info.call_args[0][0]
        extra = mock_logger.info.call_args[1]["extra"]
        assert message == "Account blocked"
        assert extra["proposals"] == 1
        assert extra["debates"] == 0
        assert Proposal.all_objects.get(author=user).is_hidden


@pytest.mark.django_db
class TestErase:
    """
    Tests for User.erase().

    Why it matters: erasure removes personal data irreversibly but keeps
    the row so authored content keeps its author.
    """

    def test_erase_removes_personal_data(self):
        user = UserFactory(
            document_number="12345678Z",
            phone_number="600000000",
            unconfirmed_email="new@example.com",
            confirmation_token="token",
            reset_password_token="reset",
            email_verification_token="verify",
        )

        assert user.erase("Requested by the user") is True

        user.refresh_from_db()
        assert user.is_erased
        assert user.erase_reason == "Requested by the user"
        assert user.username is None
        assert user.email is None
        assert user.unconfirmed_email is None
        assert user.document_number is None
        assert user.phone_number is None
        assert user.confirmation_token is None
        assert user.reset_password_token is None
        assert user.email_verification_token is None
        assert not user.has_usable_password()

    def test_erase_keeps_roles_and_identities(self, user):
        AdministratorFactory(user=user)
        IdentityFactory(user=user, provider="google", uid="42")

        user.erase("Requested")

        user.refresh_from_db()
        assert user.is_administrator
        assert Identity.objects.filter(user=user, provider="google").exists()

    def test_erase_is_idempotent(self, user):
        with freeze_time("2026-01-01"):
            user.erase("First")

        assert user.erase("Second") is False

        user.refresh_from_db()
        assert user.erase_reason == "First"
        assert user.erased_at == datetime(2026, 1, 1, tzinfo=dt_timezone.utc)

    def test_erased_account_keeps_its_content(self, user):
        debate = DebateFactory(author=user)

        user.erase()

        debate.refresh_from_db()
        assert debate.author_id == user.pk


# =============================================================================
# Votes and Flags
# =============================================================================


@pytest.mark.django_db
class TestVotesAndFlags:
    def test_debate_votes_maps_ids_to_vote_flag(self, user, other_user):
        liked, disliked, unvoted = DebateFactory.create_batch(3)
        VoteFactory(voter=user, votable=liked, vote_flag=True)
        VoteFactory(voter=user, votable=disliked, vote_flag=False)
        VoteFactory(voter=other_user, votable=unvoted)

        assert user.debate_votes(Debate.objects.all()) == {
            liked.pk: True,
            disliked.pk: False,
        }

    def test_debate_votes_accepts_ids(self, user):
        debate = DebateFactory()
        VoteFactory(voter=user, votable=debate)

        assert user.debate_votes([debate.pk]) == {debate.pk: True}

    def test_votes_on_other_types_are_not_mixed(self, user):
        debate = DebateFactory()
        proposal = ProposalFactory()
        VoteFactory(voter=user, votable=proposal)

        assert user.debate_votes([debate.pk, proposal.pk]) == {}
        assert user.proposal_votes([proposal]) == {proposal.pk: True}

    def test_no_subjects_give_empty_mappings(self, user):
        VoteFactory(voter=user, votable=DebateFactory())

        assert user.votes_for([]) == {}
        assert user.votes_for(iter(())) == {}
        assert user.flags_for([]) == {}
        assert user.debate_votes(Debate.objects.none()) == {}

    def test_votes_for_ids_requires_model(self, user):
        with pytest.raises(ValueError):
            user.votes_for([1, 2])

    def test_comment_flags(self, user):
        flagged, unflagged = CommentFactory.create_batch(2)
        FlagFactory(user=user, flaggable=flagged)

        assert user.comment_flags(Comment.objects.all()) == {flagged.pk: True}


# =============================================================================
# Supporting Models
# =============================================================================


@pytest.mark.django_db
class TestOrganization:
    def test_new_organization_is_neither_verified_nor_rejected(self, organization):
        assert not organization.is_verified
        assert not organization.is_rejected

    def test_latest_decision_wins(self, organization):
        with freeze_time("2026-01-01"):
            organization.verify()
        assert organization.is_verified

        with freeze_time("2026-02-01"):
            organization.reject()
        assert organization.is_rejected
        assert not organization.is_verified

        with freeze_time("2026-03-01"):
            organization.verify()
        assert organization.is_verified
        assert not organization.is_rejected

    def test_organization_name_is_unique(self, organization):
        with pytest.raises(IntegrityError):
            OrganizationFactory(name=organization.name)

    def test_organizations_scope(self, organization, user):
        assert list(User.objects.organizations()) == [organization.user]


@pytest.mark.django_db
class TestLock:
    """
    Tests for Lock.

    Why it matters: every LOCK_MAX_TRIES-th failure locks the account for
    2**tries minutes, so repeated abuse gets ever longer lockouts.
    """

    def test_new_account_is_not_locked(self, user):
        assert not user.is_locked
        assert Lock.objects.filter(user=user).count() == 1

    def test_is_locked_reuses_existing_lock(self, user):
        user.is_locked
        user.is_locked
        assert Lock.objects.filter(user=user).count() == 1

    @freeze_time("2026-01-01 12:00:00")
    def test_lock_after_max_tries(self, user, settings):
        settings.LOCK_MAX_TRIES = 5
        for _ in range(4):
            Lock.increase_tries(user)
        assert not user.is_locked

        lock = Lock.increase_tries(user)

        assert lock.tries == 5
        assert lock.locked_until == timezone.now() + timedelta(minutes=32)
        assert user.is_locked

    def test_lock_expires(self, user, settings):
        settings.LOCK_MAX_TRIES = 1
        with freeze_time("2026-01-01 12:00:00"):
            Lock.increase_tries(user)
            assert user.is_locked

        with freeze_time("2026-01-01 12:03:00"):
            assert not user.is_locked


@pytest.mark.django_db
class TestIdentity:
    def test_first_or_create_from_oauth_is_idempotent(self):
        payload = OAuthPayload(provider="google", uid="123")

        first = Identity.first_or_create_from_oauth(payload)
        second = Identity.first_or_create_from_oauth(payload)

        assert first.pk == second.pk
        assert first.user is None
        assert Identity.objects.count() == 1
