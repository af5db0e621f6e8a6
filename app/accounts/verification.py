"""
Verification levels for accounts.

An account climbs verification levels as it proves residence and phone
ownership, or is verified in person:

    unverified -> level two (residence + SMS) -> level three (in person)

The mixin only reads fields stored on the User model; it has no state of
its own.

Related files:
    - models.py: User fields (residence_verified_at, confirmed_phone, ...)
"""


class VerificationMixin:
    """
    Read-only verification predicates for the User model.

    Fields used:
        email_verification_token: Pending email verification token
        residence_verified_at: When the census check succeeded
        confirmed_phone: Phone number confirmed by SMS code
        level_two_verified_at: Explicit level two verification
        verified_at: In-person (level three) verification
    """

    @property
    def verification_email_sent(self):
        return bool(self.email_verification_token)

    @property
    def is_residence_verified(self):
        return self.residence_verified_at is not None

    @property
    def is_sms_verified(self):
        return bool(self.confirmed_phone)

    @property
    def is_level_two_verified(self):
        if self.level_two_verified_at is not None:
            return True
        return self.is_residence_verified and self.is_sms_verified

    @property
    def is_level_three_verified(self):
        return self.verified_at is not None

    @property
    def is_unverified(self):
        return not self.is_level_three_verified and not self.is_level_two_verified
