"""
Provider-neutral view of an external identity login.

allauth hands us a SocialLogin whose shape depends on the provider. This
module flattens the parts account lookup needs into an OAuthPayload.

Related files:
    - services.py: AccountService.first_or_initialize_for_oauth
    - adapters.py: Builds payloads from allauth SocialLogin objects
"""

from __future__ import annotations

from dataclasses import dataclass

from django.utils.text import slugify


@dataclass(frozen=True)
class OAuthPayload:
    """
    Identity data reported by an external provider.

    Attributes:
        provider: Provider name (e.g. "google", "facebook")
        uid: Account identifier at the provider
        email: Email reported by the provider (may be unverified)
        verified: Provider says the account is verified
        verified_email: Provider says the email is verified
        nickname: Provider handle, if any
        name: Display name, if any
    """

    provider: str
    uid: str
    email: str | None = None
    verified: bool = False
    verified_email: bool = False
    nickname: str | None = None
    name: str | None = None

    @property
    def trusted_email(self) -> str | None:
        """The email, only when the provider vouches for it."""
        if self.verified or self.verified_email:
            return self.email or None
        return None

    @property
    def username(self) -> str:
        """Username candidate: nickname, then slugified name, then uid."""
        return self.nickname or slugify(self.name or "") or str(self.uid)

    @classmethod
    def from_sociallogin(cls, sociallogin) -> OAuthPayload:
        """
        Build a payload from an allauth SocialLogin.

        Verification comes from the provider's extra data ("verified",
        "verified_email", "email_verified") or from a verified
        EmailAddress attached to the login.
        """
        account = sociallogin.account
        extra = account.extra_data or {}
        addresses = list(getattr(sociallogin, "email_addresses", None) or [])

        email = extra.get("email") or (addresses[0].email if addresses else None)
        verified_addresses = {address.email for address in addresses if address.verified}

        return cls(
            provider=account.provider,
            uid=str(account.uid),
            email=email,
            verified=bool(extra.get("verified")),
            verified_email=bool(
                extra.get("verified_email")
                or extra.get("email_verified")
                or (email and email in verified_addresses)
            ),
            nickname=extra.get("nickname") or extra.get("screen_name") or extra.get("login"),
            name=extra.get("name"),
        )
