"""
Forms for django-allauth.

Configured through ACCOUNT_FORMS in settings.py.
"""

from allauth.account.forms import SignupForm as AllauthSignupForm
from django import forms


class SignupForm(AllauthSignupForm):
    """Email signup with the terms of service checkbox."""

    terms_of_service = forms.BooleanField(
        required=True,
        label="I accept the terms of service",
    )
