"""
Accounts application.

This app represents registered users and organization profiles: their
credentials, verification state, moderation roles and their relationships
to participation content.

Key components:
    - User model: Account record (roles, official position, block, erase)
    - Organization, Administrator, Moderator, Lock, Identity models
    - AccountService: OAuth lookup, validated saves, organization signup
    - OAuth adapters: allauth social authentication

Usage:
    from accounts.models import User, Organization
    from accounts.services import AccountService
"""
