"""
URL configuration for accounts app.

URL structure:
    /api/v1/accounts/me/            - Current account (GET/PATCH)
    /api/v1/accounts/me/finish-signup/ - Complete an external identity signup
    /api/v1/accounts/search/        - Account search (moderators)
    /api/v1/accounts/<id>/block/    - Block account (moderators)
    /api/v1/accounts/<id>/erase/    - Erase account (moderators)

Note:
    Sign-in, signup and provider callbacks are served by allauth under
    /accounts/ (see config/urls.py).
"""

from django.urls import path

from accounts.views import (
    AccountBlockView,
    AccountEraseView,
    AccountSearchView,
    AccountView,
    FinishSignupView,
)

app_name = "accounts"

urlpatterns = [
    path("me/", AccountView.as_view(), name="me"),
    path("me/finish-signup/", FinishSignupView.as_view(), name="finish-signup"),
    path("search/", AccountSearchView.as_view(), name="search"),
    path("<int:pk>/block/", AccountBlockView.as_view(), name="block"),
    path("<int:pk>/erase/", AccountEraseView.as_view(), name="erase"),
]
