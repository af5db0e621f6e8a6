"""
Account views.

This module provides API views for:
- The signed-in account (read and update, including its organization)
- Account search for moderators
- Blocking and erasing accounts (moderators and administrators)

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (AccountService)
    - urls.py: URL routing

Note:
    Sign-in, signup and external identity logins are handled by allauth
    (see adapters.py and config/urls.py).
"""

import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.models import User
from accounts.serializers import (
    AccountSerializer,
    AccountSummarySerializer,
    EraseRequestSerializer,
    FinishSignupSerializer,
)
from accounts.services import AccountService
from core.exceptions import (
    BaseApplicationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)

SEARCH_RESULTS_LIMIT = 50

ERROR_STATUSES = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    ConflictError: status.HTTP_409_CONFLICT,
}


def error_response(exc: BaseApplicationError) -> Response:
    """Render an application error with its matching HTTP status."""
    return Response(
        exc.to_dict(),
        status=ERROR_STATUSES.get(type(exc), status.HTTP_400_BAD_REQUEST),
    )


# =============================================================================
# Signed-in Account
# =============================================================================


class AccountView(APIView):
    """
    API view for the signed-in account.

    GET: Retrieve the account
    PATCH: Update username, preferences and organization data

    URL: /api/v1/accounts/me/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get current account",
        tags=["Accounts"],
        responses={200: AccountSerializer},
    )
    def get(self, request):
        user = request.user
        user.get_locale()
        return Response(AccountSerializer(user).data)

    @extend_schema(
        summary="Update current account",
        description=(
            "Partial update. Username is required for individual accounts; "
            "organization accounts may update their organization name and "
            "responsible person."
        ),
        tags=["Accounts"],
        request=AccountSerializer,
        responses={200: AccountSerializer},
    )
    def patch(self, request):
        serializer = AccountSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(AccountSerializer(user).data)


class FinishSignupView(APIView):
    """
    Complete a registration started through an identity provider.

    URL: /api/v1/accounts/me/finish-signup/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Finish signup",
        description="Set the username and email missing after an external identity login.",
        tags=["Accounts"],
        request=FinishSignupSerializer,
        responses={200: AccountSerializer},
    )
    def post(self, request):
        serializer = FinishSignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AccountService.finish_signup(
            request.user,
            serializer.validated_data["username"],
            serializer.validated_data["email"],
        )
        if not result:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)
        return Response(AccountSerializer(result.data).data)


# =============================================================================
# Moderation
# =============================================================================


class AccountSearchView(APIView):
    """
    Search accounts by exact email or partial username.

    URL: /api/v1/accounts/search/?q=<term>
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Search accounts",
        tags=["Accounts - Moderation"],
        parameters=[
            OpenApiParameter("q", str, description="Email or part of a username"),
        ],
        responses={200: AccountSummarySerializer(many=True)},
    )
    def get(self, request):
        try:
            AccountService.check_moderation_rights(request.user, "search")
        except PermissionDeniedError as e:
            return error_response(e)

        term = request.query_params.get("q", "")
        users = User.objects.search(term).for_render()[:SEARCH_RESULTS_LIMIT]
        return Response(AccountSummarySerializer(users, many=True).data)


class AccountBlockView(APIView):
    """
    Block an account and hide its content.

    URL: /api/v1/accounts/<id>/block/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Block account",
        tags=["Accounts - Moderation"],
        request=None,
        responses={
            200: AccountSummarySerializer,
            403: OpenApiResponse(description="Moderator role required"),
            404: OpenApiResponse(description="Account not found"),
        },
    )
    def post(self, request, pk):
        try:
            user = AccountService.block(request.user, pk)
        except BaseApplicationError as e:
            return error_response(e)
        return Response(AccountSummarySerializer(user).data)


class AccountEraseView(APIView):
    """
    Erase an account's personal data.

    URL: /api/v1/accounts/<id>/erase/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Erase account",
        tags=["Accounts - Moderation"],
        request=EraseRequestSerializer,
        responses={
            200: AccountSummarySerializer,
            403: OpenApiResponse(description="Moderator role required"),
            404: OpenApiResponse(description="Account not found"),
            409: OpenApiResponse(description="Account already erased"),
        },
    )
    def post(self, request, pk):
        serializer = EraseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = AccountService.erase(
                request.user, pk, serializer.validated_data.get("erase_reason")
            )
        except BaseApplicationError as e:
            return error_response(e)

        logger.info(
            "Account erased by moderator",
            extra={"user_id": user.pk, "moderator_id": request.user.pk},
        )
        return Response(AccountSummarySerializer(user).data)
