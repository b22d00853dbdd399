"""
Moderator authentication endpoints.

SimpleJWT issues and refreshes the tokens; these views restrict sign-in to
staff accounts, blacklist refresh tokens on sign-out, and tell the admin
panel who is signed in.
"""

import logging

from django.contrib.auth.signals import user_logged_in
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from .serializers import AdminUserSerializer, LoginSerializer, LogoutSerializer

logger = logging.getLogger(__name__)


def token_pair(user):
    refresh = RefreshToken.for_user(user)
    return {"access": str(refresh.access_token), "refresh": str(refresh)}


class LoginView(APIView):
    """POST /api/v1/auth/login/ → ``{user, tokens: {access, refresh}}``"""

    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]

        # Keeps ``last_login`` current for the admin panel.
        user_logged_in.send(sender=user.__class__, request=request, user=user)
        logger.info("Moderator %s signed in", user.username)
        return Response({"user": AdminUserSerializer(user).data, "tokens": token_pair(user)})


class LogoutView(APIView):
    """POST /api/v1/auth/logout/ with ``{"refresh": ...}``"""

    permission_classes = [IsAdminUser]

    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("Moderator %s signed out", request.user.username)
        return Response({"detail": "Successfully logged out."}, status=status.HTTP_200_OK)


class MeView(generics.RetrieveAPIView):
    """GET /api/v1/auth/me/ → the signed-in moderator."""

    serializer_class = AdminUserSerializer
    permission_classes = [IsAdminUser]

    def get_object(self):
        return self.request.user
