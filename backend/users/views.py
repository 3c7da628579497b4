from rest_framework.parsers import JSONParser
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError
from django.conf import settings
from drf_spectacular.utils import extend_schema
import logging

from .serializers import LoginSerializer, UserSerializer
from .schemas import login_schema, me_schema, logout_schema

# Setup logger for debugging and tracking requests
logger = logging.getLogger(__name__)


class LoginView(APIView):
    """
    API for dashboard authentication.
    - Returns the refresh token if authentication is successful
    - Stores the access token in HttpOnly Secure Cookie
    """
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]

    @extend_schema(**login_schema)
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data # Get authenticated user
        tokens = RefreshToken.for_user(user)

        response = Response({
            "message": "Login successful",
            "refresh": str(tokens),
        }, status=status.HTTP_200_OK)

        # Set JWT access token in HttpOnly Secure Cookie
        response.set_cookie(
            key=settings.SIMPLE_JWT["AUTH_COOKIE"],
            value=str(tokens.access_token),
            httponly=settings.SIMPLE_JWT["AUTH_COOKIE_HTTP_ONLY"],
            secure=settings.SIMPLE_JWT["AUTH_COOKIE_SECURE"],
            samesite=settings.SIMPLE_JWT["AUTH_COOKIE_SAMESITE"],
            max_age=60 * 60 * 24,  # Valid for 1 day
        )
        logger.info(f"Dashboard login for {user.email}")
        return response


class UserProfileView(APIView):
    """
    API to get the currently authenticated user's information.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(**me_schema)
    def get(self, request):
        return Response(UserSerializer(request.user).data)


class LogoutView(APIView):
    """
    API for user logout.
    - Invalidates the refresh token
    - Deletes the access token from HttpOnly Cookie
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(**logout_schema)
    def post(self, request):
        response = Response({"message": "Logged out successfully"}, status=status.HTTP_200_OK)

        response.delete_cookie(
            settings.SIMPLE_JWT["AUTH_COOKIE"],
            path=settings.SIMPLE_JWT.get("AUTH_COOKIE_PATH", "/"),
            samesite=settings.SIMPLE_JWT["AUTH_COOKIE_SAMESITE"],
        )

        refresh_token = request.data.get("refresh")
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                logger.warning(f"Failed to blacklist refresh token: {e}")

        return response
