# users/schemas.py
from drf_spectacular.utils import OpenApiExample, inline_serializer, OpenApiResponse
from rest_framework import serializers

# Login schema
login_schema = {
    'operation_id': 'Login',
    'description': """
    Authenticate a dashboard user and receive tokens.

    Returns a refresh token in the response body and sets the access token in an
    HTTP-only cookie. Only accounts with the `admin` or `staff` role may log in.
    """,
    'request': {
        "application/json": inline_serializer(
            name='LoginRequest',
            fields={
                'email': serializers.EmailField(help_text="Account email"),
                'password': serializers.CharField(min_length=6, help_text="Password (min 6 characters)"),
            }
        )
    },
    'responses': {
        200: OpenApiResponse(
            response=inline_serializer(
                name="LoginSuccess",
                fields={
                    "message": serializers.CharField(default="Login successful"),
                    "refresh": serializers.CharField(),
                }
            ),
            description="Successful login. Access token is set in HttpOnly Cookie."
        ),
        400: OpenApiResponse(
            response=inline_serializer(
                name="LoginError",
                fields={"error": serializers.CharField(default="Incorrect email or password.")},
            ),
            description="Incorrect credentials or restricted account."
        ),
    },
    "examples": [
        OpenApiExample(
            "Dashboard Login",
            value={"email": "reception@akwalodge.com", "password": "secure123"},
            request_only=True,
        ),
    ],
}

# Me schema
me_schema = {
    'operation_id': 'Me',
    'description': "Retrieve the current authenticated user's profile.",
    'responses': {
        200: inline_serializer(
            name="UserProfile",
            fields={
                "id": serializers.IntegerField(),
                "email": serializers.EmailField(),
                "name": serializers.CharField(),
                "role": serializers.ChoiceField(choices=["admin", "staff"]),
            },
        ),
        401: OpenApiResponse(description="Missing or invalid authentication credentials."),
    }
}

# Logout schema
logout_schema = {
    'operation_id': 'Logout',
    'description': """
    Log out the current user.

    Clears the access token cookie and blacklists the refresh token when one is sent.
    """,
    'request': {
        "application/json": inline_serializer(
            name='LogoutRequest',
            fields={'refresh': serializers.CharField(required=False)}
        )
    },
    'responses': {
        200: inline_serializer(
            name="LogoutSuccess",
            fields={"message": serializers.CharField(default="Logged out successfully")}
        ),
    }
}
