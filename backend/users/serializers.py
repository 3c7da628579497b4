from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth import authenticate

User = get_user_model() # AUTH_USER_MODEL = 'users.User'


class LoginSerializer(serializers.Serializer):
    """
    Serializer for dashboard login using email & password.

    - Validates user credentials and returns the authenticated user.
    - Accounts without a dashboard role are refused even with valid credentials.
    """
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)

    def validate(self, data):
        """Authenticate user and return the validated user instance."""
        user = authenticate(email=data['email'].lower(), password=data['password'])
        if not user:
            raise serializers.ValidationError({"error": "Incorrect email or password."})

        if not user.can_access_dashboard():
            raise serializers.ValidationError({"error": "Account is disabled or restricted."})

        return user


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'role']
        read_only_fields = fields
