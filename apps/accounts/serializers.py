import re

from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from .models import User, UserProfile, Role

PHONE_PATTERN = re.compile(r'^\+?[1-9]\d{0,15}$')

EMAIL_ERROR_MESSAGES = {
    'required': 'Please enter your email address',
    'blank': 'Please enter your email address',
    'invalid': 'Please enter a valid email address',
}


def validate_phone(value):
    """Accept an optional international number; spaces are ignored."""
    if value and not PHONE_PATTERN.match(re.sub(r'\s', '', value)):
        raise serializers.ValidationError('Please enter a valid phone number')
    return value


class UserSerializer(serializers.ModelSerializer):
    """Sign-in identity."""

    class Meta:
        model = User
        fields = ['id', 'email', 'created_at', 'last_login']
        read_only_fields = fields


class UserProfileSerializer(serializers.ModelSerializer):
    """Profile as shown on the dashboard and profile pages."""

    uid = serializers.UUIDField(source='user_id', read_only=True)
    full_name = serializers.CharField(read_only=True)
    initials = serializers.CharField(read_only=True)

    class Meta:
        model = UserProfile
        fields = [
            'uid',
            'email',
            'first_name',
            'last_name',
            'full_name',
            'initials',
            'role',
            'department',
            'phone',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Sign-up form: identity credentials plus the initial profile."""

    email = serializers.EmailField(error_messages=EMAIL_ERROR_MESSAGES)
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        style={'input_type': 'password'}
    )
    first_name = serializers.CharField(
        max_length=100,
        error_messages={'blank': 'First name is required', 'required': 'First name is required'}
    )
    last_name = serializers.CharField(
        max_length=100,
        error_messages={'blank': 'Last name is required', 'required': 'Last name is required'}
    )
    role = serializers.ChoiceField(choices=Role.choices, default=Role.WORKER)
    department = serializers.CharField(max_length=100, allow_blank=True, default='')
    phone = serializers.CharField(
        max_length=20,
        allow_blank=True,
        default='',
        validators=[validate_phone]
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(error_messages=EMAIL_ERROR_MESSAGES)
    password = serializers.CharField(
        write_only=True,
        style={'input_type': 'password'}
    )


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(help_text="Refresh token to blacklist")


class PasswordResetRequestSerializer(serializers.Serializer):
    """Forgot-password form."""

    email = serializers.EmailField(error_messages=EMAIL_ERROR_MESSAGES)


class PasswordResetConfirmSerializer(serializers.Serializer):
    """Serializer for password reset confirmation."""

    token = serializers.CharField()
    new_password = serializers.CharField(
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    new_password_confirm = serializers.CharField(
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['new_password'] != attrs['new_password_confirm']:
            raise serializers.ValidationError({
                'new_password_confirm': 'Passwords do not match'
            })
        return attrs


class ProfileUpdateSerializer(serializers.Serializer):
    """
    Profile edit form.

    First name, last name and department are required on every save; the
    phone number is optional but must look like a phone number.
    """

    first_name = serializers.CharField(
        max_length=100,
        error_messages={'blank': 'First name is required', 'required': 'First name is required'}
    )
    last_name = serializers.CharField(
        max_length=100,
        error_messages={'blank': 'Last name is required', 'required': 'Last name is required'}
    )
    department = serializers.CharField(
        max_length=100,
        error_messages={'blank': 'Department is required', 'required': 'Department is required'}
    )
    phone = serializers.CharField(
        max_length=20,
        required=False,
        allow_blank=True,
        validators=[validate_phone]
    )
    role = serializers.ChoiceField(choices=Role.choices, required=False)
