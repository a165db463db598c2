import logging

from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from apps.core.views import BackendMixin, envelope_error_response
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    UserProfileSerializer,
    LogoutSerializer,
    PasswordResetRequestSerializer,
    PasswordResetConfirmSerializer,
    ProfileUpdateSerializer,
)

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('first_name', 'last_name', 'role', 'department', 'phone')


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    profile = UserProfileSerializer(allow_null=True)
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


class RegisterView(BackendMixin, APIView):
    """Sign up, then create the profile for the new identity."""

    permission_classes = [AllowAny]

    @extend_schema(
        request=UserRegistrationSerializer,
        responses={
            201: AuthResponseSerializer,
            400: ErrorResponseSerializer,
        },
        description="Create an account and its profile, and receive JWT tokens.",
        tags=['auth'],
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        backend = self.get_backend()
        signup = backend.sign_up(data['email'], data['password'])
        if signup.error:
            return Response({'error': signup.error}, status=status.HTTP_400_BAD_REQUEST)
        user = signup.result

        # Separate call; the account stays usable if this one fails
        created = backend.create_user_profile(
            user,
            **{name: data[name] for name in PROFILE_FIELDS}
        )
        if created.error:
            logger.warning("User %s registered without a profile", user.id)
        profile = UserProfileSerializer(created.result).data if created.ok else None

        return Response({
            'message': 'Registration successful',
            'user': UserSerializer(user).data,
            'profile': profile,
            'tokens': _tokens_for(user),
        }, status=status.HTTP_201_CREATED)


class LoginView(BackendMixin, APIView):
    """Login with email and password."""

    permission_classes = [AllowAny]

    @extend_schema(
        request=UserLoginSerializer,
        responses={
            200: AuthResponseSerializer,
            400: ErrorResponseSerializer,
            401: ErrorResponseSerializer,
        },
        description="Authenticate with email and password to receive JWT tokens.",
        tags=['auth'],
    )
    def post(self, request):
        serializer = UserLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        backend = self.get_backend()
        signin = backend.sign_in(
            serializer.validated_data['email'],
            serializer.validated_data['password'],
        )
        if signin.error:
            return Response({'error': signin.error}, status=status.HTTP_401_UNAUTHORIZED)
        user = signin.result

        loaded = backend.get_user_profile(user.id)

        return Response({
            'message': 'Login successful',
            'user': UserSerializer(user).data,
            'profile': UserProfileSerializer(loaded.result).data if loaded.ok else None,
            'tokens': _tokens_for(user),
        })


class LogoutView(BackendMixin, APIView):
    """Logout and blacklist refresh token."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=LogoutSerializer,
        responses={
            200: MessageResponseSerializer,
            400: ErrorResponseSerializer,
        },
        description="Logout by blacklisting the refresh token.",
        tags=['auth'],
    )
    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        signout = self.get_backend().sign_out(serializer.validated_data['refresh'])
        if signout.error:
            return Response({'error': 'Invalid token'}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'message': 'Logout successful'})


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated identity.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user."""
    return Response(UserSerializer(request.user).data)


class PasswordResetRequestView(BackendMixin, APIView):
    """Forgot-password form submission."""

    permission_classes = [AllowAny]

    @extend_schema(
        request=PasswordResetRequestSerializer,
        responses={
            200: MessageResponseSerializer,
            400: ErrorResponseSerializer,
        },
        description="Send a password reset email. Unknown addresses get the same answer.",
        tags=['auth'],
    )
    def post(self, request):
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        sent = self.get_backend().reset_password(serializer.validated_data['email'])
        if sent.error:
            return Response({'error': sent.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'message': 'If an account exists for this email, a password reset link has been sent'
        })


class PasswordResetConfirmView(BackendMixin, APIView):
    """Confirm password reset with token."""

    permission_classes = [AllowAny]

    @extend_schema(
        request=PasswordResetConfirmSerializer,
        responses={
            200: MessageResponseSerializer,
            400: ErrorResponseSerializer,
        },
        description="Confirm password reset with token and set new password.",
        tags=['auth'],
    )
    def post(self, request):
        serializer = PasswordResetConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reset = self.get_backend().confirm_password_reset(
            serializer.validated_data['token'],
            serializer.validated_data['new_password'],
        )
        if reset.error:
            return Response({'error': reset.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'message': 'Password reset successful'})


class ProfileView(BackendMixin, APIView):
    """
    Current user's profile.

    GET   /api/profile/
    PATCH /api/profile/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: UserProfileSerializer, 404: ErrorResponseSerializer},
        tags=['profile'],
    )
    def get(self, request):
        loaded = self.get_backend().get_user_profile(request.user.id)
        if loaded.error:
            return envelope_error_response(loaded.error)
        return Response(UserProfileSerializer(loaded.result).data)

    @extend_schema(
        request=ProfileUpdateSerializer,
        responses={200: UserProfileSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=['profile'],
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated = self.get_backend().update_user_profile(
            request.user.id,
            **serializer.validated_data
        )
        if updated.error:
            return envelope_error_response(updated.error)
        return Response(UserProfileSerializer(updated.result).data)
