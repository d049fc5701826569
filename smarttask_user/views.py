# smarttask_user/views.py

import logging

import jwt
from django.conf import settings
from django.db import IntegrityError, transaction
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import RefreshToken, User
from .serializers import ChangePasswordSerializer, LoginSerializer, RegisterSerializer, UserSerializer
from .tokens import decode_refresh_token, hash_token, issue_access_token, issue_refresh_token

logger = logging.getLogger(__name__)


def _invalid_input(serializer):
    return Response({'error': 'invalid_input', 'details': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)


def _session_response(user, status_code=status.HTTP_200_OK):
    """Issue an access token in the body and a refresh token as an http-only cookie."""
    access = issue_access_token(user)
    refresh, _ = issue_refresh_token(user)
    response = Response(
        {'access_token': access, 'user': UserSerializer(user).data},
        status=status_code,
    )
    response.set_cookie(
        settings.REFRESH_COOKIE_NAME,
        refresh,
        max_age=settings.JWT_REFRESH_TTL_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite='Lax',
        secure=not settings.DEBUG,
    )
    return response


def _find_refresh_token(raw_token):
    """
    Resolve a raw refresh cookie to its stored row.

    Returns None when the JWT does not verify or no row matches the
    (user, hash) pair.
    """
    try:
        payload = decode_refresh_token(raw_token)
    except jwt.InvalidTokenError as e:
        logger.info('Refresh token rejected: %s', e)
        return None
    return RefreshToken.objects.filter(
        user_id=payload.get('sub'), token_hash=hash_token(raw_token)
    ).select_related('user').first()


class RegisterView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_input(serializer)
        data = serializer.validated_data

        if User.objects.filter(email=data['email']).exists():
            return Response({'error': 'email_taken'}, status=status.HTTP_409_CONFLICT)

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=data['email'],
                    email=data['email'],
                    password=data['password'],
                    name=data['name'],
                )
        except IntegrityError:
            # lost a race against a concurrent registration
            return Response(
                {'error': 'email_taken', 'message': 'Email is already registered'},
                status=status.HTTP_409_CONFLICT,
            )

        logger.info('User created id=%s email=%s', user.pk, user.email)
        return _session_response(user, status.HTTP_201_CREATED)


class LoginView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_input(serializer)
        data = serializer.validated_data

        user = User.objects.filter(email=data['email'], is_active=True).first()
        if user is None or not user.check_password(data['password']):
            logger.info('Login failed for email=%s', data['email'])
            return Response({'error': 'invalid_credentials'}, status=status.HTTP_401_UNAUTHORIZED)

        return _session_response(user)


class RefreshView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        raw = request.COOKIES.get(settings.REFRESH_COOKIE_NAME)
        if not raw:
            return Response({'error': 'missing_refresh'}, status=status.HTTP_401_UNAUTHORIZED)

        stored = _find_refresh_token(raw)
        if stored is None or not stored.is_usable():
            return Response({'error': 'invalid_refresh'}, status=status.HTTP_401_UNAUTHORIZED)

        return Response({'access_token': issue_access_token(stored.user)})


class LogoutView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        raw = request.COOKIES.get(settings.REFRESH_COOKIE_NAME)
        if raw:
            stored = _find_refresh_token(raw)
            if stored is not None and not stored.revoked:
                stored.revoked = True
                stored.save(update_fields=['revoked'])
                logger.info('Refresh token %s revoked', stored.pk)

        response = Response({'ok': True})
        response.delete_cookie(settings.REFRESH_COOKIE_NAME, samesite='Lax')
        return response


class ChangePasswordView(APIView):
    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_input(serializer)
        data = serializer.validated_data
        user = request.user

        if not user.check_password(data['current_password']):
            return Response(
                {'error': 'invalid_current', 'message': 'Current password is incorrect'},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if data['current_password'] == data['new_password']:
            return Response(
                {'error': 'password_unchanged', 'message': 'New password must be different'},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user.set_password(data['new_password'])
        user.save(update_fields=['password', 'updated_at'])
        logger.info('Password changed for user=%s', user.pk)
        return Response({'ok': True})


class MeView(APIView):
    def get(self, request):
        return Response(UserSerializer(request.user).data)

    def patch(self, request):
        serializer = UserSerializer(request.user, data=request.data, partial=True)
        if not serializer.is_valid():
            return _invalid_input(serializer)
        serializer.save()
        return Response(serializer.data)
