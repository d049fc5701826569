# smarttask/authentication.py
import logging

import jwt
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from smarttask_user.tokens import decode_access_token

logger = logging.getLogger(__name__)


class InvalidToken(exceptions.AuthenticationFailed):
    default_code = 'invalid_token'


class BearerTokenAuthentication(BaseAuthentication):
    """
    Resolve the caller from an ``Authorization: Bearer <access token>`` header.

    No header at all returns None so DRF answers 401 ``missing_auth`` through
    the permission check; anything present but unusable is rejected here.
    """

    keyword = 'Bearer'

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth:
            return None

        if auth[0].lower() != self.keyword.lower().encode() or len(auth) != 2:
            raise InvalidToken('Authorization header must be "Bearer <token>"')

        try:
            token = auth[1].decode('utf-8')
        except UnicodeError:
            raise InvalidToken('Token contains invalid characters')

        try:
            payload = decode_access_token(token)
        except jwt.InvalidTokenError as e:
            logger.info('Token verification failed: %s', e)
            raise InvalidToken(str(e))

        user_id = payload.get('sub')
        if not user_id:
            raise InvalidToken('Token does not contain user ID')

        User = get_user_model()
        try:
            user = User.objects.get(pk=user_id, is_active=True)
        except (User.DoesNotExist, ValueError, DjangoValidationError):
            # malformed UUIDs surface as django's ValidationError
            logger.info('Token subject %r does not match an active user', user_id)
            raise InvalidToken('User not found')

        return user, payload

    def authenticate_header(self, request):
        return self.keyword
