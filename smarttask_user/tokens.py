# smarttask_user/tokens.py
"""
Access/refresh token issuing.

Access tokens are short-lived JWTs checked on every request. Refresh tokens
are longer-lived JWTs handed out as an http-only cookie; only their SHA-256
hash is stored (see RefreshToken), so a leaked table cannot be replayed.
"""
import datetime
import hashlib
import uuid

import jwt
from django.conf import settings
from django.utils import timezone

from .models import RefreshToken

ALGORITHM = 'HS256'
ACCESS = 'access'
REFRESH = 'refresh'


def hash_token(token):
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


def _encode(user, kind, secret, lifetime):
    now = timezone.now()
    payload = {
        'sub': str(user.pk),
        'type': kind,
        'iat': now,
        'exp': now + lifetime,
        'jti': uuid.uuid4().hex,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def issue_access_token(user):
    lifetime = datetime.timedelta(minutes=settings.JWT_ACCESS_TTL_MINUTES)
    return _encode(user, ACCESS, settings.JWT_SECRET, lifetime)


def issue_refresh_token(user):
    """
    Create a refresh JWT and persist its hash.

    Returns:
        tuple: (raw token, RefreshToken row)
    """
    lifetime = datetime.timedelta(days=settings.JWT_REFRESH_TTL_DAYS)
    token = _encode(user, REFRESH, settings.JWT_REFRESH_SECRET, lifetime)
    stored = RefreshToken.objects.create(
        user=user,
        token_hash=hash_token(token),
        expires_at=timezone.now() + lifetime,
    )
    return token, stored


def decode_access_token(token):
    """Raises jwt.InvalidTokenError when the token is bad, expired, or not an access token."""
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
    if payload.get('type') != ACCESS:
        raise jwt.InvalidTokenError('Not an access token')
    return payload


def decode_refresh_token(token):
    payload = jwt.decode(token, settings.JWT_REFRESH_SECRET, algorithms=[ALGORITHM])
    if payload.get('type') != REFRESH:
        raise jwt.InvalidTokenError('Not a refresh token')
    return payload
