# tests/test_auth.py

from __future__ import annotations

import datetime

import jwt
from django.conf import settings
from django.utils import timezone

from smarttask_user.models import RefreshToken, User
from smarttask_user.tokens import hash_token, issue_access_token

from .conftest import PASSWORD

REGISTER = {'name': 'Carol', 'email': 'Carol@Example.com', 'password': 'S3cure!pwd'}


def test_register_returns_access_token_and_cookie(anon_client) -> None:
    resp = anon_client.post('/auth/register', REGISTER, format='json')

    assert resp.status_code == 201
    body = resp.json()
    assert body['user']['email'] == 'carol@example.com'
    assert body['user']['name'] == 'Carol'
    assert 'password' not in body['user']
    assert body['access_token']

    cookie = resp.cookies[settings.REFRESH_COOKIE_NAME]
    assert cookie['httponly']
    # only the hash of the refresh token is persisted
    stored = RefreshToken.objects.get()
    assert stored.token_hash == hash_token(cookie.value)
    assert stored.token_hash != cookie.value


def test_register_rejects_weak_password_and_duplicates(anon_client, user) -> None:
    weak = anon_client.post('/auth/register', {**REGISTER, 'password': 'password1'}, format='json')
    taken = anon_client.post('/auth/register', {**REGISTER, 'email': user.email}, format='json')

    assert weak.status_code == 400
    assert weak.json()['error'] == 'invalid_input'
    assert taken.status_code == 409
    assert taken.json()['error'] == 'email_taken'


def test_login_and_access_protected_route(anon_client, user) -> None:
    resp = anon_client.post('/auth/login', {'email': 'ALICE@example.com', 'password': PASSWORD}, format='json')
    assert resp.status_code == 200

    anon_client.credentials(HTTP_AUTHORIZATION=f"Bearer {resp.json()['access_token']}")
    me = anon_client.get('/auth/me')

    assert me.status_code == 200
    assert me.json()['id'] == str(user.pk)


def test_login_rejects_bad_credentials(anon_client, user) -> None:
    resp = anon_client.post('/auth/login', {'email': user.email, 'password': 'Wrong!pass1'}, format='json')

    assert resp.status_code == 401
    assert resp.json() == {'error': 'invalid_credentials'}


def test_missing_and_invalid_tokens(anon_client, user) -> None:
    missing = anon_client.get('/tasks/')
    anon_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')
    garbage = anon_client.get('/tasks/')

    assert missing.status_code == 401
    assert missing.json()['error'] == 'missing_auth'
    assert garbage.status_code == 401
    assert garbage.json()['error'] == 'invalid_token'


def test_expired_access_token_is_rejected(anon_client, user) -> None:
    now = timezone.now()
    token = jwt.encode(
        {'sub': str(user.pk), 'type': 'access', 'iat': now - datetime.timedelta(hours=1),
         'exp': now - datetime.timedelta(minutes=1)},
        settings.JWT_SECRET,
        algorithm='HS256',
    )
    anon_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

    assert anon_client.get('/tasks/').status_code == 401


def test_refresh_token_cannot_be_used_as_access_token(anon_client) -> None:
    resp = anon_client.post('/auth/register', REGISTER, format='json')
    refresh = resp.cookies[settings.REFRESH_COOKIE_NAME].value

    anon_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh}')

    assert anon_client.get('/tasks/').status_code == 401


def test_refresh_and_logout_cycle(anon_client) -> None:
    anon_client.post('/auth/register', REGISTER, format='json')

    refreshed = anon_client.post('/auth/refresh')
    assert refreshed.status_code == 200
    assert refreshed.json()['access_token']

    raw = anon_client.cookies[settings.REFRESH_COOKIE_NAME].value
    logout = anon_client.post('/auth/logout')
    assert logout.json() == {'ok': True}
    assert RefreshToken.objects.get().revoked is True

    # replaying the revoked cookie must fail
    anon_client.cookies[settings.REFRESH_COOKIE_NAME] = raw
    assert anon_client.post('/auth/refresh').json() == {'error': 'invalid_refresh'}


def test_refresh_without_cookie(anon_client) -> None:
    resp = anon_client.post('/auth/refresh')

    assert resp.status_code == 401
    assert resp.json() == {'error': 'missing_refresh'}


def test_expired_refresh_row_is_rejected(anon_client) -> None:
    anon_client.post('/auth/register', REGISTER, format='json')
    RefreshToken.objects.update(expires_at=timezone.now() - datetime.timedelta(seconds=1))

    assert anon_client.post('/auth/refresh').status_code == 401


def test_change_password(api, user) -> None:
    wrong = api.post('/auth/change-password', {'current_password': 'Nope!nope1', 'new_password': 'N3w!password'}, format='json')
    same = api.post('/auth/change-password', {'current_password': PASSWORD, 'new_password': PASSWORD}, format='json')
    ok = api.post('/auth/change-password', {'current_password': PASSWORD, 'new_password': 'N3w!password'}, format='json')

    assert wrong.json()['error'] == 'invalid_current'
    assert same.json()['error'] == 'password_unchanged'
    assert ok.json() == {'ok': True}
    user.refresh_from_db()
    assert user.check_password('N3w!password')


def test_token_for_deleted_user_is_rejected(anon_client, user) -> None:
    token = issue_access_token(user)
    User.objects.filter(pk=user.pk).delete()
    anon_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

    resp = anon_client.get('/tasks/')

    assert resp.status_code == 401
    assert resp.json()['error'] == 'invalid_token'
