# tests/conftest.py

from __future__ import annotations

import pytest
from rest_framework.test import APIClient

from smarttask_user.models import User
from smarttask_user.tokens import issue_access_token

PASSWORD = 'Str0ng!pass'


def make_user(email: str, name: str = 'Test User') -> User:
    return User.objects.create_user(username=email, email=email, password=PASSWORD, name=name)


def client_for(user: User) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_access_token(user)}')
    return client


@pytest.fixture()
def user(db) -> User:
    return make_user('alice@example.com', 'Alice')


@pytest.fixture()
def other_user(db) -> User:
    return make_user('bob@example.com', 'Bob')


@pytest.fixture()
def anon_client(db) -> APIClient:
    return APIClient()


@pytest.fixture()
def api(user: User) -> APIClient:
    """APIClient authenticated as ``user`` with a fresh access token."""
    return client_for(user)


@pytest.fixture()
def other_api(other_user: User) -> APIClient:
    return client_for(other_user)
