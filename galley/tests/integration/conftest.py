"""
Фикстуры для интеграционных тестов API.

Содержит фикстуры для:
- HTTP клиента Django
- Заголовков авторизации с JWT токенами администратора и сотрудника поддержки
"""

import json

import pytest
from django.test import Client

from api.v1.auth.jwt import create_tokens

API_PREFIX = "/api/v1"


class ApiClient:
    """HTTP клиент для JSON запросов к API."""

    def __init__(self, user=None):
        self.client = Client()
        self.headers = {}
        if user is not None:
            token = create_tokens(user.id)["access_token"]
            self.headers["HTTP_AUTHORIZATION"] = f"Bearer {token}"

    def _request(self, method, path, data=None, **params):
        handler = getattr(self.client, method)
        if data is None:
            return handler(f"{API_PREFIX}{path}", params or None, **self.headers)
        return handler(
            f"{API_PREFIX}{path}",
            json.dumps(data, default=str),
            content_type="application/json",
            **self.headers,
        )

    def get(self, path, **params):
        return self._request("get", path, **params)

    def post(self, path, data=None):
        return self._request("post", path, data if data is not None else {})

    def put(self, path, data):
        return self._request("put", path, data)

    def patch(self, path, data):
        return self._request("patch", path, data)


@pytest.fixture
def anonymous_api(db):
    """Клиент без авторизации."""
    return ApiClient()


@pytest.fixture
def admin_api(admin_user):
    """Клиент администратора."""
    return ApiClient(admin_user)


@pytest.fixture
def csr_api(csr_user):
    """Клиент сотрудника поддержки."""
    return ApiClient(csr_user)
