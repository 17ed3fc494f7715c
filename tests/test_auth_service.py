import json

import pytest
from pydantic import ValidationError as SchemaValidationError

from atol_online.apps.auth.exceptions import AuthError, AuthErrorKind
from atol_online.apps.auth.schemas import AtolCredentialsIn
from atol_online.apps.auth.services.auth_service import AtolAuthService
from atol_online.core.config import settings
from atol_online.core.transport import AtolTransport

ENDPOINT = "https://testonline.atol.ru/possystem/v5"


@pytest.fixture
def auth_service(http) -> AtolAuthService:
    return AtolAuthService(
        AtolTransport(http),
        ENDPOINT,
        credentials=AtolCredentialsIn(login="shop-login", password="secret"),
    )


def test_token_is_requested_once(auth_service, server):
    assert auth_service.ensure_token() == "test-token"
    assert auth_service.ensure_token() == "test-token"
    assert auth_service.get_token_header() == {"Token": "test-token"}

    assert server.count("/getToken") == 1
    request = server.requests[0]
    assert request.method == "POST"
    assert str(request.url) == f"{ENDPOINT}/getToken"
    assert json.loads(request.content) == {"login": "shop-login", "pass": "secret"}


def test_set_token_skips_exchange(auth_service, server):
    auth_service.set_token("cached-token")
    assert auth_service.ensure_token() == "cached-token"
    assert server.requests == []


def test_reset_token_forces_new_exchange(auth_service, server):
    auth_service.ensure_token()
    auth_service.reset_token()
    assert auth_service.token is None
    auth_service.ensure_token()
    assert server.count("/getToken") == 2


def test_new_credentials_drop_cached_token(auth_service):
    auth_service.set_token("cached-token")
    auth_service.set_credentials(AtolCredentialsIn(login="other", password="secret"))
    assert auth_service.token is None


def test_failed_exchange_raises_auth_error(auth_service, server):
    server.token_status_code = 401
    with pytest.raises(AuthError) as exc_info:
        auth_service.ensure_token()
    assert exc_info.value.kind is AuthErrorKind.auth_failed
    assert exc_info.value.response.status_code == 401
    assert exc_info.value.details["error"]["code"] == 12
    assert auth_service.token is None


@pytest.mark.parametrize(
    "body",
    [
        {"token": 123},
        {"token": None, "error": "Неверный логин"},
        {"token": ["test-token"]},
    ],
)
def test_malformed_token_body_raises_auth_error(auth_service, server, body):
    server.token_body = body
    with pytest.raises(AuthError) as exc_info:
        auth_service.ensure_token()
    assert exc_info.value.kind is AuthErrorKind.auth_failed
    assert exc_info.value.response.status_code == 200
    assert exc_info.value.details["status_code"] == 200
    assert auth_service.token is None


def test_missing_credentials(http, monkeypatch):
    monkeypatch.setattr(settings, "login", "")
    monkeypatch.setattr(settings, "password", "")
    service = AtolAuthService(AtolTransport(http), ENDPOINT)
    assert service.get_credentials() is None
    with pytest.raises(AuthError) as exc_info:
        service.ensure_token()
    assert exc_info.value.kind is AuthErrorKind.missing_login


def test_credentials_loaded_from_settings(http, monkeypatch):
    monkeypatch.setattr(settings, "login", "env-login")
    monkeypatch.setattr(settings, "password", "env-password")
    service = AtolAuthService(AtolTransport(http), ENDPOINT)
    assert service.get_raw_credentials().login == "env-login"


@pytest.mark.parametrize(
    "login, password, kind",
    [
        ("", "secret", AuthErrorKind.missing_login),
        (None, "secret", AuthErrorKind.missing_login),
        ("  ", "secret", AuthErrorKind.missing_login),
        ("login", "", AuthErrorKind.missing_password),
        ("login", None, AuthErrorKind.missing_password),
    ],
)
def test_set_login_password_requires_both(auth_service, login, password, kind):
    with pytest.raises(AuthError) as exc_info:
        auth_service.set_login_password(login, password)
    assert exc_info.value.kind is kind


def test_credentials_length_is_validated():
    with pytest.raises(SchemaValidationError):
        AtolCredentialsIn(login="l" * 101, password="secret")
    with pytest.raises(SchemaValidationError):
        AtolCredentialsIn(login="login", password="p" * 101)


def test_credentials_out_hides_password(auth_service):
    credentials = auth_service.get_credentials()
    assert credentials.login == "shop-login"
    assert credentials.has_password is True
    assert "secret" not in credentials.model_dump_json()
    assert auth_service.get_raw_credentials().to_dict_safe() == {
        "login": "shop-login",
        "has_password": True,
    }
