"""
Tests for the login proxy endpoint ``POST /api/auth/login``.

APEX is replaced by a mock; each test sets the ``(status, body)`` pair or
the exception that ``ApexClient.login`` produces.
"""

import time

import httpx
import pytest
from jose import JWTError, jwt

from wabot.clients.apex_client import ApexHTTPError
from wabot.core.security import decode_access_token

CREDENTIALS = {"username": "jgalvez", "password": "s3cret"}


def _login(client, body=None):
    return client.post("/api/auth/login", json=CREDENTIALS if body is None else body)


class TestLoginSuccess:

    def test_token_decodes_to_username(self, client, apex, settings):
        apex.login.return_value = (200, {
            "success": True,
            "message": "Bienvenido",
            "user": {"id": 7, "username": "jgalvez", "nombre": "José", "rol": "ADMIN"},
        })
        before = int(time.time())
        response = _login(client)
        after = time.time()

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Bienvenido"
        assert data["user"]["nombre"] == "José"

        claims = decode_access_token(data["token"], settings)
        assert claims["username"] == "jgalvez"
        assert claims["sub"] == "7"
        assert claims["rol"] == "ADMIN"
        assert claims["exp"] - claims["iat"] == 24 * 3600
        assert before + 24 * 3600 - 1 <= claims["exp"] <= after + 24 * 3600 + 1
        apex.login.assert_called_once_with("jgalvez", "s3cret")

    def test_user_synthesized_when_absent(self, client, apex, settings):
        apex.login.return_value = (200, {"success": True})
        data = _login(client).json()
        assert data["message"] == "Login exitoso"
        assert data["user"] == {"username": "jgalvez", "nombre": "jgalvez", "rol": "USER"}
        claims = decode_access_token(data["token"], settings)
        assert claims["sub"] == "jgalvez"
        assert claims["rol"] == "USER"

    def test_json_string_body_is_decoded(self, client, apex):
        apex.login.return_value = (200, '{"success": true, "user": {"username": "jgalvez"}}')
        response = _login(client)
        assert response.status_code == 200
        assert response.json()["token"]

    def test_token_signed_with_configured_secret(self, client, apex):
        apex.login.return_value = (200, {"success": True})
        token = _login(client).json()["token"]
        with pytest.raises(JWTError):
            jwt.decode(token, "another-secret", algorithms=["HS256"])


class TestLoginRejected:

    @pytest.mark.parametrize("body", [
        {"username": "jgalvez"},
        {"username": "jgalvez", "password": ""},
        {"password": "s3cret"},
        {},
    ])
    def test_missing_credentials_never_reach_apex(self, client, apex, body):
        response = _login(client, body)
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Username y password son obligatorios"}
        assert apex.login.call_count == 0

    def test_no_body(self, client, apex):
        response = client.post("/api/auth/login")
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Username y password son obligatorios"}
        assert apex.login.call_count == 0

    def test_empty_json_body(self, client, apex):
        response = client.post("/api/auth/login", content=b"", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert apex.login.call_count == 0

    def test_apex_rejects(self, client, apex):
        apex.login.return_value = (401, {"success": False, "message": "Usuario bloqueado"})
        response = _login(client)
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Usuario bloqueado"}

    @pytest.mark.parametrize("flag", ["true", 1, None])
    def test_success_flag_must_be_boolean_true(self, client, apex, flag):
        apex.login.return_value = (200, {"success": flag})
        response = _login(client)
        assert response.status_code == 401
        assert response.json()["message"] == "Credenciales inválidas"

    def test_unparseable_body(self, client, apex):
        apex.login.return_value = (200, "<html>login</html>")
        response = _login(client)
        assert response.status_code == 401
        assert response.json()["message"] == "Credenciales inválidas"


class TestLoginUpstreamFailure:

    def test_timeout(self, client, apex):
        apex.login.side_effect = httpx.ReadTimeout("timed out")
        response = _login(client)
        assert response.status_code == 504
        assert response.json() == {"success": False, "message": "Tiempo de espera agotado al conectar con APEX"}

    def test_apex_500_becomes_504(self, client, apex):
        apex.login.side_effect = ApexHTTPError(500, {"message": "ORA-06550"})
        response = _login(client)
        assert response.status_code == 504
        assert response.json()["message"] == "ORA-06550"

    def test_other_upstream_status_is_mirrored(self, client, apex):
        apex.login.side_effect = ApexHTTPError(503, "Service Unavailable")
        response = _login(client)
        assert response.status_code == 503
        assert response.json()["message"] == "APEX respondió 503"

    def test_connection_refused(self, client, apex):
        apex.login.side_effect = httpx.ConnectError("Connection refused")
        response = _login(client)
        assert response.status_code == 504
        assert response.json() == {"success": False, "message": "Connection refused"}
