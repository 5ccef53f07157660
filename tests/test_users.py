"""
Tests for the user directory and the profile/settings services.
"""

import pytest
from pydantic import ValidationError

from storefront.api_client import ApiClient
from storefront.errors import ApiError
from storefront.profile import ProfileService, SettingsService
from storefront.users import UserDirectory

USER = {
    "user_id": 7,
    "email": "a+b@x.com",
    "username": "ana",
    "full_name": "Ana Diaz",
    "roles": "user",
    "password_hash": "never-exposed",
}


@pytest.fixture
def users(auth_client):
    return UserDirectory(auth_client)


class TestUserDirectory:
    """Test user lookups and account management."""

    def test_register_returns_message(self, users, http, make_response):
        http.request.return_value = make_response(201, {"message": "Usuario creado"})
        assert users.register({"username": "ana"}) == "Usuario creado"

    def test_get_user_by_mail_quotes_email(self, users, http, make_response):
        http.request.return_value = make_response(200, USER)

        user = users.get_user_by_mail("a+b@x.com")

        assert http.request.call_args.args[1] == "http://auth.test/users/email/a%2Bb@x.com"
        assert user.user_id == 7
        assert not hasattr(user, "password_hash")

    def test_get_user_by_username_not_found(self, users, http, make_response):
        http.request.return_value = make_response(404, {"message": "Usuario no encontrado"})
        assert users.get_user_by_username("nobody") is None

    def test_get_user_by_username_other_errors_propagate(self, users, http, make_response):
        http.request.return_value = make_response(500)
        with pytest.raises(ApiError):
            users.get_user_by_username("ana")

    def test_get_users(self, users, http, make_response):
        http.request.return_value = make_response(200, [USER])

        result = users.get_users()

        assert [u.username for u in result] == ["ana"]
        assert http.request.call_args.args[1] == "http://auth.test/usuarios"

    def test_get_user(self, users, http, make_response):
        http.request.return_value = make_response(200, USER)
        assert users.get_user(7).email == "a+b@x.com"

    @pytest.mark.parametrize("body", [True, [USER], "ana"])
    def test_get_user_malformed_body(self, users, http, make_response, body):
        http.request.return_value = make_response(200, body)

        with pytest.raises(ValidationError):
            users.get_user(7)

    @pytest.mark.parametrize("body", [USER, "ana", [USER, 3]])
    def test_get_users_malformed_body(self, users, http, make_response, body):
        http.request.return_value = make_response(200, body)

        with pytest.raises(ValidationError):
            users.get_users()

    def test_edit_user_sends_only_given_fields(self, users, http, make_response):
        http.request.return_value = make_response(200, {"message": "ok"})

        users.edit_user(7, username="ana2")

        args, kwargs = http.request.call_args
        assert args == ("PATCH", "http://auth.test/usuarios/7")
        assert kwargs["json"] == {"username": "ana2"}

    def test_delete_user(self, users, http, make_response):
        http.request.return_value = make_response(204)

        users.delete_user(7)

        assert http.request.call_args.args == ("DELETE", "http://auth.test/usuarios/7")


class TestProfileServices:
    """Test profile and settings endpoints."""

    @pytest.fixture
    def client(self, http):
        return ApiClient("http://auth.test/api", session=http, token_provider=lambda: "t1")

    def test_get_profile(self, client, http, make_response):
        http.request.return_value = make_response(200, {"user_id": 1, "username": "ana", "email": "a@b.com"})

        profile = ProfileService(client).get_profile()

        assert profile.username == "ana"
        assert http.request.call_args.kwargs["headers"]["Authorization"] == "Bearer t1"

    def test_update_profile_never_sends_user_id(self, client, http, make_response):
        http.request.return_value = make_response(200, {"user_id": 1, "username": "ana", "email": "new@b.com"})

        profile = ProfileService(client).update_profile({"user_id": 99, "email": "new@b.com"})

        args, kwargs = http.request.call_args
        assert args == ("PUT", "http://auth.test/api/user/profile")
        assert kwargs["json"] == {"email": "new@b.com"}
        assert profile.email == "new@b.com"

    def test_settings_round_trip(self, client, http, make_response):
        http.request.return_value = make_response(200, {"theme": "dark", "language": "fr", "notifications": False})

        settings = SettingsService(client).update_settings({"theme": "dark"})

        assert settings.theme == "dark"
        assert settings.notifications is False
        assert http.request.call_args.args == ("PUT", "http://auth.test/api/user/settings")

    def test_settings_defaults(self, client, http, make_response):
        http.request.return_value = make_response(200, {"theme": "light"})

        settings = SettingsService(client).get_settings()

        assert settings.language == "es"
        assert settings.notifications is True

    @pytest.mark.parametrize("body", [True, ["ana"], "profile"])
    def test_get_profile_malformed_body(self, client, http, make_response, body):
        http.request.return_value = make_response(200, body)

        with pytest.raises(ValidationError):
            ProfileService(client).get_profile()

    def test_get_settings_malformed_body(self, client, http, make_response):
        http.request.return_value = make_response(200, "dark")

        with pytest.raises(ValidationError):
            SettingsService(client).get_settings()
