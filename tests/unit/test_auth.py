"""Tests for API key handling."""

import pytest
from resendpager import Auth, Credentials, InvalidArgument


class TestCredentials:
    def test_headers(self):
        assert Credentials("re_1").headers() == {"Authorization": "Bearer re_1"}

    def test_repr_masks_key(self):
        assert "re_secret" not in repr(Credentials("re_secret"))

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("RESEND_API_KEY", " re_env ")
        assert Credentials.from_env().api_key == "re_env"

    def test_from_env_missing(self):
        with pytest.raises(InvalidArgument):
            Credentials.from_env()


class TestAuth:
    def test_direct_login(self):
        auth = Auth().login(api_key="re_1")
        assert auth.authenticated
        assert auth.get_credentials() == Credentials("re_1")

    def test_environment_login(self, monkeypatch):
        monkeypatch.setenv("RESEND_API_KEY", "re_env")
        assert Auth().login().get_credentials().api_key == "re_env"

    @pytest.mark.parametrize(
        "kwargs", [{"strategy": "direct"}, {"api_key": " "}, {"strategy": "netrc"}]
    )
    def test_bad_login(self, kwargs):
        with pytest.raises(InvalidArgument):
            Auth().login(**kwargs)

    def test_logout(self):
        auth = Auth().login(api_key="re_1")
        auth.logout()
        assert not auth.authenticated
        with pytest.raises(InvalidArgument):
            auth.get_credentials()
