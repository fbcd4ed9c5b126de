"""Tests for environment variable helpers."""

import pytest

from markpress.utils.env import is_env_ssl_verify, is_env_truthy


class TestIsEnvTruthy:
    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "Yes"])
    def test_truthy_values(self, monkeypatch, value):
        monkeypatch.setenv("MARKPRESS_TEST_FLAG", value)
        assert is_env_truthy("MARKPRESS_TEST_FLAG") is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "", "maybe"])
    def test_falsy_values(self, monkeypatch, value):
        monkeypatch.setenv("MARKPRESS_TEST_FLAG", value)
        assert is_env_truthy("MARKPRESS_TEST_FLAG") is False

    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("MARKPRESS_TEST_FLAG", raising=False)
        assert is_env_truthy("MARKPRESS_TEST_FLAG") is False
        assert is_env_truthy("MARKPRESS_TEST_FLAG", "true") is True


class TestIsEnvSslVerify:
    def test_defaults_to_true(self, monkeypatch):
        monkeypatch.delenv("MARKPRESS_TEST_SSL", raising=False)
        assert is_env_ssl_verify("MARKPRESS_TEST_SSL") is True

    @pytest.mark.parametrize("value", ["false", "False", "0", "no"])
    def test_explicitly_disabled(self, monkeypatch, value):
        monkeypatch.setenv("MARKPRESS_TEST_SSL", value)
        assert is_env_ssl_verify("MARKPRESS_TEST_SSL") is False

    def test_unrecognized_value_keeps_verification(self, monkeypatch):
        monkeypatch.setenv("MARKPRESS_TEST_SSL", "sometimes")
        assert is_env_ssl_verify("MARKPRESS_TEST_SSL") is True
