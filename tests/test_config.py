import pytest

from account_state.config import Settings, get_settings, validate_settings


def test_settings_load_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACCOUNT_STATE_SERVICE_URL", "https://rsc.example.com")
    monkeypatch.setenv("ACCOUNT_STATE_SERVICE_RETRIES", "4")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.service_url == "https://rsc.example.com"
    assert settings.service_retries == 4
    get_settings.cache_clear()


def test_validate_settings_rejects_invalid_values() -> None:
    validate_settings(Settings(service_url="https://rsc.example.com"))

    with pytest.raises(ValueError, match="service url"):
        validate_settings(Settings(service_url="ftp://rsc.example.com"))
    with pytest.raises(ValueError, match="timeout"):
        validate_settings(Settings(service_timeout_seconds=0))
    with pytest.raises(ValueError, match="retries"):
        validate_settings(Settings(service_retries=-1))
