from story_builder.core.config import Settings
from story_builder.core.errors import is_balance_failure


def test_defaults(monkeypatch):
    for name in ("PORT", "DEEPINFRA_API_KEY", "DEV_FALLBACK", "TEXT_MODEL", "IMAGE_MODEL", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.PORT == 4000
    assert settings.DEEPINFRA_API_KEY == ""
    assert settings.DEV_FALLBACK is True
    assert settings.TEXT_MODEL == "meta-llama/Meta-Llama-3-8B-Instruct"
    assert settings.IMAGE_MODEL == "stabilityai/stable-diffusion-2-1"
    assert settings.CORS_ORIGINS == ["*"]


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DEV_FALLBACK", "FALSE")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("DEEPINFRA_BASE_URL", "https://proxy.test/")

    settings = Settings()

    assert settings.PORT == 8080
    assert settings.DEV_FALLBACK is False
    assert settings.CORS_ORIGINS == ["http://a.test", "http://b.test"]
    assert settings.inference_url("org/model") == "https://proxy.test/v1/inference/org/model"


def test_fallback_flag_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("DEV_FALLBACK", "True")
    assert Settings().DEV_FALLBACK is True


def test_balance_heuristic():
    assert is_balance_failure("Insufficient BALANCE")
    assert is_balance_failure("please top-up")
    assert not is_balance_failure("rate limited")
    assert not is_balance_failure("")
