import pytest
import requests
from fastapi.testclient import TestClient

from story_builder.core.config import Settings, get_settings
from story_builder.main import app
from story_builder.tests.fakes import FakeUpstream, IMAGE_MODEL, TEXT_MODEL


@pytest.fixture(name="settings")
def settings_fixture():
    settings = Settings()
    settings.DEEPINFRA_API_KEY = "test-key"
    settings.DEEPINFRA_BASE_URL = "https://upstream.test"
    settings.TEXT_MODEL = TEXT_MODEL
    settings.IMAGE_MODEL = IMAGE_MODEL
    settings.DEV_FALLBACK = True
    settings.TEXT_TIMEOUT_SECONDS = 60
    settings.IMAGE_TIMEOUT_SECONDS = 90
    settings.MAX_OUTPUT_TOKENS = 800
    return settings


@pytest.fixture(name="upstream")
def upstream_fixture(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr(requests, "post", fake.post)
    return fake


@pytest.fixture(name="client")
def client_fixture(settings: Settings, upstream: FakeUpstream):

    def get_settings_override():
        return settings

    app.dependency_overrides[get_settings] = get_settings_override

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
