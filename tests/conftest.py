import pytest

from moodboard.config import Settings
from moodboard.gateway import ModelGateway
from moodboard.pipeline import MoodboardPipeline

from .fakes import FakeClient


@pytest.fixture
def settings():
    return Settings(
        api_key="test-key",
        text_model="gemini-text-test",
        image_model="gemini-image-test",
    )


@pytest.fixture
def make_pipeline(settings):
    """Build a pipeline whose gateway talks to a FakeClient."""

    def _make(response=None, exc=None, delay=0.0, settings_override=None):
        client = FakeClient(response=response, exc=exc, delay=delay)
        gateway = ModelGateway(settings_override or settings, client=client)
        return MoodboardPipeline(gateway), client.models

    return _make
