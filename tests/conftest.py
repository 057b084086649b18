import pytest

from tests.fake.fake_stream import FakeSink

from panser.bootstrap.deps import get_registry, get_settings
from panser.core.codecs.registry import CodecRegistry


@pytest.fixture
def registry() -> CodecRegistry:
    return get_registry()


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep PANSER_* variables and stray config files out of every test."""
    for name in ("PANSERCONFIG", "PANSER_LOG_LEVEL", "PANSER_DEFAULT_FROM",
                 "PANSER_DEFAULT_TO", "PANSER_CHUNK_SIZE", "PANSER_MAX_FRAME_SIZE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
