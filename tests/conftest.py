import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.services.pipeline.scorer import CommonWordIndex, CommonWordScorer
from app.services.pipeline.trials import TrialStore


@pytest.fixture
def word_index():
    return CommonWordIndex.from_words(
        ["THE", "QUICK", "FOX", "MEET", "ME", "AT", "SECRET", "PLACE", "WE", "WILL"]
    )


@pytest.fixture
def scorer(word_index):
    return CommonWordScorer(word_index)


@pytest.fixture
def store():
    return TrialStore()


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite database."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'workbench.db'}",
        max_sweep_permutations=1000,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
