"""
Pytest configuration and fixtures for model config store tests.

Provides an in-memory document store, a codec, a wired provider and helpers
for waiting on operation outcomes.
"""

import os
from concurrent.futures import Future
from unittest.mock import Mock
import pytest

from model_config_store.application.completion import completion_future
from model_config_store.application.model_config_store import ModelConfigStore
from model_config_store.domain.models import ModelConfig
from model_config_store.infrastructure.codec.json_codec import JsonPayloadCodec
from model_config_store.infrastructure.memory.store import InMemoryDocumentStore

WRITE_INDEX = ".ml-inference-000002"
INDEX_PATTERN = ".ml-inference-*"


@pytest.fixture
def memory_store():
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def codec():
    return JsonPayloadCodec()


@pytest.fixture
def provider(memory_store, codec):
    """Provider wired to the in-memory store."""
    return ModelConfigStore(memory_store, codec, write_index=WRITE_INDEX, index_pattern=INDEX_PATTERN)


@pytest.fixture
def sample_config():
    return ModelConfig(
        model_id="regression-model-1",
        created_by="data-frame-analytics",
        version="7.5.0",
        description="house price regression",
        create_time=1571650316000,
        tags=("regression", "houses"),
        metadata={"training_docs": 1200},
        definition={"trained_model": {"tree": {"feature_names": ["rooms", "area"]}}},
    )


@pytest.fixture
def run_op():
    """Run ``start(on_done)`` and return the single Outcome it produced."""
    def _run(start, timeout=5):
        future, on_done = completion_future()
        start(on_done)
        return future.result(timeout=timeout)
    return _run


@pytest.fixture
def mock_documents():
    """Mock DocumentStore; tests set return values to prepared futures."""
    return Mock()


def resolved(value):
    f = Future()
    f.set_result(value)
    return f


def failed(exc):
    f = Future()
    f.set_exception(exc)
    return f


@pytest.fixture
def clean_environment():
    """Clean environment variables for testing."""
    env_vars_to_clean = [
        'MODEL_STORE_URL',
        'MODEL_STORE_WRITE_INDEX',
        'MODEL_STORE_INDEX_PATTERN',
        'MODEL_STORE_HTTP_TIMEOUT',
        'MODEL_STORE_MAX_WORKERS',
    ]

    original_env = {}
    for var in env_vars_to_clean:
        if var in os.environ:
            original_env[var] = os.environ[var]
            del os.environ[var]

    yield

    for var in env_vars_to_clean:
        os.environ.pop(var, None)
    for var, value in original_env.items():
        os.environ[var] = value


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as CLI command test"
    )
    config.addinivalue_line(
        "markers", "env: mark test as environment resolution test"
    )
