"""
pytest configuration and fixtures for Quote API tests
"""

import json
import shutil
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from api.app import create_app
from quotes import QuoteCatalog, QuoteSelector
from utils import ApiConfig, UnifiedConfigManager


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_quotes():
    """The two-quote catalog used by most request-level tests"""
    return ["Hello", "World"]


@pytest.fixture
def tricky_quotes():
    """Quotes that need JSON escaping"""
    return [
        'He said "hello" and left.',
        "C:\\path\\to\\file",
        "line one\nline two\ttabbed",
        "bell \x07 and nul-adjacent \x01 control",
        "Ünïcödé — 名言 🚀",
    ]


@pytest.fixture
def make_app():
    """Factory building an app around an explicit catalog"""
    def _make_app(quotes, seed=None, **api_options):
        selector = QuoteSelector(QuoteCatalog(quotes), seed=seed)
        return create_app(selector=selector, api_config=ApiConfig(**api_options))
    return _make_app


@pytest.fixture
def client(make_app, sample_quotes):
    """Test client for an app serving the two-quote catalog"""
    app = make_app(sample_quotes, seed=42)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def write_config(temp_dir):
    """Factory writing JSON config files into a temporary config directory"""
    def _write_config(files):
        for name, data in files.items():
            path = temp_dir / name
            if isinstance(data, str):
                path.write_text(data, encoding="utf-8")
            else:
                path.write_text(json.dumps(data), encoding="utf-8")
        return temp_dir
    return _write_config


@pytest.fixture
def config_from(write_config):
    """Factory returning a config manager loaded from the given files"""
    def _config_from(files):
        return UnifiedConfigManager(write_config(files))
    return _config_from


# Pytest configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "e2e: mark test as an end-to-end test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
