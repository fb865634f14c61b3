"""
Pytest fixtures for crudpanel testing.

This module provides:
1. Test environment settings (fast bcrypt, default locale)
2. Cache resets between tests that change settings
3. Request and SQL helpers shared across unit tests
"""

import os

import pytest

from crudpanel.config import get_settings
from crudpanel.core.security import _password_hash
from crudpanel.core.translation import load_catalog


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment variables once per session."""
    os.environ["CRUDPANEL_LOCALE"] = "en"
    os.environ["CRUDPANEL_FALLBACK_LOCALE"] = "en"
    # Lowest cost bcrypt keeps password tests fast
    os.environ["CRUDPANEL_PASSWORD_BCRYPT_ROUNDS"] = "4"
    os.environ.pop("CRUDPANEL_TRANSLATIONS_DIR", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def reset_caches():
    """Clear settings and catalog caches around tests that patch the environment."""
    get_settings.cache_clear()
    load_catalog.cache_clear()
    _password_hash.cache_clear()
    yield
    get_settings.cache_clear()
    load_catalog.cache_clear()
    _password_hash.cache_clear()
