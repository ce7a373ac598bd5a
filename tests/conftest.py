import os

# Settings are read when the package is imported, so the environment
# must be in place before any tweet_gyazo import.
os.environ.setdefault('TWITTER_KEY', 'test_consumer_key')
os.environ.setdefault('TWITTER_SECRET', 'test_consumer_secret')
os.environ.setdefault('TWITTER_TOKEN', 'test_access_token')
os.environ.setdefault('TWITTER_TOKEN_SECRET', 'test_access_token_secret')
os.environ.setdefault('GYAZO_TOKEN', 'test_gyazo_token')
os.environ.setdefault('ENVIRONMENT', 'testing')

import pytest
from aioresponses import aioresponses
from tweet_gyazo.config import Settings

@pytest.fixture
def test_settings():
    """Provide explicit test settings."""
    return Settings(
        TWITTER_KEY="test_consumer_key",
        TWITTER_SECRET="test_consumer_secret",
        TWITTER_TOKEN="test_access_token",
        TWITTER_TOKEN_SECRET="test_access_token_secret",
        GYAZO_TOKEN="test_gyazo_token",
        ENVIRONMENT="testing",
        HTTP_TIMEOUT=5.0,
    )

@pytest.fixture
def mock_http():
    """Intercept every aiohttp request."""
    with aioresponses() as m:
        yield m
