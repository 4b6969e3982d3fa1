"""Shared fixtures."""

from datetime import datetime, timezone

import pytest

from llmstxt_gen.config import Settings
from llmstxt_gen.models import SiteType, SurveyInput
from tests.fakes import FakeRedis, FixedClock


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        firecrawl_api_key="fc-test",
        openai_api_key="sk-test",
        anthropic_api_key=None,
        llm_provider="openai",
        stripe_secret_key=None,
        stripe_price_id=None,
        stripe_webhook_secret="whsec_test",
        cleanup_token="cleanup-secret",
    )


@pytest.fixture
def acme_survey():
    return SurveyInput(
        site_name="Acme",
        site_url="https://acme.com",
        summary="Acme provides inventory sync for sellers.",
        site_type=SiteType.SAAS,
        priority_pages=("/pricing", "/docs", "/about"),
    )


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))
