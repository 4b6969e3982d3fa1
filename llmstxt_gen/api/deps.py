"""Dependency injection for FastAPI routes."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from llmstxt_gen.config import Settings, get_settings
from llmstxt_gen.repositories import RedisRunStore
from llmstxt_gen.services.pipeline import GenerationPipeline, build_pipeline
from llmstxt_gen.services.stripe_gate import StripeCheckout


@lru_cache
def get_run_store() -> RedisRunStore:
    return RedisRunStore.from_settings(get_settings())


@lru_cache
def get_pipeline() -> GenerationPipeline:
    return build_pipeline(get_settings())


def get_checkout(settings: Annotated[Settings, Depends(get_settings)]) -> StripeCheckout:
    return StripeCheckout(settings)


# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
RunStore = Annotated[RedisRunStore, Depends(get_run_store)]
Pipeline = Annotated[GenerationPipeline, Depends(get_pipeline)]
Checkout = Annotated[StripeCheckout, Depends(get_checkout)]
