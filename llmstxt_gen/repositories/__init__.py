"""Repository implementations for data access."""

from llmstxt_gen.repositories.run_store import RedisRunStore

__all__ = [
    "RedisRunStore",
]
