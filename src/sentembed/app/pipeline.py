from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from loguru import logger

from sentembed.app.provider import get_default_embedder
from sentembed.domain.errors import InvalidInput
from sentembed.domain.models import Vector
from sentembed.ports import Embedder
from sentembed.vectors import aggregate, compare


def _resolve(embedder: Optional[Embedder]) -> Embedder:
    return embedder if embedder is not None else get_default_embedder()


async def embed_one(text: str, *, embedder: Optional[Embedder] = None) -> Vector:
    """Embedding of a single text, exactly as the backend returns it."""
    return await _resolve(embedder).embed_text(text)


async def embed_many(texts: Sequence[str], *, embedder: Optional[Embedder] = None) -> Vector:
    """
    Normalized mean embedding of a non-empty batch of texts.

    Texts are embedded concurrently; aggregation waits for all of them.
    """
    if isinstance(texts, str):
        raise InvalidInput("embed_many expects a sequence of texts, not a single string")
    if not texts:
        raise InvalidInput("Cannot embed empty array")

    resolved = _resolve(embedder)
    logger.debug("Embedding batch of {} texts with {}", len(texts), resolved.model_name)
    vectors = await asyncio.gather(*(resolved.embed_text(t) for t in texts))
    return aggregate(vectors)


async def embed(text: str | Sequence[str], *, embedder: Optional[Embedder] = None) -> Vector:
    """Single text -> its embedding; sequence of texts -> their aggregated embedding."""
    if isinstance(text, str):
        return await embed_one(text, embedder=embedder)
    return await embed_many(text, embedder=embedder)


__all__ = ["compare", "embed", "embed_many", "embed_one"]
