from __future__ import annotations

from typing import Protocol

from sentembed.domain.models import Vector


class Embedder(Protocol):
    """
    Turns a single text into a dense vector.

    Implementations must return mean-pooled, L2-normalized output of a fixed dimension.
    """

    @property
    def model_name(self) -> str: ...

    async def embed_text(self, text: str) -> Vector:
        ...
