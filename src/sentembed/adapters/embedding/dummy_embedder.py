from __future__ import annotations

from dataclasses import dataclass
from hashlib import sha256

from sentembed.domain.models import Vector
from sentembed.vectors import norm


@dataclass(frozen=True, slots=True)
class DummyEmbedder:
    """
    Deterministic fake embeddings for wiring tests.
    Not semantically meaningful, but stable across runs and L2-normalized.
    """
    dim: int = 384
    model: str = "dummy-embedder-v1"

    @property
    def model_name(self) -> str:
        return self.model

    async def embed_text(self, text: str) -> Vector:
        digest = sha256(text.encode("utf-8")).digest()
        # expand digest to dim floats in [-1,1]; re-hash per block so long vectors don't repeat
        raw: list[float] = []
        block = digest
        while len(raw) < self.dim:
            raw.extend((b / 127.5) - 1.0 for b in block)
            block = sha256(block).digest()
        raw = raw[: self.dim]

        length = norm(raw) or 1.0
        return [x / length for x in raw]
