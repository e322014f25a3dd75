from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from llama_index.embeddings.huggingface import HuggingFaceEmbedding

from sentembed.domain.errors import EmbeddingError
from sentembed.domain.models import DEFAULT_MODEL, Vector


@dataclass(frozen=True, slots=True)
class HuggingFaceEmbedder:
    """
    Local sentence embeddings via llama-index's HuggingFace wrapper.

    Notes:
      - always normalizes (unit-length output)
      - pooling comes from the model's sentence-transformers config (mean for MiniLM)
      - construct with `load()`; it blocks while the weights are fetched/loaded
    """
    backend: Any
    model: str = DEFAULT_MODEL

    @property
    def model_name(self) -> str:
        return self.model

    @classmethod
    def load(
        cls,
        model_name: str = DEFAULT_MODEL,
        *,
        device: Optional[str] = None,
        cache_folder: Optional[Path] = None,
    ) -> "HuggingFaceEmbedder":
        try:
            backend = HuggingFaceEmbedding(
                model_name=model_name,
                device=device,
                cache_folder=str(cache_folder) if cache_folder is not None else None,
                normalize=True,
            )
        except Exception as e:
            raise EmbeddingError(f"Failed to load embedding model {model_name!r}: {e}") from e
        return cls(backend=backend, model=model_name)

    async def embed_text(self, text: str) -> Vector:
        try:
            out = await self.backend.aget_text_embedding(text)
        except Exception as e:
            raise EmbeddingError(f"Embedding failed for model {self.model!r}: {e}") from e
        return [float(x) for x in out]
