from __future__ import annotations

from sentembed.adapters.embedding.dummy_embedder import DummyEmbedder
from sentembed.domain.errors import ConfigError
from sentembed.ports import Embedder
from sentembed.settings import Settings


def build_embedder(settings: Settings) -> Embedder:
    """
    Construct the configured embedding backend. Blocking: may download/load model weights.
    """
    cfg = settings.embeddings
    if cfg.provider == "huggingface":
        # heavy import (torch, transformers): only when this backend is chosen
        from sentembed.adapters.embedding.huggingface_embedder import HuggingFaceEmbedder

        return HuggingFaceEmbedder.load(cfg.model, device=cfg.device, cache_folder=cfg.cache_folder)
    if cfg.provider == "dummy":
        return DummyEmbedder()
    raise ConfigError(f"Unsupported embedding provider: {cfg.provider}")
