from sentembed.app.pipeline import embed, embed_many, embed_one
from sentembed.domain.errors import (
    ConfigError,
    DimensionMismatch,
    EmbeddingError,
    InvalidInput,
    SentEmbedError,
)
from sentembed.domain.models import Vector
from sentembed.vectors import aggregate, compare

__all__ = [
    "ConfigError",
    "DimensionMismatch",
    "EmbeddingError",
    "InvalidInput",
    "SentEmbedError",
    "Vector",
    "aggregate",
    "compare",
    "embed",
    "embed_many",
    "embed_one",
]
