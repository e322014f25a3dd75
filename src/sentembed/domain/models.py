from __future__ import annotations

from dataclasses import dataclass

# An L2-normalized embedding of the model's fixed dimension (384 for all-MiniLM-L6-v2).
Vector = list[float]


@dataclass(frozen=True, slots=True)
class Comparison:
    """
    Cosine distance between two texts, as reported by the CLI.

    distance: 0 = same direction, 1 = orthogonal, 2 = opposite.
    """
    left: str
    right: str
    distance: float

DEFAULT_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
