from __future__ import annotations

import math
from typing import Sequence

from loguru import logger

from sentembed.domain.errors import DimensionMismatch, InvalidInput
from sentembed.domain.models import Vector


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    return sum(x * y for x, y in zip(a, b))


def norm(a: Sequence[float]) -> float:
    return math.sqrt(sum(x * x for x in a))


def aggregate(embeddings: Sequence[Sequence[float]]) -> Vector:
    """
    Combine N >= 1 embeddings into one unit vector along their mean direction.

    A single embedding is returned as-is (it is already normalized).
    If the mean cancels to the zero vector, every component is nan.

    Raises:
        InvalidInput: the batch is empty.
        DimensionMismatch: the embeddings do not all share one dimension.
    """
    if not embeddings:
        raise InvalidInput("Cannot aggregate an empty batch of embeddings")

    dim = len(embeddings[0])
    for emb in embeddings[1:]:
        if len(emb) != dim:
            raise DimensionMismatch(dim, len(emb))

    if len(embeddings) == 1:
        return list(embeddings[0])

    n = float(len(embeddings))
    mean = [sum(column) / n for column in zip(*embeddings)]

    length = norm(mean)
    if length == 0.0:
        logger.warning("Mean of {} embeddings has zero norm; result is undefined (nan)", len(embeddings))
        return [math.nan] * dim

    return [x / length for x in mean]


def compare(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine distance between two embeddings: 1 - cos(a, b).

    Ranges over [0, 2] for unit vectors. nan if either vector has zero norm.

    Raises:
        DimensionMismatch: len(a) != len(b).
    """
    if len(a) != len(b):
        raise DimensionMismatch(len(a), len(b))

    denom = norm(a) * norm(b)
    if denom == 0.0:
        logger.debug("Cosine distance against a zero vector is undefined (nan)")
        return math.nan

    return 1.0 - dot(a, b) / denom
