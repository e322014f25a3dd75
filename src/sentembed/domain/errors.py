class SentEmbedError(Exception):
    """Base error for sentembed."""


class InvalidInput(SentEmbedError, ValueError):
    pass


class DimensionMismatch(SentEmbedError, ValueError):
    """Two embeddings that must share a dimension do not."""

    def __init__(self, left: int, right: int) -> None:
        self.left = left
        self.right = right
        super().__init__(f"Embedding dimensions must match: {left} vs {right}")


class EmbeddingError(SentEmbedError):
    pass


class ConfigError(SentEmbedError, KeyError):
    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""
