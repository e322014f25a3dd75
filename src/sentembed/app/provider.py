from __future__ import annotations

import asyncio
import threading
import time
from concurrent.futures import Future
from typing import Callable, Optional

from loguru import logger

from sentembed.app.container import build_embedder
from sentembed.domain.errors import EmbeddingError
from sentembed.domain.models import Vector
from sentembed.ports import Embedder
from sentembed.settings import Settings, load_settings


class LazyEmbedder:
    """
    Shared embedder handle that builds its backend at most once per process.

    The first `get()` creates one shared future under a thread lock and runs the
    factory in a worker thread; every other caller, on any thread or event loop,
    awaits that same future. A failed initialization is reported to every waiter
    and cleared, so the next call retries.
    """

    def __init__(self, factory: Callable[[], Embedder], *, model_name: str = "") -> None:
        self._factory = factory
        self._model_name = model_name
        self._instance: Optional[Embedder] = None
        self._pending: Optional[Future[Embedder]] = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._instance is not None

    @property
    def model_name(self) -> str:
        if self._instance is not None:
            return self._instance.model_name
        return self._model_name

    async def get(self) -> Embedder:
        if self._instance is not None:
            return self._instance

        start = False
        with self._lock:
            if self._instance is not None:
                return self._instance
            if self._pending is None:
                self._pending = Future()
                # running futures cannot be cancelled by a departing waiter
                self._pending.set_running_or_notify_cancel()
                start = True
            pending = self._pending

        if start:
            asyncio.get_running_loop().run_in_executor(None, self._initialize, pending)

        return await asyncio.wrap_future(pending)

    async def embed_text(self, text: str) -> Vector:
        embedder = await self.get()
        return await embedder.embed_text(text)

    def _initialize(self, pending: Future[Embedder]) -> None:
        logger.debug("Initializing embedder {}", self._model_name or "<unnamed>")
        started = time.perf_counter()
        try:
            try:
                instance = self._factory()
            except EmbeddingError:
                raise
            except Exception as e:
                raise EmbeddingError(f"Embedder initialization failed: {e}") from e
        except EmbeddingError as e:
            with self._lock:
                self._pending = None
            pending.set_exception(e)
            return

        with self._lock:
            self._instance = instance
            self._pending = None
        logger.debug(
            "Embedder {} ready in {:.2f}s",
            instance.model_name,
            time.perf_counter() - started,
        )
        pending.set_result(instance)


_default: Optional[LazyEmbedder] = None
_default_lock = threading.Lock()


def lazy_from_settings(settings: Settings) -> LazyEmbedder:
    return LazyEmbedder(lambda: build_embedder(settings), model_name=settings.embeddings.model)


def get_default_embedder() -> LazyEmbedder:
    """Process-wide embedder, configured from `load_settings()` on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = lazy_from_settings(load_settings())
        return _default


def set_default_embedder(embedder: Optional[LazyEmbedder]) -> None:
    """Replace (or with None, reset) the process-wide embedder."""
    global _default
    with _default_lock:
        _default = embedder
