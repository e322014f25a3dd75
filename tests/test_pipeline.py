import pytest

from sentembed.adapters.embedding.dummy_embedder import DummyEmbedder
from sentembed.app.pipeline import compare, embed, embed_many, embed_one
from sentembed.app.provider import LazyEmbedder, set_default_embedder
from sentembed.domain.errors import DimensionMismatch, InvalidInput
from sentembed.vectors import aggregate, norm


class RecordingEmbedder:
    model_name = "recording"

    def __init__(self):
        self.seen = []
        self._inner = DummyEmbedder(dim=16)

    async def embed_text(self, text):
        self.seen.append(text)
        return await self._inner.embed_text(text)


@pytest.mark.asyncio
async def test_embed_one_returns_provider_output_unchanged():
    provider = DummyEmbedder()

    out = await embed_one("The cat sat on the mat.", embedder=provider)

    assert out == await provider.embed_text("The cat sat on the mat.")
    assert len(out) == 384


@pytest.mark.asyncio
async def test_embed_many_is_unit_length_mean():
    provider = RecordingEmbedder()
    texts = ["The cat sat on the mat.", "A feline rested on the rug.", "The stock market crashed today."]

    out = await embed_many(texts, embedder=provider)

    assert sorted(provider.seen) == sorted(texts)
    assert norm(out) == pytest.approx(1.0, abs=1e-6)
    singles = [await provider._inner.embed_text(t) for t in texts]
    assert out == pytest.approx(aggregate(singles))


@pytest.mark.asyncio
async def test_embed_many_single_text_matches_embed_one():
    provider = DummyEmbedder()

    assert await embed_many(["only"], embedder=provider) == pytest.approx(await embed_one("only", embedder=provider))


@pytest.mark.asyncio
async def test_embed_many_empty_batch_does_not_touch_provider():
    calls = []

    def factory():
        calls.append(1)
        return DummyEmbedder()

    lazy = LazyEmbedder(factory)

    with pytest.raises(InvalidInput):
        await embed_many([], embedder=lazy)

    assert calls == []
    assert not lazy.loaded


@pytest.mark.asyncio
async def test_embed_many_rejects_bare_string():
    with pytest.raises(InvalidInput):
        await embed_many("not a list", embedder=DummyEmbedder())


@pytest.mark.asyncio
async def test_embed_dispatches_on_input_shape():
    provider = DummyEmbedder()

    assert await embed("one", embedder=provider) == await embed_one("one", embedder=provider)
    assert await embed(["one", "two"], embedder=provider) == await embed_many(["one", "two"], embedder=provider)

    with pytest.raises(InvalidInput):
        await embed([], embedder=provider)


@pytest.mark.asyncio
async def test_default_embedder_is_used_when_none_given():
    calls = []

    def factory():
        calls.append(1)
        return DummyEmbedder(dim=32)

    set_default_embedder(LazyEmbedder(factory))

    a = await embed_one("alpha")
    b = await embed_many(["alpha", "beta"])

    assert len(a) == len(b) == 32
    assert calls == [1]


@pytest.mark.asyncio
async def test_compare_on_pipeline_output():
    provider = DummyEmbedder()
    a = await embed_one("first", embedder=provider)
    b = await embed_one("second", embedder=provider)

    assert compare(a, a) == pytest.approx(0.0, abs=1e-6)
    assert compare(a, b) == compare(b, a)
    assert 0.0 <= compare(a, b) <= 2.0

    with pytest.raises(DimensionMismatch):
        compare(a, await embed_one("x", embedder=DummyEmbedder(dim=8)))
