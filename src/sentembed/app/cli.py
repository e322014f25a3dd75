from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import replace
from itertools import combinations
from typing import Optional, Sequence

from rich import print as rprint
from rich.console import Console
from rich.markup import escape

from sentembed.app.pipeline import compare, embed_many, embed_one
from sentembed.app.provider import LazyEmbedder, lazy_from_settings
from sentembed.domain.errors import SentEmbedError
from sentembed.domain.models import Comparison
from sentembed.logging_setup import configure_logging
from sentembed.settings import LOG_LEVELS, PROVIDERS, Settings, check_log_level, load_settings
from sentembed.vectors import norm

DEMO_TEXTS = (
    "The cat sat on the mat.",
    "A feline rested on the rug.",
    "The stock market crashed today.",
)

err_console = Console(stderr=True)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sentembed", description="Sentence embeddings and cosine distance.")
    p.add_argument("--settings", type=str, default=None, help="Path to settings.toml")
    p.add_argument("--provider", choices=PROVIDERS, default=None, help="Embedding backend")
    p.add_argument("--model", type=str, default=None, help="Model name for the huggingface backend")
    p.add_argument("--log-level", type=str, default=None, help=f"One of {', '.join(LOG_LEVELS)}")

    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("demo", help="Compare three sample sentences")

    cmp_p = sub.add_parser("compare", help="Cosine distance between two texts")
    cmp_p.add_argument("text_a")
    cmp_p.add_argument("text_b")

    emb_p = sub.add_parser("embed", help="Embed one text, or the mean of several")
    emb_p.add_argument("texts", nargs="+")
    emb_p.add_argument("--json", action="store_true", help="Print the full vector as JSON")

    return p.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.settings)

    # CLI should win
    embeddings = settings.embeddings
    if args.provider:
        embeddings = replace(embeddings, provider=args.provider)
    if args.model:
        embeddings = replace(embeddings, model=args.model)
    logging = settings.logging
    if args.log_level:
        logging = replace(logging, level=check_log_level(args.log_level))
    return Settings(embeddings=embeddings, logging=logging)


async def _demo(embedder: LazyEmbedder) -> None:
    rprint("Loading model...")
    rprint("\nGenerating embeddings...")
    vectors = {text: await embed_one(text, embedder=embedder) for text in DEMO_TEXTS}

    rprint(f"\nEmbedding dimension: {len(vectors[DEMO_TEXTS[0]])}")
    rprint("\nComparing texts:")
    for a, b in combinations(DEMO_TEXTS, 2):
        result = Comparison(left=a, right=b, distance=compare(vectors[a], vectors[b]))
        _print_comparison(result)


def _print_comparison(result: Comparison) -> None:
    rprint(f'\n"{escape(result.left)}" vs "{escape(result.right)}"')
    rprint(f"  Distance: {result.distance:.4f}")


async def _compare(embedder: LazyEmbedder, text_a: str, text_b: str) -> None:
    a, b = await asyncio.gather(embed_one(text_a, embedder=embedder), embed_one(text_b, embedder=embedder))
    _print_comparison(Comparison(left=text_a, right=text_b, distance=compare(a, b)))


async def _embed(embedder: LazyEmbedder, texts: Sequence[str], as_json: bool) -> None:
    if len(texts) == 1:
        vector = await embed_one(texts[0], embedder=embedder)
    else:
        vector = await embed_many(texts, embedder=embedder)

    if as_json:
        # plain stdout: rich would wrap/markup long JSON
        sys.stdout.write(json.dumps(vector) + "\n")
        return
    rprint(f"[bold]Model:[/bold] {embedder.model_name}")
    rprint(f"[bold]Texts:[/bold] {len(texts)}")
    rprint(f"[bold]Dimension:[/bold] {len(vector)}")
    rprint(f"[bold]Norm:[/bold] {norm(vector):.6f}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = _settings_from_args(args)
        configure_logging(settings.logging.level)
        embedder = lazy_from_settings(settings)

        if args.command == "demo":
            asyncio.run(_demo(embedder))
        elif args.command == "compare":
            asyncio.run(_compare(embedder, args.text_a, args.text_b))
        else:
            asyncio.run(_embed(embedder, args.texts, args.json))
    except (SentEmbedError, FileNotFoundError) as e:
        err_console.print(f"[red]error:[/red] {escape(str(e))}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
