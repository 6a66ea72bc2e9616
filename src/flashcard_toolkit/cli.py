"""
Command-line interface.

Usage:
    python -m flashcard_toolkit build --cards cards.json --out output --capacity 8
    python -m flashcard_toolkit generate --topic Fractions --grade 4 --num-cards 12 --out cards.json
    python -m flashcard_toolkit tokens create --count 100
    python -m flashcard_toolkit tokens redeem <token>
    python -m flashcard_toolkit serve --port 5000
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .cards_io import CardsFileError, dump_cards, load_cards
from .config import AppSettings, DeckConfig
from .controller import BuildError, build_deck
from .access import RedeemOutcome, TokenStore, TokenStoreError
from .generation import CardGenerator, GeminiClient, GenerationError, GenerationRequest
from .layout import DEFAULT_CAPACITY, LayoutConfig, SUPPORTED_CAPACITIES

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="flashcard_toolkit")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Lay out cards as a duplex-printable PDF")
    build.add_argument("--cards", required=True, help="JSON file of {front, back} cards")
    build.add_argument("--out", default="output", help="Output directory")
    build.add_argument(
        "--capacity",
        type=int,
        default=DEFAULT_CAPACITY,
        help=f"Cards per sheet, one of {list(SUPPORTED_CAPACITIES)} (others use {DEFAULT_CAPACITY})",
    )
    build.add_argument("--filename", default="flashcards.pdf", help="PDF file name")
    build.add_argument("--no-timestamp", action="store_true", help="Write directly into --out")
    build.add_argument("--previews", action="store_true", help="Also write PNG previews")
    build.add_argument("--no-borders", action="store_true", help="Do not draw card outlines")
    _add_layout_args(build)

    gen = sub.add_parser("generate", help="Generate cards with Gemini (needs GEMINI_API_KEY)")
    gen.add_argument("--topic", required=True)
    gen.add_argument("--grade", required=True)
    gen.add_argument("--num-cards", type=int, required=True)
    gen.add_argument("--out", required=True, help="Where to write the cards JSON")

    tokens = sub.add_parser("tokens", help="Manage one-time unlock tokens")
    tokens.add_argument("--path", default=None, help="Token file (default: FLASHCARD_TOKENS_PATH or tokens.json)")
    tokens_sub = tokens.add_subparsers(dest="tokens_command", required=True)
    create = tokens_sub.add_parser("create", help="Provision fresh tokens (replaces the file)")
    create.add_argument("--count", type=int, default=100)
    redeem = tokens_sub.add_parser("redeem", help="Redeem a token")
    redeem.add_argument("token")
    tokens_sub.add_parser("stats", help="Show used/unused counts")

    serve = sub.add_parser("serve", help="Run the web API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)
    serve.add_argument("--debug", action="store_true")

    return p


def _add_layout_args(parser: argparse.ArgumentParser) -> None:
    defaults = LayoutConfig()
    parser.add_argument("--page-width", type=float, default=defaults.page_width, help="Points")
    parser.add_argument("--page-height", type=float, default=defaults.page_height, help="Points")
    parser.add_argument("--margin", type=float, default=defaults.margin, help="Points")
    parser.add_argument("--gap", type=float, default=defaults.gap, help="Points")
    parser.add_argument("--font-size", type=float, default=defaults.font_size)


def cmd_build(args: argparse.Namespace) -> int:
    try:
        layout = LayoutConfig(
            page_width=args.page_width,
            page_height=args.page_height,
            margin=args.margin,
            gap=args.gap,
            font_size=args.font_size,
        )
        config = DeckConfig(
            output_dir=Path(args.out),
            capacity=args.capacity,
            layout=layout,
            filename=args.filename,
            timestamp_subfolder=not args.no_timestamp,
            write_previews=args.previews,
            show_borders=not args.no_borders,
        )
        cards = load_cards(Path(args.cards))
        result = build_deck(cards, config)
    except (ValueError, CardsFileError, BuildError) as e:
        logger.error(str(e))
        return 1

    print(str(result.pdf_path))
    logger.info(
        f"{result.card_count} cards on {result.sheet_count} sheets: "
        "print double-sided, flip on long edge"
    )
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    settings = AppSettings.from_env()
    generator = CardGenerator(GeminiClient(settings.gemini_api_key, model=settings.model))
    try:
        request = GenerationRequest(topic=args.topic, grade=args.grade, num_cards=args.num_cards)
        result = generator.generate(request)
    except (ValueError, GenerationError) as e:
        logger.error(str(e))
        return 1

    if result.is_fallback:
        logger.warning(f"Wrote placeholder cards: {result.reason}")
    dump_cards(result.cards, Path(args.out))
    print(args.out)
    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    path = Path(args.path) if args.path else AppSettings.from_env().tokens_path
    store = TokenStore(path)

    try:
        if args.tokens_command == "create":
            tokens = store.provision(args.count)
            print(f"{path} created with {len(tokens)} one-time unlock tokens.")
            return 0

        if args.tokens_command == "redeem":
            outcome = store.redeem(args.token)
            print(outcome.value)
            return 0 if outcome is RedeemOutcome.REDEEMED else 1

        stats = store.stats()
    except (ValueError, TokenStoreError) as e:
        logger.error(str(e))
        return 1

    print(f"total={stats['total']} used={stats['used']} unused={stats['unused']}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    from .web import create_app

    settings = AppSettings.from_env()
    if args.debug and settings.secure_cookie:
        # Plain-http dev server cannot set Secure cookies
        settings = replace(settings, secure_cookie=False)
    create_app(settings).run(host=args.host, port=args.port, debug=args.debug)
    return 0


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    commands = {
        "build": cmd_build,
        "generate": cmd_generate,
        "tokens": cmd_tokens,
        "serve": cmd_serve,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
