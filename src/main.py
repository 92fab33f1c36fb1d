# src/main.py — v1
"""CLI entry point — one subcommand per assistant feature.

Usage:
    petassist symptoms "limping and not eating"
    petassist media photo.jpg
    petassist recipe chicken rice carrots
    petassist health answers.json
    petassist adoption "Austin, TX"
"""

from __future__ import annotations

import argparse
import asyncio
import base64
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import Any

from petassist.version import __version__

logger = logging.getLogger(__name__)

EXIT_RUNTIME_ERROR = 1
EXIT_CONFIG_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    from pydantic import ValidationError

    from petassist.config.settings import load_settings, require_gemini_key
    from petassist.core.errors import ConfigurationError, PetAssistError
    from petassist.logging.logger import setup_logging

    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        settings = load_settings()
        setup_logging(
            level="DEBUG" if args.verbose else settings.log_level,
            log_format=settings.log_format,
            log_file=str(settings.log_file) if settings.log_file else None,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
        )
        require_gemini_key(settings)
    except (ConfigurationError, ValidationError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        from petassist.api.facade import build_assistant

        assistant = build_assistant(settings)
        return asyncio.run(args.func(assistant, args))
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except PetAssistError as exc:
        logger.debug("Command failed", exc_info=True)
        print(getattr(exc, "user_message", None) or str(exc), file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="petassist",
        description=f"petassist v{__version__} — AI pet care assistant",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- free-text features ---
    for name, help_text, func in (
        ("symptoms", "Analyze described symptoms", _cmd_symptoms),
        ("first-aid", "First-aid guidance for an emergency", _cmd_first_aid),
        ("behavior", "Interpret a described behavior", _cmd_behavior),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("text", nargs="+", help="Free-text description")
        p.set_defaults(func=func)

    p_location = subparsers.add_parser("location", help="Pet-friendliness of a place")
    p_location.add_argument("text", nargs="+", help="Place or address")
    p_location.add_argument(
        "--geocode", action="store_true",
        help="Resolve the address with Google Geocoding first",
    )
    p_location.set_defaults(func=_cmd_location)

    # --- structured features ---
    p_recipe = subparsers.add_parser("recipe", help="Homemade treat recipe")
    p_recipe.add_argument("ingredients", nargs="+", help="Available ingredients")
    p_recipe.set_defaults(func=_cmd_recipe)

    p_memorial = subparsers.add_parser("memorial", help="Memorial tribute")
    p_memorial.add_argument("--name", required=True)
    p_memorial.add_argument("--species", required=True)
    p_memorial.add_argument("--years", type=int, required=True)
    p_memorial.add_argument("--description", required=True)
    p_memorial.set_defaults(func=_cmd_memorial)

    p_growth = subparsers.add_parser("growth", help="Growth against breed standards")
    p_growth.add_argument("--species", choices=["dog", "cat"], default="dog")
    p_growth.add_argument("--breed", required=True)
    p_growth.add_argument("--age", type=int, required=True, help="Age in months")
    p_growth.add_argument("--weight", type=float, required=True, help="Weight in kg")
    p_growth.add_argument("--height", type=float, default=None, help="Height in cm")
    p_growth.set_defaults(func=_cmd_growth)

    # --- media features ---
    p_media = subparsers.add_parser("media", help="Analyze a pet photo or video")
    p_media.add_argument("file", type=Path)
    p_media.add_argument("--video", action="store_true", help="Treat file as video")
    p_media.set_defaults(func=_cmd_media)

    p_audio = subparsers.add_parser("audio", help="Analyze a vocalization recording")
    p_audio.add_argument("file", type=Path)
    p_audio.set_defaults(func=_cmd_audio)

    p_plant = subparsers.add_parser("plant", help="Identify a plant and its toxicity")
    p_plant.add_argument("file", type=Path)
    p_plant.set_defaults(func=_cmd_plant)

    # --- health assessment ---
    p_health = subparsers.add_parser(
        "health", help="Run the health questionnaire from a JSON answers file",
    )
    p_health.add_argument("answers", type=Path, help="JSON object of field answers")
    p_health.set_defaults(func=_cmd_health)

    # --- adoption ---
    p_adoption = subparsers.add_parser("adoption", help="Find nearby adoption centers")
    p_adoption.add_argument("location", nargs="+", help="City, state or postcode")
    p_adoption.add_argument("--distance", type=int, default=None, help="Miles")
    p_adoption.add_argument("--limit", type=int, default=None)
    p_adoption.set_defaults(func=_cmd_adoption)

    return parser


async def _cmd_symptoms(assistant: Any, args: argparse.Namespace) -> int:
    print(await assistant.analyze_symptoms(" ".join(args.text)))
    return 0


async def _cmd_first_aid(assistant: Any, args: argparse.Namespace) -> int:
    print(await assistant.first_aid(" ".join(args.text)))
    return 0


async def _cmd_behavior(assistant: Any, args: argparse.Namespace) -> int:
    print(await assistant.analyze_behavior(" ".join(args.text)))
    return 0


async def _cmd_location(assistant: Any, args: argparse.Namespace) -> int:
    text = " ".join(args.text)
    if args.geocode:
        insight = await assistant.explore_location(text)
        loc = insight.location
        print(f"{loc.address} ({loc.latitude:.5f}, {loc.longitude:.5f})\n")
        print(insight.analysis)
    else:
        print(await assistant.analyze_location(text))
    return 0


async def _cmd_recipe(assistant: Any, args: argparse.Namespace) -> int:
    print(await assistant.generate_treat_recipe(args.ingredients))
    return 0


async def _cmd_memorial(assistant: Any, args: argparse.Namespace) -> int:
    print(await assistant.generate_memorial({
        "name": args.name,
        "species": args.species,
        "years": args.years,
        "description": args.description,
    }))
    return 0


async def _cmd_growth(assistant: Any, args: argparse.Namespace) -> int:
    print(await assistant.analyze_growth({
        "species": args.species,
        "breed": args.breed,
        "age": args.age,
        "weight": args.weight,
        "height": args.height,
    }))
    return 0


async def _cmd_media(assistant: Any, args: argparse.Namespace) -> int:
    default = "video/webm" if args.video else "image/jpeg"
    data_url = _read_data_url(args.file, default)
    if data_url is None:
        return EXIT_RUNTIME_ERROR
    print(await assistant.analyze_media(data_url, is_video=args.video))
    return 0


async def _cmd_audio(assistant: Any, args: argparse.Namespace) -> int:
    data_url = _read_data_url(args.file, "audio/wav")
    if data_url is None:
        return EXIT_RUNTIME_ERROR
    print(await assistant.analyze_audio(data_url))
    return 0


async def _cmd_plant(assistant: Any, args: argparse.Namespace) -> int:
    data_url = _read_data_url(args.file, "image/jpeg")
    if data_url is None:
        return EXIT_RUNTIME_ERROR
    print(await assistant.analyze_plant(data_url))
    return 0


async def _cmd_health(assistant: Any, args: argparse.Namespace) -> int:
    """Feed the answers file through every wizard section, then submit."""
    answers_path: Path = args.answers
    if not answers_path.is_file():
        logger.error("File not found: %s", answers_path)
        return EXIT_RUNTIME_ERROR
    try:
        answers = json.loads(answers_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.error("Cannot read answers file %s: %s", answers_path, e)
        return EXIT_RUNTIME_ERROR
    if not isinstance(answers, dict):
        logger.error("Answers file must contain a JSON object")
        return EXIT_RUNTIME_ERROR

    wizard = assistant.health_wizard()
    wizard.update_many(answers)
    missing = wizard.missing_fields()
    if missing:
        labels = ", ".join(wizard.label_for(name) for name in missing)
        print(f"Unanswered required fields: {labels}", file=sys.stderr)
    result = None
    while result is None:
        result = await wizard.next()

    _print_health_result(result.analysis)
    return 0


async def _cmd_adoption(assistant: Any, args: argparse.Namespace) -> int:
    location = " ".join(args.location)
    orgs = await assistant.find_adoption_centers(
        location, distance=args.distance, limit=args.limit,
    )
    if not orgs:
        print(f"No adoption centers found near {location}.")
        return 0
    for org in orgs:
        print(f"{org.name}")
        print(f"  {org.location_line}")
        for label, value in (("Phone", org.phone), ("Email", org.email), ("Web", org.url)):
            if value:
                print(f"  {label}: {value}")
    return 0


def _read_data_url(path: Path, default_mime: str) -> str | None:
    """Encode a local file as a base64 data URL."""
    if not path.is_file():
        logger.error("File not found: %s", path)
        return None
    mime, _ = mimetypes.guess_type(path.name)
    body = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime or default_mime};base64,{body}"


def _print_health_result(analysis: Any) -> None:
    """Print a human-readable summary of a HealthAnalysis."""
    print(f"\nSeverity: {analysis.severity}\n")
    print(analysis.prediction)
    if analysis.kind != "structured":
        return
    if analysis.risks:
        print("\nRisk factors:")
        for risk in analysis.risks:
            print(f"  - {risk}")
    if analysis.recommendations:
        print("\nRecommendations:")
        for rec in analysis.recommendations:
            print(f"  - {rec}")


if __name__ == "__main__":
    sys.exit(main())
