"""CLI entry point for the TransArena service."""

import argparse
import asyncio
import json
import logging
import sys

from transarena.config import as_dry_run, load_config
from transarena.errors import TransArenaError

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


def _load(args):
    config = load_config(args.config)
    if getattr(args, "dry_run", False):
        config = as_dry_run(config)
    logging.basicConfig(level=config.server.log_level.upper(), format=LOG_FORMAT)
    return config


def _run_with_service(config, operation):
    from transarena.service import ArenaService

    async def main():
        service = ArenaService.from_config(config)
        try:
            return await operation(service)
        finally:
            await service.close()

    return asyncio.run(main())


def cmd_serve(args):
    import uvicorn
    from transarena.app import create_app
    config = _load(args)
    uvicorn.run(
        create_app(config),
        host=args.host or config.server.host,
        port=args.port or config.server.port,
        log_level=config.server.log_level.lower(),
    )


def cmd_languages(args):
    from transarena.catalogue import SUPPORTED_LANGUAGES
    for name, profile in SUPPORTED_LANGUAGES.items():
        print(f"{name}\t{profile.native_name}")


def cmd_detect(args):
    config = _load(args)
    result = _run_with_service(config, lambda service: service.detect(args.text))
    print(result.model_dump_json(by_alias=True, indent=2))


def cmd_compare(args):
    from transarena.schemas import SimilarityRequest
    config = _load(args)
    request = SimilarityRequest(text=args.text, source_language=args.source_language)
    report = _run_with_service(config, lambda service: service.similarity_index(request))
    print(json.dumps(report.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2, ensure_ascii=False))


def main():
    parser = argparse.ArgumentParser(description="TransArena translation comparison service")
    parser.add_argument("--config", default=None, help="Config file path (default: $TRANSARENA_CONFIG or config/arena.yaml)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Bind port")
    serve_parser.add_argument("--dry-run", action="store_true", help="Use mock providers")
    serve_parser.set_defaults(func=cmd_serve)

    # languages
    languages_parser = subparsers.add_parser("languages", help="List supported languages")
    languages_parser.set_defaults(func=cmd_languages)

    # detect
    detect_parser = subparsers.add_parser("detect", help="Detect the language of a text")
    detect_parser.add_argument("text", help="Text to classify")
    detect_parser.add_argument("--dry-run", action="store_true", help="Use mock providers")
    detect_parser.set_defaults(func=cmd_detect)

    # compare
    compare_parser = subparsers.add_parser("compare", help="Compare both translators across all languages")
    compare_parser.add_argument("text", help="Text to translate")
    compare_parser.add_argument("--source-language", type=str, help="Source language label")
    compare_parser.add_argument("--dry-run", action="store_true", help="Use mock providers")
    compare_parser.set_defaults(func=cmd_compare)

    args = parser.parse_args()
    try:
        args.func(args)
    except (ValueError, TransArenaError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
