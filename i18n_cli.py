"""Command-line front end for the translation engine.

Translates texts and inspects or resets the engine state (cache, rate limit, debug flag).
Relative STORAGE.PATH and DICTIONARY.PATH values are resolved against the configuration file directory.

Log records of WARNING and above go to stderr; a log file is written only when GENERAL.LOG_FILE is set.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from config.loader import Config, ConfigLoader, ConfigLoaderError
from core.service import TranslationService
from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Sequence

    from models.cache_models import CacheStatistics
    from models.translation_models import RateLimitStatus

CFG_FILE: Final[str] = "i18n_engine.ini"


def check_python_version() -> None:
    """Check if Python version is 3.13 or later.

    Raises:
        RuntimeError: If Python version is below 3.13.
    """
    if sys.version_info < (3, 13):
        msg = "Python 3.13 or later is required"
        raise RuntimeError(msg)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv (Sequence[str] | None): Arguments to parse. None reads sys.argv.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = _ArgumentParser(
        description="Translate texts with the i18n engine",
        epilog='Example: python i18n_cli.py translate "Save changes" --lang fr',
    )
    parser.add_argument("--config", dest="config", default=CFG_FILE, metavar="FILE", help="Configuration file")
    parser.add_argument("--debug", dest="debug", action="store_true", default=None, help="Enable debug logging")
    parser.add_argument("--api-key", dest="api_key", metavar="KEY", help="Override the primary provider API key")

    sub = parser.add_subparsers(dest="command", required=True, parser_class=_ArgumentParser)

    translate = sub.add_parser("translate", help="Translate one text")
    translate.add_argument("text", help="Text to translate")
    translate.add_argument("--lang", dest="language", help="Target language code")

    batch = sub.add_parser("batch", help="Translate several texts")
    batch.add_argument("texts", nargs="+", help="Texts to translate")
    batch.add_argument("--lang", dest="language", help="Target language code")

    sub.add_parser("status", help="Show rate limit and cache status")
    sub.add_parser("languages", help="List supported languages")

    clear_cache = sub.add_parser("clear-cache", help="Clear the translation cache")
    clear_cache.add_argument("--lang", dest="language", help="Clear only this language")

    sub.add_parser("clear-rate-limit", help="End the rate limit cooldown")

    debug = sub.add_parser("debug", help="Persist the debug logging flag")
    debug.add_argument("state", choices=["on", "off"])
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load configuration file and apply CLI overrides.

    Args:
        args: Command-line arguments.

    Returns:
        Config: Configuration object.

    Raises:
        ConfigLoaderError: If configuration file cannot be loaded.
    """
    script_name: str = Path(sys.argv[0]).stem
    config: Config = ConfigLoader(
        config_filename=args.config,
        script_name=script_name,
        debug=args.debug,
        api_key=args.api_key,
    ).config
    config_dir: Path = Path(args.config).resolve().parent
    config.STORAGE.PATH = str(FileUtils.resolve_path(config.STORAGE.PATH, base_dir=config_dir))
    if config.DICTIONARY.PATH.strip():
        config.DICTIONARY.PATH = str(FileUtils.resolve_path(config.DICTIONARY.PATH, base_dir=config_dir))
    return config


def _print_status(status: RateLimitStatus, stats: CacheStatistics) -> None:
    if status.is_limited:
        print(f"Rate limit: active ({status.minutes_remaining} min remaining)")
    else:
        print("Rate limit: inactive")
    print(f"Cache: {stats.total_entries} texts, {stats.total_translations} translations, {stats.serialized_bytes} bytes")
    for lang, count in sorted(stats.language_distribution.items()):
        print(f"  {lang}: {count}")


async def run_command(service: TranslationService, args: argparse.Namespace) -> int:
    """Execute one subcommand against an initialized service.

    Returns:
        int: Process exit code.
    """
    match args.command:
        case "translate":
            print(await service.translate(args.text, args.language))
        case "batch":
            for result in await service.translate_batch(args.texts, args.language):
                print(result)
        case "status":
            print(f"Language: {service.get_language()}")
            _print_status(service.get_rate_limit_status(), service.cache_statistics())
        case "languages":
            for lang in service.get_supported_languages():
                print(f"{lang.code}\t{lang.name}\t{lang.native}")
        case "clear-cache":
            if args.language:
                service.clear_language_cache(args.language)
                print(f"Cache cleared for '{args.language}'")
            else:
                service.clear_cache()
                print("Cache cleared")
        case "clear-rate-limit":
            service.clear_rate_limit()
            print("Rate limit cleared")
        case "debug":
            service.set_debug(enabled=args.state == "on")
            print(f"Debug mode {args.state}")
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 2
    return 0


async def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Performs the following steps:
    1. Check Python version
    2. Parse command-line arguments
    3. Load configuration
    4. Initialize the translation service
    5. Run the subcommand and release resources
    """
    check_python_version()
    args: argparse.Namespace = parse_arguments(argv)
    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return 1

    LoggerUtils(config.GENERAL.LOG_FILE)
    service = TranslationService(config)
    service.init()
    try:
        return await run_command(service, args)
    finally:
        await service.close()


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\n\nCancelled by user.", file=sys.stderr)
        sys.exit(130)
    except (OSError, RuntimeError) as err:
        print(f"\nFatal error: {err}", file=sys.stderr)
        sys.exit(1)
