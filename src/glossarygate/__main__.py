"""Main entry point for the GlossaryGate command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__, paths
from .client import ProviderClient
from .config import GatewayConfig, load_config
from .directory import GlossaryDirectory
from .entries import aggregate_entries, latest_modification, load_entries
from .gateway import TranslationGateway
from .logging_utils import setup_logging
from .reconciler import LanguagePairReconciler
from .sync import synchronize_glossaries
from .templates import DEFAULT_CONFIG_YAML, DEFAULT_GLOSSARY_YAML

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the GlossaryGate CLI.

    Returns:
        argparse.Namespace: An object containing the parsed command-line arguments.

    """
    parser = argparse.ArgumentParser(description="GlossaryGate: DeepL translation with glossaries")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"GlossaryGate {__version__}",
        help="Show the version number and exit.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug level logging.")
    parser.add_argument(
        "--path",
        default=".",
        help="The project directory holding '.glossarygate' (default: current directory).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    init_parser = subparsers.add_parser("init", help="Write a default configuration.")
    init_parser.add_argument("target", nargs="?", default=".", help="The directory to initialize (default: current directory).")

    pairs_parser = subparsers.add_parser("pairs", help="Show the configured language pairs supported by DeepL.")
    pairs_parser.add_argument("--limit-to", nargs="+", metavar="LANG", help="Only show pairs involving these languages.")

    subparsers.add_parser("languages", help="Show the languages of the configured pairs.")
    subparsers.add_parser("glossaries", help="List the glossaries of the DeepL account.")
    subparsers.add_parser("status", help="Show whether each usable pair has a current glossary.")
    subparsers.add_parser("sync", help="Recreate the DeepL glossaries from the local glossary file.")

    delete_parser = subparsers.add_parser("delete-glossary", help="Delete a glossary by id.")
    delete_parser.add_argument("glossary_id", help="The id of the glossary to delete.")

    translate_parser = subparsers.add_parser("translate", help="Translate texts.")
    translate_parser.add_argument("texts", nargs="+", help="The texts to translate.")
    translate_parser.add_argument("--target", required=True, help="The target language, e.g. 'DE' or 'EN-US'.")
    translate_parser.add_argument("--source", help="The source language. Detected by DeepL if omitted.")

    return parser.parse_args(argv)


def _init_project(target_path: Path) -> bool:
    """Create the default configuration and glossary files. Returns False if a configuration already exists."""
    config_file = paths.get_config_dir(target_path) / paths.CONFIG_FILE_NAMES[0]
    if config_file.exists():
        logger.warning("Configuration file already exists at: %s", config_file)
        return False

    paths.ensure_dir_exists(config_file.parent)
    config_file.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
    logger.info("Created default configuration at: %s", config_file)

    glossary_file = paths.get_glossary_file_path(target_path)
    if not glossary_file.exists():
        glossary_file.write_text(DEFAULT_GLOSSARY_YAML, encoding="utf-8")
        logger.info("Created example glossary at: %s", glossary_file)
    return True


def _load_config(root_path: Path) -> GatewayConfig | None:
    """
    Load configuration from the fixed file path relative to root_path.

    Returns:
        The configuration, or None if it could not be loaded.

    """
    try:
        config_path = paths.get_config_file_path(root_path)
        logger.debug("Loading configuration from: %s", config_path)
        return load_config(str(config_path))
    except FileNotFoundError:
        logger.exception("Could not find a valid configuration file.")
        return None
    except Exception:
        logger.exception("An unexpected error occurred while loading the configuration.")
        return None


def _run_command(args: argparse.Namespace, config: GatewayConfig, root_path: Path) -> None:
    """Execute a command that talks to the provider."""
    with ProviderClient(config) as client:
        reconciler = LanguagePairReconciler(client, config.configured_pairs)
        if args.command == "pairs":
            pairs, limit_to = reconciler.language_pairs(args.limit_to)
            for pair in pairs:
                logger.info("%s", pair)
            if limit_to is not None:
                logger.info("Languages: %s", ", ".join(limit_to))
        elif args.command == "languages":
            languages = reconciler.languages()
            logger.info("Languages: %s", ", ".join(languages))
        elif args.command == "glossaries":
            glossaries = GlossaryDirectory(client).list_glossaries()
            if not glossaries:
                logger.info("No glossaries found.")
            for glossary in glossaries:
                logger.info(
                    "%s | %s --> %s | ready=%s | created=%s | entries=%s",
                    glossary.glossary_id,
                    glossary.source_lang,
                    glossary.target_lang,
                    glossary.ready,
                    glossary.creation_date,
                    glossary.entry_count,
                )
        elif args.command == "status":
            pairs, _ = reconciler.language_pairs()
            glossary_file = paths.get_glossary_file_path(root_path)
            entries = load_entries(glossary_file) if glossary_file.is_file() else []
            for status in GlossaryDirectory(client).status(pairs, latest_modification(entries)):
                logger.info(
                    "%s --> %s | usable=%s | outdated=%s | created=%s",
                    status.source_lang,
                    status.target_lang,
                    status.can_be_used,
                    status.is_outdated,
                    status.creation_date,
                )
        elif args.command == "sync":
            entries = load_entries(paths.get_glossary_file_path(root_path))
            aggregates = aggregate_entries(entries, config.sort_by_language)
            pairs, _ = reconciler.language_pairs()
            created = synchronize_glossaries(GlossaryDirectory(client), pairs, aggregates)
            logger.info("Synchronized glossaries: %d created for %d language pairs.", len(created), len(pairs))
        elif args.command == "delete-glossary":
            GlossaryDirectory(client).delete(args.glossary_id)
        elif args.command == "translate":
            texts = {str(index): text for index, text in enumerate(args.texts)}
            translations = TranslationGateway(config, client).translate(texts, args.target, args.source)
            for key, text in texts.items():
                logger.info("%s -> %s", text, translations[key])


def main(argv: list[str] | None = None) -> None:
    """
    Run the main entry point for the GlossaryGate command-line interface.

    1. Parses command-line arguments.
    2. Loads the configuration.
    3. Runs the requested command.
    """
    try:
        args = _parse_args(argv)

        if args.command == "init":
            init_path = Path(args.target).resolve()
            if not init_path.is_dir():
                logger.error("Path is not a directory: %s", init_path)
                sys.exit(1)
            setup_logging(version=__version__)
            _init_project(init_path)
            return

        target_path = Path(args.path).resolve()
        if not target_path.is_dir():
            logger.error("Path is not a directory: %s", target_path)
            sys.exit(1)

        setup_logging(version=__version__, debug=args.debug, project_root=target_path)

        config = _load_config(target_path)
        if config is None:
            logger.critical("Failed to load configuration. Aborting.")
            sys.exit(1)

        _run_command(args, config, target_path)

    except Exception:
        logger.exception("An unexpected error occurred")
        logger.critical("An unrecoverable error occurred. Please check the logs for details.")
        sys.exit(1)


if __name__ == "__main__":
    main()
