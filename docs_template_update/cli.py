"""CLI entrypoint for docs-template-update."""

from __future__ import annotations

import argparse
import dataclasses
import sys

from .config import API_KEY_ENV, ConfigError, load_config, resolve_api_key
from .errors import UpdateError
from .logging import configure_from_config, configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docs-template-update",
        description="docs-template-update updates documentation templates to the new format.",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help=f"Google Gemini API key (required; falls back to {API_KEY_ENV}).",
    )
    parser.add_argument(
        "--path",
        default=".",
        help="Path to the package directory (defaults to current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable verbose logging.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the patch without writing the updated readme.",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Gemini model to use (overrides the config file).",
    )
    parser.add_argument(
        "--template-url",
        default=None,
        help="URL of the README template (overrides the config file).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docs-template-update."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logger = configure_logging(verbose=bool(args.verbose))

    try:
        config = load_config(args.path)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    api_key = resolve_api_key(args.api_key, config)
    if not api_key:
        parser.exit(
            1,
            "Google API key is required. Set it using the --api-key flag or "
            f"{API_KEY_ENV} environment variable\n",
        )

    llm = dataclasses.replace(config.llm, api_key=api_key)
    if args.model:
        llm = dataclasses.replace(llm, model=args.model)
    template = config.template
    if args.template_url:
        template = dataclasses.replace(template, url=args.template_url)
    config = dataclasses.replace(
        config,
        llm=llm,
        template=template,
        verbose=bool(args.verbose) or config.verbose,
        write=config.write and not args.dry_run,
    )
    logger = configure_from_config(config)

    orchestrator = Orchestrator(config)
    try:
        outcome = orchestrator.run(args.path)
    except UpdateError as exc:
        logger.debug("Update failed", exc_info=True)
        parser.exit(1, f"Error processing package: {exc}\n")

    print(outcome.patch)


if __name__ == "__main__":
    main(sys.argv[1:])
