"""
Module: cli

Purpose:
    Command line entry point (``picture-toolkit`` / ``python -m picture_toolkit``).

Commands:
    - render IMAGE --definition NAME --definitions-dir DIR: Generate the
      picture and print its markup (or JSON with --json)
    - list --definitions-dir DIR: Print the available definition names
    - validate FILE: Validate a definition JSON file against the schema

Exit Codes:
    0 success, 1 picture/definition errors, 2 usage errors
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from picture_toolkit import __version__
from picture_toolkit.core.exceptions import PictureError
from picture_toolkit.core.schemas import validate_definition
from picture_toolkit.core.utils import locked_read_json
from picture_toolkit.creator import CreatorConfig, PictureCreator
from picture_toolkit.definitions import JsonFilesDefinitions

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="picture-toolkit",
        description="Generate responsive <picture> markup from image definitions",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Create a picture from an image")
    render.add_argument("image", type=Path, help="Source image file")
    render.add_argument("--definition", "-d", required=True, help="Definition name")
    render.add_argument(
        "--definitions-dir",
        type=Path,
        action="append",
        required=True,
        help="Directory of <name>.json definitions (repeatable, first wins)",
    )
    render.add_argument("--config", type=Path, help="Creator config JSON file")
    render.add_argument("--skip-smaller", action="store_true", help="Drop variants larger than the source")
    render.add_argument("--verify-sizes", action="store_true", help="Fail when the source is too small")
    render.add_argument("--upsize", type=float, help="Maximum enlargement factor")
    render.add_argument("--workers", type=int, help="Encoder threads")
    render.add_argument("--json", action="store_true", help="Print the created picture as JSON")

    listing = subparsers.add_parser("list", help="List definition names")
    listing.add_argument("--definitions-dir", type=Path, action="append", required=True)

    validate = subparsers.add_parser("validate", help="Validate a definition JSON file")
    validate.add_argument("file", type=Path)

    return parser


def load_config(args: argparse.Namespace) -> CreatorConfig:
    """
    Build the creator config from --config and the command line flags.

    Flags override values from the config file.

    Raises:
        ValueError: If the config file holds unknown keys or bad values
    """
    config = CreatorConfig()
    if args.config is not None:
        data = locked_read_json(args.config)
        if not isinstance(data, dict):
            raise ValueError(f"Config file must hold an object: {args.config}")
        config = CreatorConfig.from_dict(data)

    overrides = {}
    if args.skip_smaller:
        overrides["skip_smaller_sized_src"] = True
    if args.verify_sizes:
        overrides["verify_sizes"] = True
    if args.upsize is not None:
        overrides["upsize"] = args.upsize
    if args.workers is not None:
        overrides["max_workers"] = args.workers
    return replace(config, **overrides) if overrides else config


def cmd_render(args: argparse.Namespace) -> int:
    if not args.image.is_file():
        print(f"Image not found: {args.image}", file=sys.stderr)
        return EXIT_ERROR

    try:
        config = load_config(args)
    except (OSError, ValueError) as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        return EXIT_ERROR

    definitions = JsonFilesDefinitions("files", args.definitions_dir)
    try:
        definition = definitions.get(args.definition)
        created = PictureCreator(config=config).create_from_file(args.image, definition)
    except PictureError as e:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.json:
        print(json.dumps(created.to_dict(), indent=2))
    else:
        print(created.render())
    return EXIT_OK


def cmd_list(args: argparse.Namespace) -> int:
    definitions = JsonFilesDefinitions("files", args.definitions_dir)
    for definition in definitions:
        print(definition.name)
    return EXIT_OK


def cmd_validate(args: argparse.Namespace) -> int:
    if not args.file.is_file():
        print(f"File not found: {args.file}", file=sys.stderr)
        return EXIT_ERROR

    try:
        validate_definition(locked_read_json(args.file), strict=True)
    except json.JSONDecodeError as e:
        print(f"Invalid JSON in {args.file}: {e}", file=sys.stderr)
        return EXIT_ERROR
    except PictureError as e:
        print(f"Invalid definition {args.file}: {e}", file=sys.stderr)
        return EXIT_ERROR

    print(f"{args.file}: valid")
    return EXIT_OK


COMMANDS = {
    "render": cmd_render,
    "list": cmd_list,
    "validate": cmd_validate,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
