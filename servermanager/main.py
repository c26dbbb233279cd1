from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
import sys

from servermanager.services.delete_history import DeleteHistoryService
from servermanager.services.paths import INSTALL_PATH_ENV, resolve_install_path, weather_dir
from servermanager.services.weather_catalog import (
    LIST_FAILED_MESSAGE,
    WeatherCatalogError,
    WeatherCatalogService,
)


def _build_service(args: argparse.Namespace) -> WeatherCatalogService:
    install_path = resolve_install_path(cli=args.install_path, env=os.getenv(INSTALL_PATH_ENV))
    history = DeleteHistoryService(history_path=args.history) if args.history else None
    return WeatherCatalogService(weather_root=weather_dir(install_path), history=history)


def cmd_list(args: argparse.Namespace) -> int:
    service = _build_service(args)
    try:
        weather = service.list_weather()
    except WeatherCatalogError as exc:
        logging.getLogger(__name__).error("could not get weather list, err: %s", exc)
        print(str(exc), file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(weather, indent=2, sort_keys=True))
        return 0
    for key in sorted(weather):
        print(f"{key}\t{weather[key]}")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    service = _build_service(args)
    try:
        outcome = service.delete_weather(args.key)
    except WeatherCatalogError as exc:
        logging.getLogger(__name__).error("could not get weather list, err: %s", exc)
        print(LIST_FAILED_MESSAGE, file=sys.stderr)
        return 1

    print(outcome.message)
    return 0 if outcome.success else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="servermanager",
        description="Inspect and manage weather presets installed on the server.",
    )
    parser.add_argument(
        "--install-path",
        default=None,
        help=f"Server install directory. Fallback env var: {INSTALL_PATH_ENV}.",
    )
    parser.add_argument(
        "--history",
        default=None,
        type=Path,
        help="Path of the delete history file (default: user data dir).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List installed and built-in weather presets.")
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the catalog as a JSON object.",
    )
    list_parser.set_defaults(func=cmd_list)

    delete_parser = subparsers.add_parser("delete", help="Delete an installed weather preset.")
    delete_parser.add_argument("key", help="Weather preset key (its directory name).")
    delete_parser.set_defaults(func=cmd_delete)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
