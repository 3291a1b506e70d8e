"""Module entrypoint: `python -m tablecompat describe` prints the resolved configuration."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from .environment import emulator_host_from_env
from .errors import ConfigError
from .settings import load_settings


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tablecompat", description=__doc__)
    subparsers = parser.add_subparsers(dest="command", required=True)
    describe = subparsers.add_parser("describe", help="Print the resolved connection configuration.")
    describe.add_argument("--config", type=Path, default=None, help="Settings file to read.")
    describe.add_argument("--emulator", default=None, help="Emulator address as host:port.")
    describe.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    builder = load_settings(args.config)
    try:
        config = builder.build(emulator_host=args.emulator or emulator_host_from_env())
    except ConfigError as exc:
        print(f"Invalid configuration ({exc.kind.value}): {exc}", file=sys.stderr)
        return 2
    print(json.dumps(config.model_dump(mode="json"), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
