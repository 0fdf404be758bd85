"""Cartship Command Line Interface

Seed, inspect and clean up the store fixtures used by the E2E suite.
"""

import argparse
import json
import sys
from pathlib import Path

import httpx

from . import __version__
from .config import load_settings
from .errors import CartshipError, TeardownError
from .logging_config import get_logger, setup_logging
from .scenario import DEFAULT_SCENARIO
from .seeding import StoreSeeder, load_manifest, save_manifest
from .wc_api import WooCommerceAPI

logger = get_logger("cli")


def cmd_seed(settings, manifest: Path = None) -> int:
    """Seed the default scenario and print the created ids."""
    with WooCommerceAPI(settings) as api:
        seeded = StoreSeeder(api).seed(DEFAULT_SCENARIO)
    if manifest:
        save_manifest(seeded, manifest)
        print(f"Manifest written to {manifest}")
    print(json.dumps(seeded.to_dict(), indent=2, sort_keys=True))
    return 0


def cmd_teardown(settings, manifest: Path) -> int:
    """Remove the fixtures recorded in a manifest."""
    seeded = load_manifest(manifest)
    with WooCommerceAPI(settings) as api:
        try:
            StoreSeeder(api).teardown(seeded)
        except TeardownError:
            # Keep only what is still in the store so a rerun can finish
            save_manifest(seeded, manifest)
            raise
    manifest.unlink()
    print(f"Removed fixtures from {manifest}")
    return 0


def cmd_purge(settings) -> int:
    """Remove leftovers of earlier runs, matched by name."""
    with WooCommerceAPI(settings) as api:
        found = StoreSeeder(api).purge(DEFAULT_SCENARIO)
    count = len(found.product_ids) + len(found.zone_ids)
    print(f"Purged {count} leftover fixture(s)")
    return 0


def cmd_doctor(settings) -> int:
    """Check that settings are complete and the REST API answers."""
    missing = settings.missing()
    if missing:
        print(f"[ERROR] Missing settings: {', '.join(missing)}")
        return 1
    print(f"[OK] Settings complete for {settings.base_url}")

    if settings.admin_state is None:
        print("[WARN] ADMINSTATE not set; editor scenarios will not be logged in")
    elif not Path(settings.admin_state).exists():
        print(f"[WARN] Admin storage state not found: {settings.admin_state}")
    else:
        print(f"[OK] Admin storage state: {settings.admin_state}")

    with WooCommerceAPI(settings) as api:
        currency = api.get_setting("general", "woocommerce_currency")
    print(f"[OK] REST API reachable, store currency is {currency}")
    return 0


def cmd_config(settings) -> int:
    """Show resolved settings with secrets masked."""
    print("Cartship Configuration:")
    for key, value in settings.masked().items():
        print(f"  {key}: {value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cartship: store fixtures for the Cart block shipping E2E suite",
        prog="cartship",
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="YAML settings file"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    seed_parser = subparsers.add_parser("seed", help="Create the suite's store fixtures")
    seed_parser.add_argument(
        "--manifest", type=Path, default=None, help="Write created ids to this JSON file"
    )

    teardown_parser = subparsers.add_parser(
        "teardown", help="Delete fixtures recorded in a manifest"
    )
    teardown_parser.add_argument(
        "--manifest", type=Path, required=True, help="Manifest written by 'seed'"
    )

    subparsers.add_parser("purge", help="Delete leftover fixtures matched by name")
    subparsers.add_parser("doctor", help="Check settings and REST API access")
    subparsers.add_parser("config", help="Show configuration information")
    subparsers.add_parser("version", help="Show version information")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"Cartship version {__version__}")
        return

    setup_logging("DEBUG" if args.verbose else None)

    try:
        settings = load_settings(args.config)
        if args.command == "seed":
            code = cmd_seed(settings, args.manifest)
        elif args.command == "teardown":
            code = cmd_teardown(settings, args.manifest)
        elif args.command == "purge":
            code = cmd_purge(settings)
        elif args.command == "doctor":
            code = cmd_doctor(settings)
        else:
            code = cmd_config(settings)
    except (CartshipError, httpx.HTTPError, OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
