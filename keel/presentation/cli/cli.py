"""
CLI Module

Architectural Intent:
- Command-line interface for Keel
- Delegates to application use cases via composition root
- Supports --verbose/--debug flags for log level control

Commands:
- rollback NAME [REVISION]: roll a release back (REVISION 0 = one version back)
- history NAME: print the version history of a release
"""

import argparse
import asyncio
import logging
import sys
import traceback

from keel import composition_root
from keel.application.dtos.rollback_dtos import RollbackReleaseRequest
from keel.domain.errors import KeelError, ModuleRollbackError
from keel.infrastructure.config import load_config
from keel.infrastructure.logging import configure_logging


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Keel: versioned release history with safe rollbacks"
    )
    parser.add_argument("--config", "-c", help="Path to keel.json")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    rollback_parser = subparsers.add_parser(
        "rollback", help="Roll a release back to a previous revision"
    )
    rollback_parser.add_argument("name", help="Release name")
    rollback_parser.add_argument(
        "revision", nargs="?", type=int, default=0,
        help="Revision to roll back to (default: the previous one)",
    )
    rollback_parser.add_argument(
        "--dry-run", action="store_true", help="Simulate the rollback"
    )
    rollback_parser.add_argument(
        "--no-hooks", action="store_true", help="Skip pre/post rollback hooks"
    )
    rollback_parser.add_argument(
        "--timeout", type=_positive_int, help="Seconds to wait for each hook or apply"
    )

    history_parser = subparsers.add_parser(
        "history", help="Show the revision history of a release"
    )
    history_parser.add_argument("name", help="Release name")

    return parser


def _print_history(releases) -> None:
    print(f"{'REVISION':<10}{'STATUS':<14}{'CHART':<24}DESCRIPTION")
    for r in releases:
        print(
            f"{r.version:<10}{r.status.value:<14}{str(r.chart):<24}"
            f"{r.info.description}"
        )


async def async_main():
    parser = _build_parser()
    args = parser.parse_args()
    config = load_config(args.config)

    if args.debug:
        configure_logging(level=logging.DEBUG, json_format=config.json_logs)
    elif args.verbose:
        configure_logging(level=logging.INFO, json_format=config.json_logs)
    else:
        configure_logging(level=config.log_level, json_format=config.json_logs)

    verbose = args.verbose or args.debug

    if args.command is None:
        parser.print_help()
        return

    container = composition_root.create_container(config)
    try:
        if args.command == "history":
            try:
                _print_history(container.releases.history(args.name))
            except KeelError as e:
                print(f"[-] {e}")
                sys.exit(1)
            return

        if args.command == "rollback":
            request = RollbackReleaseRequest(
                name=args.name,
                version=args.revision,
                dry_run=args.dry_run,
                disable_hooks=args.no_hooks or config.rollback.disable_hooks,
                timeout_seconds=(
                    args.timeout
                    if args.timeout is not None
                    else config.rollback.timeout_seconds
                ),
            )
            try:
                response = await container.rollback.execute(request)
            except ModuleRollbackError as e:
                failed = e.response.release
                print(f"[-] {e}")
                print(f"[-] Recorded {failed.name} v{failed.version} as FAILED.")
                if verbose:
                    traceback.print_exc()
                sys.exit(1)
            except KeelError as e:
                print(f"[-] Rollback Failed: {e}")
                if verbose:
                    traceback.print_exc()
                sys.exit(1)

            release = response.release
            if request.dry_run:
                print(
                    f"[*] Dry run: {release.name} would become v{release.version} "
                    f"({release.info.description})"
                )
            else:
                print(
                    f"[+] Rollback was a success! {release.name} is now "
                    f"v{release.version} ({release.info.description})"
                )
    finally:
        container.close()


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
