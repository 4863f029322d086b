from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from tenantcli.app import get_administrative_unit, list_sites
from tenantcli.config import ConfigurationError, configure_logging
from tenantcli.domain.errors import InvalidArgumentError, TenantCliError
from tenantcli.ui import prompt_for_candidate

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from pydantic import BaseModel

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tenantcli",
        description="Query and administer a tenant's directory and sites",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every remote call",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    unit = subparsers.add_parser(
        "administrativeunit-get",
        help="Get information about a specific administrative unit",
    )
    lookup = unit.add_mutually_exclusive_group(required=True)
    lookup.add_argument("-i", "--id", type=str, help="Id of the administrative unit")
    lookup.add_argument(
        "-n",
        "--display-name",
        type=str,
        help="Display name of the administrative unit",
    )
    unit.add_argument(
        "--prompt",
        action="store_true",
        help="Ask which one to use when several units share the display name",
    )

    sites = subparsers.add_parser("site-list", help="List site collections of the tenant")
    sites.add_argument("-t", "--web-template", type=str, default="", help="Type of sites to list")
    sites.add_argument(
        "-f",
        "--filter",
        type=str,
        default="",
        help="Filter to apply when retrieving sites, e.g. \"Url -like 'project'\"",
    )
    sites.add_argument(
        "--deleted",
        action="store_true",
        help="Only return deleted sites",
    )
    sites.add_argument(
        "--include-onedrive-sites",
        action="store_true",
        help="Also return OneDrive sites",
    )

    return parser.parse_args(list(argv))


def _emit(payload: BaseModel | list[BaseModel]) -> None:
    if isinstance(payload, list):
        data: object = [item.model_dump(by_alias=True, exclude_none=True) for item in payload]
    else:
        data = payload.model_dump(by_alias=True, exclude_none=True)
    print(json.dumps(data, indent=2))  # noqa: T201


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.debug else logging.WARNING)

    try:
        if parsed_args.command == "administrativeunit-get":
            unit = get_administrative_unit(
                entity_id=parsed_args.id,
                display_name=parsed_args.display_name,
                selector=prompt_for_candidate if parsed_args.prompt else None,
            )
            _emit(unit)
        elif parsed_args.command == "site-list":
            sites = list_sites(
                web_template=parsed_args.web_template,
                filter=parsed_args.filter,
                deleted=parsed_args.deleted,
                include_onedrive_sites=parsed_args.include_onedrive_sites,
            )
            _emit(sites)
        else:
            msg = f"Unsupported command: {parsed_args.command}"
            raise InvalidArgumentError(msg)  # noqa: TRY301

    except (InvalidArgumentError, ConfigurationError) as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(2)
    except TenantCliError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Unexpected failure")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)", file=sys.stderr)  # noqa: T201
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
