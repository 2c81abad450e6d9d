"""Main module entrypoint for local runtime execution.

`api` starts the HTTP service. `statement` builds one party statement and
prints the response envelope to stdout.
"""

import argparse
import asyncio
import json
import logging

import uvicorn

from party_ledger.api import api_serialize_statement
from party_ledger.bootstrap import bootstrap_create_application, bootstrap_create_statement_service
from party_ledger.config import AppSettings, config_configure_logging, config_load_settings
from party_ledger.domain import LedgerError, domain_parse_request_date

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Run selected runtime command with validated startup configuration.

    Args:
        argv: Optional argument list; defaults to process arguments.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when a statement cannot be built.
    """

    argument_parser = argparse.ArgumentParser(description="Party ledger runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "statement"),
        help="Runtime command: `api` starts server, `statement` prints one party statement as JSON",
        type=str,
    )
    argument_parser.add_argument("party_id", nargs="?", type=str, help="Party identifier for `statement`")
    argument_parser.add_argument(
        "--type",
        dest="ledger_type",
        type=str,
        help="Ledger type for `statement`: customer, supplier or employee",
    )
    argument_parser.add_argument("--date-from", dest="date_from", type=str, help="Inclusive YYYY-MM-DD lower bound")
    argument_parser.add_argument("--date-to", dest="date_to", type=str, help="Inclusive YYYY-MM-DD upper bound")
    parsed_arguments = argument_parser.parse_args(argv)

    settings = config_load_settings()
    config_configure_logging(settings.log_level)

    if parsed_arguments.command == "statement":
        if not parsed_arguments.party_id:
            argument_parser.error("`statement` requires a party_id")
        raise SystemExit(main_print_statement(settings, parsed_arguments))

    application = bootstrap_create_application(settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
        log_config=None,
    )


def main_print_statement(settings: AppSettings, parsed_arguments: argparse.Namespace) -> int:
    """Build one statement and print its JSON envelope.

    Args:
        settings: Validated runtime settings.
        parsed_arguments: Parsed CLI arguments.

    Returns:
        int: Process exit code, 0 on success and 1 on failure.
    """

    try:
        statement_service = bootstrap_create_statement_service(settings)
        statement = asyncio.run(
            statement_service.ledger_build_statement(
                party_id=parsed_arguments.party_id,
                party_kind=parsed_arguments.ledger_type,
                date_from=domain_parse_request_date(parsed_arguments.date_from, "date_from"),
                date_to=domain_parse_request_date(parsed_arguments.date_to, "date_to"),
            )
        )
    except LedgerError as error:
        logger.error("Statement build failed: %s", error)
        print(json.dumps({"success": False, "error": str(error)}, indent=2))
        return 1

    print(json.dumps(api_serialize_statement(statement), indent=2))
    return 0


if __name__ == "__main__":
    main()
