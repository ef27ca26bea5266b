"""Command line entry point for the Yuki connector.

Usage:
    yuki-connector administration                 # Show the administration of the key
    yuki-connector submit invoice.json            # Create a sales invoice
    yuki-connector submit invoice.json --pre-escaped
    yuki-connector balance INV-2024-001           # Outstanding amount of an invoice
    yuki-connector net-revenue 2024-01-01 2024-12-31
    yuki-connector gl-balance 2024-12-31
    yuki-connector gl-transactions 8000 2024-01-01 2024-12-31
    yuki-connector gl-scheme
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError
from pythonjsonlogger import jsonlogger

from .config import get_settings, Settings
from .client import YukiClient
from .errors import YukiError
from .escaping import PayloadEscaping


def setup_logging(settings: Settings) -> None:
    """Configure logging for the application.

    Args:
        settings: Application settings
    """
    console_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level))
    root_logger.addHandler(console_handler)

    # File handler (JSON format for parsing)
    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        json_formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        file_handler = logging.FileHandler(settings.log_file)
        file_handler.setFormatter(json_formatter)
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str))


def run_command(args: argparse.Namespace, client: YukiClient) -> int:
    """Run a single command against a logged in client.

    Returns:
        Exit code (0 for success)
    """
    if args.command == "administration":
        print(client.administration_id)
    elif args.command == "submit":
        invoice = json.loads(Path(args.file).read_text(encoding="utf-8"))
        escaping = PayloadEscaping.PRE_ESCAPED if args.pre_escaped else PayloadEscaping.RAW
        client.process_invoice(invoice, escaping)
        print(f"Invoice {invoice.get('Reference', '')} created")
    elif args.command == "balance":
        _print_json(client.get_invoice_balance(args.reference))
    elif args.command == "net-revenue":
        _print_json(client.get_administration_net_revenue(args.start, args.end))
    elif args.command == "gl-balance":
        _print_json(client.get_gl_account_balance(args.date))
    elif args.command == "gl-transactions":
        _print_json(client.get_gl_account_transactions(args.code, args.start, args.end))
    elif args.command == "gl-scheme":
        _print_json(client.get_gl_account_scheme())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yuki-connector",
        description="Create sales invoices and read accounting data through the Yuki webservices",
    )
    parser.add_argument(
        "--service",
        choices=["sales", "accounting", "accountinginfo"],
        help="Yuki service to connect to (overrides YUKI_SERVICE)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("administration", help="Show the administration of the API key")

    submit = subparsers.add_parser("submit", help="Create a sales invoice from a JSON file")
    submit.add_argument("file", help="JSON file with Yuki tag names as keys")
    submit.add_argument(
        "--pre-escaped",
        action="store_true",
        help="Values in the file are already trimmed and XML-escaped",
    )

    balance = subparsers.add_parser("balance", help="Show the outstanding amount of an invoice")
    balance.add_argument("reference")

    net_revenue = subparsers.add_parser("net-revenue", help="Show net revenue for a period")
    net_revenue.add_argument("start")
    net_revenue.add_argument("end")

    gl_balance = subparsers.add_parser("gl-balance", help="Show GL account balances on a date")
    gl_balance.add_argument("date")

    gl_transactions = subparsers.add_parser(
        "gl-transactions", help="Show GL account transactions for a period"
    )
    gl_transactions.add_argument("code")
    gl_transactions.add_argument("start")
    gl_transactions.add_argument("end")

    subparsers.add_parser("gl-scheme", help="Show the GL account scheme")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(__name__)

    try:
        settings = get_settings()
        if args.service:
            settings = settings.model_copy(update={"yuki_service": args.service})
    except Exception as e:
        logger.error(f"Failed to load settings: {e}")
        logger.error("Make sure .env file exists with YUKI_API_KEY set")
        return 1

    setup_logging(settings)

    try:
        with YukiClient(settings) as client:
            if not client.is_authenticated:
                client.login()
            return run_command(args, client)
    except YukiError as e:
        logger.error(str(e))
        return 1
    except ValidationError as e:
        logger.error(f"Invalid invoice: {e}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read invoice file: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
