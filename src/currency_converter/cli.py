from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError, version
from typing import NoReturn

from currency_converter.core.config import settings
from currency_converter.core.currency import normalize_currency_code
from currency_converter.core.errors import CurrencyConverterError, InvalidArgumentError
from currency_converter.core.logging import (
    end_run,
    get_logger,
    log_event,
    log_exception,
    start_run,
)
from currency_converter.modules.conversion.schemas import ConversionRequest
from currency_converter.modules.conversion.service import convert
from currency_converter.modules.listing.service import list_rates
from currency_converter.modules.rates.client import RateClient, RateSource

logger = get_logger(__name__)

PROG = "currency"
USAGE = f"{PROG} FROM TO AMOUNT [--show-rate]\n       {PROG} list [BASE_CURRENCY]"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise InvalidArgumentError(f"{message}\n{self.format_usage().strip()}")


def _package_version() -> str:
    try:
        return version("currency-converter")
    except PackageNotFoundError:
        return "unknown"


def build_convert_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        usage=USAGE,
        description="Converts currencies and lists exchange rates.",
        epilog=f"Run '{PROG} list --help' for the listing command.",
    )
    parser.add_argument("from_currency", metavar="FROM", help="The source currency code")
    parser.add_argument("to_currency", metavar="TO", help="The target currency code")
    parser.add_argument("amount", metavar="AMOUNT", help="The amount to convert")
    parser.add_argument(
        "--show-rate", action="store_true", help="also print the exchange rate used"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    return parser


def build_list_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=f"{PROG} list",
        description="Lists exchange rates for a base currency.",
    )
    parser.add_argument(
        "base_currency",
        metavar="BASE_CURRENCY",
        nargs="?",
        default=None,
        help=f"The base currency code (default: {settings.default_base_currency})",
    )
    return parser


def _default_source() -> RateSource:
    return RateClient(
        settings.api_key,
        base_url=settings.rates_api_url,
        timeout=settings.request_timeout_s,
    )


def main(
    argv: Sequence[str] | None = None,
    *,
    source: RateSource | None = None,
) -> int:
    args_in = list(sys.argv[1:] if argv is None else argv)

    token = start_run()
    try:
        if args_in and args_in[0] == "list":
            args = build_list_parser().parse_args(args_in[1:])
            base = normalize_currency_code(
                args.base_currency or settings.default_base_currency, field="base currency"
            )
            rates = list_rates(source or _default_source(), base)
            lines = [f"Exchange rates for {base}:"]
            lines.extend(f"{code}: {rate}" for code, rate in rates)
        else:
            args = build_convert_parser().parse_args(args_in)
            request = ConversionRequest.parse(
                from_currency=args.from_currency, to_currency=args.to_currency, amount=args.amount
            )
            result = convert(
                source or _default_source(),
                from_currency=request.from_currency,
                to_currency=request.to_currency,
                amount=request.amount,
            )
            lines = [result.format(show_rate=args.show_rate)]
    except SystemExit as e:
        # --help / --version
        return e.code if isinstance(e.code, int) else 0
    except CurrencyConverterError as e:
        log_event(logger, "cli.error", error_type=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception:
        log_exception(logger, "cli.unhandled_error")
        raise
    finally:
        end_run(token)

    print("\n".join(lines))
    return 0


def run() -> None:
    sys.exit(main())
