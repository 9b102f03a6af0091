"""Command-line interface for black market naira exchange rates."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, TextIO

from aboki import __version__
from aboki.config import ConfigError, Settings, load_settings
from aboki.exporter import Presenter, UnsupportedOutputFormatError
from aboki.fetcher import EmptyResponseError, Fetcher, TransportError
from aboki.logging_conf import setup_logging
from aboki.parser import StructuralExtractionError, assemble, extract
from aboki.rates import (
    SUPPORTED_CURRENCIES,
    Currency,
    InvalidArgumentError,
    convert,
    select_current_rates,
    validate_conversion,
)

log = logging.getLogger(__name__)

RATE_TYPES = ("cbn", "movement", "lagos_previous", "moneygram", "westernunion", "otherparallel")
DEFAULT_RATE_TYPE = "cbn"
QUOTES = "Quotes:\t*morning\t**midday\t***evening"
NOTE = "**NOTE**: Buy / Sell => 90 / 100\n"
TABLE_HEAD = ["TIMESTAMP"] + [currency.value.upper() for currency in SUPPORTED_CURRENCIES]
SUPPORT_HINT = "If the problem persists, please email r@akinjide.me."

EXAMPLES = """\
Examples:

  $ aboki recent
  $ aboki rates movement
  $ aboki rate gbp --output json
  $ aboki convert 5000 ngn usd
  $ aboki convert 100 eur ngn -o json
  $ aboki test
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aboki",
        description=(
            "Black market currency rate instantly in your terminal! "
            "(Powered by AbokiFx: https://abokifx.com/)."
        ),
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"aboki {__version__}")
    parser.add_argument("--settings", default=None, help="Path to settings YAML.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    output_parent = argparse.ArgumentParser(add_help=False)
    output_parent.add_argument(
        "-o", "--output", default=None, help="Specify output type (json|table) [table]."
    )

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    sub.add_parser(
        "recent", parents=[output_parent], help="output recent exchange rates for USD, GBP or EUR"
    )

    rates = sub.add_parser(
        "rates",
        parents=[output_parent],
        help="specify rates type to show (" + "|".join(RATE_TYPES) + ") [cbn]",
    )
    rates.add_argument("type", nargs="?", default=DEFAULT_RATE_TYPE)

    rate = sub.add_parser(
        "rate", aliases=["r"], parents=[output_parent], help="specify currency rate to show (usd|gbp|eur) [usd]"
    )
    rate.add_argument("currency", nargs="?", default=Currency.USD.value)

    conv = sub.add_parser(
        "convert",
        aliases=["c"],
        parents=[output_parent],
        help="convert from a currency to another specified currency",
    )
    conv.add_argument("amount", type=float)
    conv.add_argument("source", metavar="from")
    conv.add_argument("target", metavar="to")

    sub.add_parser("test", aliases=["t"], help="check to make sure everything's working")
    return parser


def _make_fetcher(settings: Settings) -> Fetcher:
    return Fetcher(
        base_url=settings.source.base_url,
        timeout=settings.source.timeout,
        max_retries=settings.source.max_retries,
    )


def _presenter(args: argparse.Namespace, settings: Settings, stream: TextIO | None) -> Presenter:
    return Presenter(getattr(args, "output", None) or settings.output.format, stream=stream)


def recent(fetcher: Fetcher, presenter: Presenter) -> None:
    table = extract(fetcher.fetch())
    presenter.message(QUOTES)
    presenter.message(NOTE)
    presenter.table(assemble(table), head=TABLE_HEAD)


def rates(fetcher: Fetcher, presenter: Presenter, rate_type: str) -> None:
    rate_type = (rate_type or "").strip().lower()
    if rate_type not in RATE_TYPES:
        print("Not sure which type?", file=sys.stderr)
        print(
            "You can specify any of this: " + ", ".join(RATE_TYPES) + f"\n[default: {DEFAULT_RATE_TYPE}]\n",
            file=sys.stderr,
        )
        rate_type = DEFAULT_RATE_TYPE

    table = extract(fetcher.fetch("ratetypes", params={"rates": rate_type}))
    if rate_type in ("otherparallel", "movement"):
        presenter.message(QUOTES)
        presenter.message(NOTE)
    elif rate_type == "lagos_previous":
        presenter.message(NOTE)
    presenter.table(assemble(table), head=TABLE_HEAD)


def rate(fetcher: Fetcher, presenter: Presenter, code: str) -> None:
    currency = Currency.parse(code)
    current = select_current_rates(extract(fetcher.fetch()), [currency])
    presenter.message(f"{currency.value.upper()} Exchange Rate")
    presenter.mapping({currency.value: current[currency]})


def convert_amount(fetcher: Fetcher, presenter: Presenter, amount: float, source: str, target: str) -> None:
    validate_conversion(amount, source, target)
    current = select_current_rates(extract(fetcher.fetch()))
    result = convert(amount, source, target, current)
    presenter.message("Conversion Successful")
    presenter.message("SEE HOW MUCH YOU GET IF YOU SELL")
    presenter.mapping(result.as_dict())


def check(fetcher: Fetcher, stream: TextIO | None = None) -> None:
    fetcher.fetch()
    print("Yippe! you've broken nothing!", file=stream or sys.stdout)


def _fail(*lines: str) -> None:
    for text in lines:
        print(text, file=sys.stderr)
    sys.exit(1)


def main(argv: List[str] | None = None, stream: TextIO | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    try:
        settings = load_settings(args.settings)
        setup_logging(logging.DEBUG if args.verbose else settings.logging.level)
        fetcher = _make_fetcher(settings)

        if args.command in ("test", "t"):
            check(fetcher, stream)
            return

        presenter = _presenter(args, settings, stream)
        if args.command == "recent":
            recent(fetcher, presenter)
        elif args.command == "rates":
            rates(fetcher, presenter, args.type)
        elif args.command in ("rate", "r"):
            rate(fetcher, presenter, args.currency)
        elif args.command in ("convert", "c"):
            convert_amount(fetcher, presenter, args.amount, args.source, args.target)
    except TransportError as exc:
        log.debug("Transport failure", exc_info=True)
        _fail("Oops! Catastrophic Failure", f"Error: {exc}", SUPPORT_HINT)
    except EmptyResponseError:
        if args.command in ("test", "t"):
            _fail("Oops! Catastrophic Failure", SUPPORT_HINT)
        _fail("Error connecting. Please check network and try again.", SUPPORT_HINT)
    except StructuralExtractionError as exc:
        _fail(f"Error: unexpected page layout: {exc}", SUPPORT_HINT)
    except (InvalidArgumentError, UnsupportedOutputFormatError, ConfigError) as exc:
        _fail(f"Error: {exc}")
    except Exception as exc:  # noqa: BLE001
        log.debug("Unhandled failure", exc_info=True)
        _fail(f"Error: {exc}")


if __name__ == "__main__":
    main()
