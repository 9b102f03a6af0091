"""Rate selection and currency conversion against the naira."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from aboki.parser import ExtractedTable, StructuralExtractionError

log = logging.getLogger(__name__)

ANCHOR_CURRENCY = "ngn"
PAIR_SEPARATOR = " / "
RATE_NUMBER = re.compile(r"\d+(?:\.\d*)?", re.ASCII)


class InvalidArgumentError(ValueError):
    """Raised when a currency code or amount supplied by the user is unusable."""


class Currency(str, Enum):
    """Foreign currencies quoted on the site, in the site's column order."""

    USD = "usd"
    GBP = "gbp"
    EUR = "eur"

    @classmethod
    def parse(cls, code: str) -> "Currency":
        normalized = (code or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            raise InvalidArgumentError(
                f"Unsupported currency {code!r}; expected one of: {supported}"
            ) from exc

    @property
    def column(self) -> int:
        return list(Currency).index(self)


SUPPORTED_CURRENCIES: List[Currency] = list(Currency)

RateMap = Dict[Currency, float]


@dataclass
class ConversionResult:
    """Outcome of a single ``convert`` call."""

    source_currency: str
    amount: float
    target_currency: str
    converted_amount: float
    rate_used: float

    def as_dict(self) -> Dict[str, float]:
        converted = self.converted_amount
        if self.source_currency == ANCHOR_CURRENCY:
            converted = round(converted, 2)
        return {
            self.source_currency: self.amount,
            self.target_currency: converted,
            "rate": self.rate_used,
        }


def split_rate_pairs(row: List[str]) -> List[str]:
    """Flatten the rate-pair tokens of a row, dropping its leading timestamp."""
    return PAIR_SEPARATOR.join(row[1:]).split(PAIR_SEPARATOR)


def _parse_rate(raw: str, currency: Currency) -> float:
    cleaned = raw.strip().strip("*").strip().replace(",", "")
    if not RATE_NUMBER.fullmatch(cleaned):
        raise StructuralExtractionError(f"Could not parse {currency.value} rate from {raw!r}")
    value = float(cleaned)
    if not math.isfinite(value) or value <= 0:
        raise StructuralExtractionError(f"{currency.value} rate {raw!r} is not a positive number")
    return value


def select_current_rates(
    table: ExtractedTable, currencies: Iterable[str] = SUPPORTED_CURRENCIES
) -> RateMap:
    """Return the buy-side rate of the most recent row for each requested currency."""
    requested = [Currency.parse(code) for code in currencies]
    if not table.rows:
        raise StructuralExtractionError("Rate table is empty; cannot select current rates")

    values = split_rate_pairs(table.rows[0])
    rates: RateMap = {}
    for currency in requested:
        index = currency.column * 2
        if index >= len(values):
            raise StructuralExtractionError(
                f"Row {table.rows[0]!r} has no {currency.value} column (need index {index}, "
                f"found {len(values)} values)"
            )
        rates[currency] = _parse_rate(values[index], currency)

    log.debug("Selected rates %s", {c.value: r for c, r in rates.items()})
    return rates


def validate_conversion(amount: float, source: str, target: str) -> Tuple[str, str]:
    """Check that ``source``/``target`` pair the naira with a supported currency.

    Returns the normalized codes.
    """
    source = (source or "").strip().lower()
    target = (target or "").strip().lower()

    if isinstance(amount, bool) or not isinstance(amount, (int, float)) or not math.isfinite(amount):
        raise InvalidArgumentError(f"Amount must be a finite number, got {amount!r}")

    codes = {member.value for member in Currency}
    if ANCHOR_CURRENCY not in (source, target) or not codes.intersection((source, target)):
        raise InvalidArgumentError(
            f"Conversion must be between ngn and one of usd, gbp, eur. from: {source}, to: {target}"
        )
    return source, target


def convert(amount: float, source: str, target: str, rates: RateMap) -> ConversionResult:
    """Convert ``amount`` between the naira and one supported foreign currency."""
    source, target = validate_conversion(amount, source, target)

    if source == ANCHOR_CURRENCY:
        foreign = Currency(target)
        rate = _rate_for(rates, foreign)
        converted = amount / rate
    else:
        foreign = Currency(source)
        rate = _rate_for(rates, foreign)
        converted = amount * rate

    return ConversionResult(
        source_currency=source,
        amount=amount,
        target_currency=target,
        converted_amount=converted,
        rate_used=rate,
    )


def _rate_for(rates: RateMap, currency: Currency) -> float:
    try:
        rate = rates[currency]
    except KeyError as exc:
        raise StructuralExtractionError(f"No {currency.value} rate available") from exc
    if not math.isfinite(rate) or rate <= 0:
        raise StructuralExtractionError(f"{currency.value} rate {rate!r} is not a positive number")
    return rate
