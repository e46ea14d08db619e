from __future__ import annotations

from currency_converter.core.currency import normalize_currency_code
from currency_converter.modules.rates.client import RateSource

DEFAULT_BASE_CURRENCY = "PLN"


def list_rates(
    source: RateSource, base_currency: str | None = DEFAULT_BASE_CURRENCY
) -> list[tuple[str, float]]:
    base = normalize_currency_code(base_currency or DEFAULT_BASE_CURRENCY, field="base currency")
    response = source.fetch(base)
    return sorted(response.rates.items())
