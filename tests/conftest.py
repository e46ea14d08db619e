from __future__ import annotations

import os
import time
from collections.abc import Mapping

import pytest

# Set env before any currency_converter imports (settings are created at import time).
os.environ.setdefault("API_KEY", "test-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from currency_converter.core.currency import normalize_currency_code  # noqa: E402
from currency_converter.core.errors import ProviderError  # noqa: E402
from currency_converter.modules.rates.client import RateSource  # noqa: E402
from currency_converter.modules.rates.schemas import ExchangeRateResponse  # noqa: E402


class StaticRateSource(RateSource):
    """Serves fixed rates per base currency and records each fetched base."""

    def __init__(self, rates_by_base: Mapping[str, Mapping[str, float]]):
        self._rates_by_base = {base.upper(): dict(rates) for base, rates in rates_by_base.items()}
        self.calls: list[str] = []

    def fetch(self, base_currency: str) -> ExchangeRateResponse:
        base = normalize_currency_code(base_currency, field="base currency")
        self.calls.append(base)
        rates = self._rates_by_base.get(base)
        if rates is None:
            raise ProviderError(f"Unsupported base currency: {base}", error_code="unsupported-code")
        return ExchangeRateResponse(base=base, timestamp=int(time.time()), rates=rates)


@pytest.fixture
def static_rates():
    return StaticRateSource


@pytest.fixture
def usd_rates():
    return StaticRateSource(
        {
            "USD": {"USD": 1.0, "EUR": 0.92, "PLN": 4.0},
            "PLN": {"PLN": 1.0, "USD": 0.25, "EUR": 0.23},
        }
    )
