from __future__ import annotations

import time

import httpx
from pydantic import ValidationError

from currency_converter.core.currency import normalize_currency_code
from currency_converter.core.errors import (
    ConfigurationError,
    MalformedResponseError,
    NetworkError,
    ProviderError,
)
from currency_converter.core.logging import get_logger, log_event, monotonic_ms
from currency_converter.modules.rates.schemas import ExchangeRateResponse, provider_error_message

logger = get_logger(__name__)

DEFAULT_RATES_API_URL = "https://api.exchangerate-api.com/v4/latest"
DEFAULT_TIMEOUT_S = 10.0


class RateSource:
    def fetch(self, base_currency: str) -> ExchangeRateResponse:  # pragma: no cover
        raise NotImplementedError


class RateClient(RateSource):
    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = DEFAULT_RATES_API_URL,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: httpx.BaseTransport | None = None,
    ):
        if not api_key or not api_key.strip():
            raise ConfigurationError("API_KEY is not set (environment or .env file)")
        self._api_key = api_key.strip()
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def fetch(self, base_currency: str) -> ExchangeRateResponse:
        base = normalize_currency_code(base_currency, field="base currency")
        url = f"{self._base_url}/{base}"
        start = time.monotonic()

        try:
            with httpx.Client(
                timeout=self._timeout, follow_redirects=True, transport=self._transport
            ) as client:
                resp = client.get(url, params={"access_key": self._api_key})
        except httpx.TimeoutException as e:
            self._log_failure(base, start, reason="timeout", error_type=type(e).__name__)
            raise NetworkError(f"Request to exchange-rate provider timed out: {e}") from e
        except httpx.RequestError as e:
            self._log_failure(base, start, reason="transport", error_type=type(e).__name__)
            raise NetworkError(f"Could not reach exchange-rate provider: {e}") from e

        if not resp.is_success:
            self._log_failure(base, start, reason="http_status", status_code=resp.status_code)
            raise _status_error(resp)

        try:
            data = resp.json()
        except ValueError as e:
            self._log_failure(base, start, reason="invalid_json", status_code=resp.status_code)
            raise MalformedResponseError("Provider response is not valid JSON") from e

        if isinstance(data, dict) and data.get("success") is False:
            error_code, message = provider_error_message(data)
            self._log_failure(base, start, reason="provider_error", error_code=error_code)
            raise ProviderError(
                f"Provider rejected the request: {message or 'unknown error'}",
                status_code=resp.status_code,
                error_code=error_code,
            )

        try:
            parsed = ExchangeRateResponse.model_validate(data)
        except ValidationError as e:
            self._log_failure(base, start, reason="unexpected_shape", status_code=resp.status_code)
            raise MalformedResponseError(f"Unexpected provider response shape: {e}") from e

        log_event(
            logger,
            "rates.fetch.success",
            base_currency=base,
            status_code=resp.status_code,
            rate_count=len(parsed.rates),
            duration_ms=monotonic_ms(start),
        )
        return parsed

    def _log_failure(self, base: str, start: float, **fields) -> None:
        log_event(
            logger,
            "rates.fetch.failure",
            base_currency=base,
            duration_ms=monotonic_ms(start),
            **fields,
        )


def _status_error(resp: httpx.Response) -> ProviderError:
    try:
        error_code, message = provider_error_message(resp.json())
    except ValueError:
        error_code, message = None, None

    if resp.status_code == httpx.codes.FORBIDDEN and not message:
        message = "API request limit exceeded"
    detail = message or resp.reason_phrase or "request failed"
    return ProviderError(
        f"Error fetching exchange rates: HTTP {resp.status_code} ({detail})",
        status_code=resp.status_code,
        error_code=error_code,
    )
