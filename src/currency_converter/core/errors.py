from __future__ import annotations


class CurrencyConverterError(RuntimeError):
    pass


class ConfigurationError(CurrencyConverterError):
    pass


class InvalidArgumentError(CurrencyConverterError):
    pass


class NetworkError(CurrencyConverterError):
    pass


class ProviderError(CurrencyConverterError):
    def __init__(
        self, message: str, *, status_code: int | None = None, error_code: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class MalformedResponseError(CurrencyConverterError):
    pass


class UnknownCurrencyError(CurrencyConverterError):
    def __init__(self, currency: str) -> None:
        super().__init__(f"Rate not found for currency: {currency}")
        self.currency = currency
