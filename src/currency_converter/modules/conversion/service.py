from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, DecimalException, localcontext

from currency_converter.core.errors import InvalidArgumentError, UnknownCurrencyError
from currency_converter.core.logging import get_logger, log_event
from currency_converter.modules.conversion.schemas import ConversionRequest, ConversionResult
from currency_converter.modules.rates.client import RateSource

logger = get_logger(__name__)

DISPLAY_QUANTUM = Decimal("0.01")
# Digits available to amount * rate before quantizing; larger results are rejected.
CONVERSION_PRECISION = 60


def convert(
    source: RateSource,
    *,
    from_currency: str,
    to_currency: str,
    amount: str | int | float | Decimal,
) -> ConversionResult:
    request = ConversionRequest.parse(
        from_currency=from_currency, to_currency=to_currency, amount=amount
    )
    rate = _lookup_rate(source, request)
    converted = _apply_rate(request.amount, rate)

    log_event(
        logger,
        "conversion.success",
        from_currency=request.from_currency,
        to_currency=request.to_currency,
        rate=str(rate),
    )
    return ConversionResult(
        from_currency=request.from_currency,
        to_currency=request.to_currency,
        amount=request.amount,
        rate=rate,
        converted=converted,
    )


def _apply_rate(amount: Decimal, rate: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = CONVERSION_PRECISION
        try:
            return (amount * rate).quantize(DISPLAY_QUANTUM, rounding=ROUND_HALF_EVEN)
        except DecimalException as e:
            raise InvalidArgumentError(f"Invalid amount: {amount} (too large to convert)") from e


def _lookup_rate(source: RateSource, request: ConversionRequest) -> Decimal:
    if request.from_currency == request.to_currency:
        return Decimal("1")

    response = source.fetch(request.from_currency)
    raw_rate = response.rate_for(request.to_currency)
    if raw_rate is None:
        raise UnknownCurrencyError(request.to_currency)
    # str() keeps the provider's decimal digits instead of the binary float expansion
    return Decimal(str(raw_rate))
