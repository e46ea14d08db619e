from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ExchangeRateResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    success: bool = True
    base: str
    timestamp: int | None = Field(
        default=None, validation_alias=AliasChoices("timestamp", "time_last_updated")
    )
    rates: dict[str, float]

    @field_validator("base")
    @classmethod
    def _upper_base(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("rates")
    @classmethod
    def _upper_rate_codes(cls, v: dict[str, float]) -> dict[str, float]:
        return {code.strip().upper(): rate for code, rate in v.items()}

    def rate_for(self, currency: str) -> float | None:
        return self.rates.get(currency.strip().upper())


def provider_error_message(data: Any) -> tuple[str | None, str | None]:
    """
    Extract (error_code, message) from a provider error body.

    Providers report errors as a bare string (``{"error": "invalid-key"}``),
    as an object (``{"error": {"code": 101, "type": "...", "info": "..."}}``)
    or under ``error-type``.
    """
    if not isinstance(data, dict):
        return None, None
    err = data.get("error")
    if err is None:
        err = data.get("error-type")
    if isinstance(err, str):
        return err, err
    if isinstance(err, dict):
        code = err.get("type") or err.get("code")
        info = err.get("info") or err.get("message")
        code_str = str(code) if code is not None else None
        if info and code_str:
            return code_str, f"{code_str}: {info}"
        return code_str, info or code_str
    return None, None
