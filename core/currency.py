"""基于静态汇率表的货币换算"""
import math
from datetime import datetime
from typing import Optional

from config.constants import STATIC_EXCHANGE_RATES
from core.errors import InvalidInputError, RateUnavailableError
from data_manager.schema import ConversionResult
from utils.logging import get_logger

logger = get_logger(__name__)


def supported_currencies() -> list:
    return list(STATIC_EXCHANGE_RATES)


def get_rate(from_currency: str, to_currency: str) -> float:
    if from_currency == to_currency:
        return 1.0
    rate = STATIC_EXCHANGE_RATES.get(from_currency, {}).get(to_currency)
    if rate is None:
        raise RateUnavailableError(from_currency, to_currency)
    return rate


def convert(
    amount: float,
    from_currency: str,
    to_currency: str,
    timestamp: Optional[datetime] = None,
) -> ConversionResult:
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidInputError("amount must be a finite number greater than 0")
    rate = get_rate(from_currency, to_currency)
    logger.debug("currency_converted", amount=amount,
                 from_currency=from_currency, to_currency=to_currency, rate=rate)
    return ConversionResult(
        from_amount=amount,
        from_currency=from_currency,
        to_amount=amount * rate,
        to_currency=to_currency,
        rate=rate,
        timestamp=timestamp or datetime.now(),
    )
