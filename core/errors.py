"""计算引擎的异常类型

"无法计算"（利率或期限为 0 等）不抛异常，由函数返回 None 表示。
"""


class FinanceError(Exception):
    """所有业务异常的基类"""


class InvalidInputError(FinanceError, ValueError):
    """输入不合法：本金/目标金额非正、利率或期限为负等"""


class RateUnavailableError(FinanceError, LookupError):
    """静态汇率表中没有该货币对"""

    def __init__(self, from_currency: str, to_currency: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(f"Exchange rate not available for {from_currency} -> {to_currency}")
