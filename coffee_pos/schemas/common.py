"""
Shared schema building blocks: camelCase documents, money and timestamps
"""
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from coffee_pos.utils import ensure_utc, format_timestamp


CENTS = Decimal("0.01")


def quantize_money(value: Decimal) -> Decimal:
    """Round to whole centavos"""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def positive_money(value: Decimal) -> Decimal:
    """Round to centavos, then require more than zero"""
    value = quantize_money(value)
    if value <= 0:
        raise ValueError("must be greater than 0 after rounding to centavos")
    return value


def non_negative_money(value: Decimal) -> Decimal:
    """Round to centavos, then require zero or more"""
    value = quantize_money(value)
    if value < 0:
        raise ValueError("must not be negative")
    return value


Money = Annotated[Decimal, AfterValidator(quantize_money)]
PositiveMoney = Annotated[Decimal, AfterValidator(positive_money)]
NonNegativeMoney = Annotated[Decimal, AfterValidator(non_negative_money)]

Timestamp = Annotated[
    datetime,
    AfterValidator(ensure_utc),
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base for documents stored and served with camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
