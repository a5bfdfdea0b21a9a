"""
Shared pieces for domain models

Records are stored and transported with camelCase field names so cached
collections and remote payloads keep the client's original shape.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Any, Dict

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round a currency amount to cents (half up)"""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


# Currency amount: Decimal in Python, plain number in JSON
Money = Annotated[
    Decimal,
    AfterValidator(to_cents),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class DomainModel(BaseModel):
    """Base for entities kept in a reactive store"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_record(self) -> Dict[str, Any]:
        """Plain JSON-compatible record as written to a data source"""
        return self.model_dump(mode="json", by_alias=True)
