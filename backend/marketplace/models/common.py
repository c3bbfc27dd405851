from datetime import datetime, timezone

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing_extensions import Annotated


def _as_utc(value: datetime) -> datetime:
    # sqlite hands timestamps back without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]

# JSON numbers only, no numeric strings and no Infinity/NaN
NonNegativeMoney = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]
PositiveMoney = Annotated[float, Field(strict=True, gt=0, allow_inf_nan=False)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Created(BaseModel):
    id: str


class Ok(BaseModel):
    ok: bool = True
