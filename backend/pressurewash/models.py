from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Labels exactly as the intake form shows them
ServiceType = Literal["Driveway", "House Wash", "Deck/Patio", "Fence"]
SizeType = Literal["Small", "Medium", "Large"]
ConditionType = Literal["Light", "Medium", "Heavy"]

SERVICES = ("Driveway", "House Wash", "Deck/Patio", "Fence")
SIZES = ("Small", "Medium", "Large")
CONDITIONS = ("Light", "Medium", "Heavy")

DEFAULT_SIZE: SizeType = "Medium"
DEFAULT_CONDITION: ConditionType = "Light"


class Estimate(BaseModel):
    low: int
    high: int


class QuoteSubmission(BaseModel):
    """
    A validated, normalized intake request. Only the validator builds these.
    """
    address: str
    name: str
    phone: str
    service: ServiceType
    size: SizeType = DEFAULT_SIZE
    condition: ConditionType = DEFAULT_CONDITION


class Quote(BaseModel):
    """
    One persisted estimate request. Serialized with the camelCase keys the
    quote view reads.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    created_at: datetime = Field(alias="createdAt")
    address: str
    name: str
    phone: str
    service: ServiceType
    size: SizeType
    condition: ConditionType
    estimate_low: int = Field(alias="estimateLow", ge=0)
    estimate_high: int = Field(alias="estimateHigh", ge=0)

    @model_validator(mode="after")
    def _range_is_ordered(self):
        if self.estimate_low > self.estimate_high:
            raise ValueError("estimateLow must not exceed estimateHigh")
        return self

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class PreviewRequest(BaseModel):
    service: Optional[str] = None
    size: Optional[str] = None
    condition: Optional[str] = None


class PreviewResponse(BaseModel):
    estimate: Optional[Estimate]


class QuoteCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    estimate_low: int = Field(alias="estimateLow")
    estimate_high: int = Field(alias="estimateHigh")
