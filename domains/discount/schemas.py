from typing import Optional, Union

from pydantic import AwareDatetime, BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

Percent = Union[int, float]


class DiscountCode(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    percent: Percent
    expires_at: AwareDatetime
    description: str

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return value.upper().strip()

    @field_validator("percent")
    @classmethod
    def check_percent(cls, value: Percent) -> Percent:
        if not 0 <= value <= 100:
            raise ValueError(f"percent must be within 0..100, got {value}")
        return value


class DiscountResult(BaseModel):
    """
    回給前端的結果，欄位用 camelCase
    valid=False 時只有 message
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    valid: bool
    code: Optional[str] = None
    original_amount: Optional[str] = None
    discount_percent: Optional[Percent] = None
    discount_amount: Optional[str] = None
    final_amount: Optional[str] = None
    message: str

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
