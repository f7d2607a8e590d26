from typing import Optional
from pydantic import BaseModel, Field, field_validator

class FAQCreate(BaseModel):
    question: str
    answer: str
    active: bool = True
    sort_order: Optional[int] = Field(default=None, ge=0)

    @field_validator("question", "answer")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please fill in both question and answer")
        return v.strip()

class FAQUpdate(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None
    active: Optional[bool] = None
    sort_order: Optional[int] = Field(default=None, ge=0)

    @field_validator("question", "answer")
    @classmethod
    def validate_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Please fill in both question and answer")
        return v.strip()

    def to_update_payload(self) -> dict:
        return {key: value for key, value in self.model_dump(exclude_unset=True).items() if value is not None}
