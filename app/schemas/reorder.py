from typing import List
from pydantic import BaseModel, Field, field_validator

class ReorderRequest(BaseModel):
    ordered_ids: List[str] = Field(..., min_length=1)

    @field_validator("ordered_ids")
    @classmethod
    def validate_unique_ids(cls, v: List[str]) -> List[str]:
        if len(set(v)) != len(v):
            raise ValueError("ordered_ids must not contain duplicates")
        return v
