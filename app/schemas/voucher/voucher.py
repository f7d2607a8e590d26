# app/schemas/voucher/voucher.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from app.enums.discount_type import DiscountType
from app.enums.voucher_rejection import VoucherRejection
from app.models.voucher.voucher import Voucher

def normalize_code(v: str) -> str:
    return v.strip().upper()

class VoucherCreate(BaseModel):
    code: str
    discount_type: DiscountType = DiscountType.PERCENTAGE
    discount_value: float = Field(..., gt=0)
    max_discount: Optional[float] = Field(default=None, ge=0)
    min_purchase_amount: float = Field(default=0, ge=0)
    max_uses: Optional[int] = Field(default=None, ge=0)
    expires_at: Optional[datetime] = None
    active: bool = True

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        code = normalize_code(v)
        if not code:
            raise ValueError("Please enter a voucher code")
        return code

    @model_validator(mode="after")
    def drop_cap_for_fixed(self):
        # Teto só faz sentido para desconto percentual
        if self.discount_type == DiscountType.FIXED:
            self.max_discount = None
        return self

class VoucherUpdate(BaseModel):
    code: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[float] = Field(default=None, gt=0)
    max_discount: Optional[float] = Field(default=None, ge=0)
    min_purchase_amount: Optional[float] = Field(default=None, ge=0)
    max_uses: Optional[int] = Field(default=None, ge=0)
    expires_at: Optional[datetime] = None
    active: Optional[bool] = None

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        code = normalize_code(v)
        if not code:
            raise ValueError("Please enter a voucher code")
        return code

    def to_update_payload(self) -> dict:
        """Somente os campos enviados; ``expires_at: null`` remove a validade."""
        payload = self.model_dump(exclude_unset=True, mode="json")
        for key in ("code", "discount_type", "discount_value", "min_purchase_amount", "active"):
            if key in payload and payload[key] is None:
                del payload[key]
        if payload.get("discount_type") == DiscountType.FIXED.value:
            payload["max_discount"] = None
        return payload

class VoucherValidateRequest(BaseModel):
    code: str
    cart_total: float = Field(..., ge=0)

class VoucherValidationResult(BaseModel):
    valid: bool
    discount: float = 0
    reason: Optional[VoucherRejection] = None
    message: Optional[str] = None
    voucher: Optional[Voucher] = None
