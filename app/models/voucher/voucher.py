from datetime import datetime, timezone
from typing import Optional
from sqlmodel import Field, SQLModel

from app.enums.discount_type import DiscountType

VOUCHER_TABLE = "vouchers"

class Voucher(SQLModel):
    """Linha da tabela ``vouchers`` no Supabase."""

    id: str
    code: str = Field(max_length=50)
    discount_type: DiscountType
    discount_value: float = Field(ge=0)
    max_discount: Optional[float] = Field(default=None, ge=0)
    min_purchase_amount: float = Field(default=0, ge=0)
    max_uses: Optional[int] = Field(default=None, ge=0)
    times_used: int = Field(default=0, ge=0)
    expires_at: Optional[datetime] = Field(default=None)
    active: bool = Field(default=True)

    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)

    @property
    def expires_at_utc(self) -> Optional[datetime]:
        if self.expires_at is None:
            return None
        if self.expires_at.tzinfo is None:
            return self.expires_at.replace(tzinfo=timezone.utc)
        return self.expires_at.astimezone(timezone.utc)

    @property
    def has_usage_limit(self) -> bool:
        return self.max_uses is not None
