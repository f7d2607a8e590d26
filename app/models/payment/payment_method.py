from datetime import datetime
from typing import Optional
from sqlmodel import Field, SQLModel

PAYMENT_METHOD_TABLE = "payment_methods"

class PaymentMethod(SQLModel):
    # id escolhido pelo admin (ex.: "gcash", "bpi")
    id: str
    name: str
    account_number: str = Field(default="")
    account_name: str = Field(default="")
    qr_code_url: Optional[str] = Field(default="")
    active: bool = Field(default=True)
    sort_order: int = Field(default=0)

    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)
