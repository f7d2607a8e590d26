from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

def normalize_qr_code_url(value: Any) -> str:
    """None/vazio -> "", qualquer outro valor vira string sem espaços nas pontas."""
    if value is None:
        return ""
    return str(value).strip()

class PaymentMethodCreate(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    account_number: str = ""
    account_name: str = ""
    qr_code_url: Optional[str] = None
    active: bool = True
    sort_order: int = Field(default=0, ge=0)

    @field_validator("id", "name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    def to_insert_payload(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "account_number": self.account_number,
            "account_name": self.account_name,
            "qr_code_url": normalize_qr_code_url(self.qr_code_url),
            "active": self.active,
            "sort_order": self.sort_order,
        }

class PaymentMethodUpdate(BaseModel):
    name: Optional[str] = None
    account_number: Optional[str] = None
    account_name: Optional[str] = None
    qr_code_url: Optional[str] = None
    active: Optional[bool] = None
    sort_order: Optional[int] = Field(default=None, ge=0)

    def to_update_payload(self) -> dict:
        sent = self.model_dump(exclude_unset=True)
        payload = {
            key: value
            for key, value in sent.items()
            if key != "qr_code_url" and value is not None
        }
        # qr_code_url enviado como null limpa o QR code
        if "qr_code_url" in sent:
            payload["qr_code_url"] = normalize_qr_code_url(sent["qr_code_url"])
        return payload
