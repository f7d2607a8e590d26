from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

class CurrentUser(BaseModel):
    """Claims do access token emitido pelo Supabase Auth."""

    id: str = Field(..., alias="sub")
    email: Optional[str] = None
    role: Optional[str] = None
    app_metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}

    @property
    def is_admin(self) -> bool:
        return self.app_metadata.get("role") == "admin"
