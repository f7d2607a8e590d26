from datetime import datetime
from typing import Optional
from sqlmodel import Field, SQLModel

FAQ_TABLE = "faqs"

class FAQ(SQLModel):
    id: str
    question: str
    answer: str
    active: bool = Field(default=True)
    sort_order: int = Field(default=0)

    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)
