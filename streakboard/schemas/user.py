from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UserProvisionIn(BaseModel):
    email: str
    username: Optional[str] = None
    full_name: Optional[str] = None


class UserOut(BaseModel):
    id: int
    email: str
    username: str
    full_name: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
