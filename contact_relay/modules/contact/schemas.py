# contact_relay/modules/contact/schemas.py

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ContactSubmission(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=2)
    email: EmailStr
    message: str = Field(min_length=5)
    phone: Optional[str] = None
    location: Optional[str] = None
    service: Optional[str] = None
    budget: Optional[str] = None


class ContactSuccessResponse(BaseModel):
    ok: bool = True
    id: Optional[str] = None


class ContactErrorResponse(BaseModel):
    ok: bool = False
    error: Any
