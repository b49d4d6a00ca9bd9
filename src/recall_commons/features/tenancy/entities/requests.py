"""Create and update inputs for tenancy records."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class OrganizationCreate(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1)


class OrganizationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)


class ClientCreate(BaseModel):
    id: Optional[str] = None
    organization_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    status: str = "active"
    scope: str = "read_write"
    email: Optional[str] = None
    credits: float = Field(default=100.0, ge=0)


class ClientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    status: Optional[str] = None
    scope: Optional[str] = None
    email: Optional[str] = None
    credits: Optional[float] = None
    last_login: Optional[datetime] = None


class UserCreate(BaseModel):
    id: Optional[str] = None
    organization_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    status: str = "active"
    timezone: str = "UTC"
    is_admin: bool = False
    client_id: Optional[str] = None


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    status: Optional[str] = None
    timezone: Optional[str] = None
    is_admin: Optional[bool] = None
    last_self_reflection_time: Optional[datetime] = None
