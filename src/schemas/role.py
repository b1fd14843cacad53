from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class RoleCreate(BaseModel):
    # Types are checked by the validation layer so errors carry specific messages
    name: Any = Field(None, description="Role name (must be unique)", examples=["QA"])
    description: Any = Field(None, description="Role description", examples=["Quality assurance"])


class RoleUpdate(BaseModel):
    name: Any = Field(None, description="Role name (must be unique)")
    description: Any = Field(None, description="Role description")


class Role(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoleResponse(BaseModel):
    data: Role


class RoleListResponse(BaseModel):
    data: List[Role]


class RoleMessageResponse(BaseModel):
    message: str
    data: Role
