from typing import Any, List, Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    name: Any = Field(None, description="Full name, split on the first space", examples=["John Doe"])
    job: Any = Field(None, examples=["Engineer"])
    role_id: Any = Field(None, description="Role ID to assign (defaults to 1)", examples=[1])


class UserUpdate(BaseModel):
    name: Any = None
    job: Any = None
    role_id: Any = Field(None, description="Role ID to assign to the user")


class UserRole(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class User(BaseModel):
    id: int
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[str] = None
    job: Optional[str] = None
    role_id: Optional[int] = None
    role: Optional[UserRole] = None

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    data: User


class UserPage(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int
    data: List[User]


class UserCreated(BaseModel):
    name: str
    job: str
    id: int
    createdAt: str


class UserUpdated(BaseModel):
    name: str
    job: str
    updatedAt: str
