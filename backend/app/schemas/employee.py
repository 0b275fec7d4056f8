"""Employee schemas used for registration, login and responses."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr


class EmployeeCreate(BaseModel):
    email: EmailStr
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    job_title: Optional[str] = None


class EmployeeRead(BaseModel):
    id: int
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    job_title: Optional[str] = None
    access_level: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class EmployeeAccessUpdate(BaseModel):
    access_level: Optional[Literal[1, 2, 3]] = None
    is_active: Optional[bool] = None


class EmployeeLogin(BaseModel):
    email: EmailStr
    password: str


class AccessToken(BaseModel):
    access_token: str
    token_type: str = "bearer"
    access_level: int
