from pydantic import BaseModel, ConfigDict
from typing import Optional


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterResponse(BaseModel):
    id: int


class UserResponse(BaseModel):
    id: int
    email: str
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SessionClaims(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    iat: int
    exp: int
