# storyhub/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.
Fields are optional so missing values reach the service and come back as a
structured BAD_REQUEST instead of a framework validation error.
"""
from pydantic import BaseModel

__all__ = ["RegisterIn", "LoginIn"]


class RegisterIn(BaseModel):
    email: str | None = None
    password: str | None = None
    name: str | None = None
    username: str | None = None


class LoginIn(BaseModel):
    email: str | None = None
    password: str | None = None
