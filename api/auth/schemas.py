"""
Auth API schemas (request models).

Fields default to empty so missing values reach the service checks and come
back as 400 with a field-level message instead of a generic body error.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: str = Field(default="", max_length=200)
    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=128)
    confirm_password: str = Field(default="", alias="confirmPassword", max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=128)
