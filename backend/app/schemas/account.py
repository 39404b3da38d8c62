"""
Pydantic request/response schemas for /register and /login.

Request fields are optional at the schema level: a missing email or password
is passed through to the identity provider, whose rejection (e.g.
auth/missing-email) is what the client sees.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    email: Optional[str] = Field(default=None, description="Account email address")
    password: Optional[str] = Field(default=None, description="Account password")


class UserInfo(BaseModel):
    uid: str = Field(description="Provider-assigned account identifier")
    email: str


class RegisterResponse(BaseModel):
    message: str = Field(default="User created successfully")
    user: UserInfo


class LoginResponse(BaseModel):
    """
    Login success body. `message` is the literal `true`; no session token is
    returned to the caller.
    """

    message: bool = True


class AccountErrorResponse(BaseModel):
    message: str
    error: str
