"""
MoodLog Backend — Account Route Handlers
==========================================

What:  POST /register and POST /login.
How:   Extract credentials from the JSON body, delegate to AccountService.
       Provider failures surface as RegistrationError / AuthenticationError and
       are rendered by the global handlers in main.py.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.dependencies import get_account_service
from app.schemas.account import (
    AccountErrorResponse,
    CredentialsRequest,
    LoginResponse,
    RegisterResponse,
)
from app.services.account_service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Accounts"])


@router.post(
    "/register",
    status_code=201,
    response_model=RegisterResponse,
    responses={
        201: {"description": "Account created", "model": RegisterResponse},
        400: {"description": "Provider rejected the account", "model": AccountErrorResponse},
    },
    summary="Create an email/password account",
)
async def register(
    payload: Optional[CredentialsRequest] = None,
    accounts: AccountService = Depends(get_account_service),
) -> RegisterResponse:
    payload = payload or CredentialsRequest()
    return await accounts.register(payload.email, payload.password)


@router.post(
    "/login",
    status_code=201,
    response_model=LoginResponse,
    responses={
        201: {"description": "Credentials accepted", "model": LoginResponse},
        401: {"description": "Credentials rejected", "model": AccountErrorResponse},
    },
    summary="Verify email/password credentials",
    description="Returns {\"message\": true} on success. No session token is issued.",
)
async def login(
    payload: Optional[CredentialsRequest] = None,
    accounts: AccountService = Depends(get_account_service),
) -> LoginResponse:
    payload = payload or CredentialsRequest()
    return await accounts.login(payload.email, payload.password)
