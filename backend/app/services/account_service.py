"""
MoodLog Backend — Account Service (Credential Gateway)
========================================================

What:  Forwards registration and login to the identity provider and maps
       provider failures onto the API's error envelopes.
Who:   Called by the /register and /login route handlers.

Status codes:
    register  201 on success, 400 {"message", "error": <provider code>}
    login     201 {"message": true} on success, 401 {"message", "error": <provider message>}

    Login answers 201 and returns no token. Clients depend on that shape, so
    it is kept as-is (see DESIGN.md).
"""

import logging
from typing import Optional

from app.exceptions import AuthenticationError, IdentityProviderError, RegistrationError
from app.schemas.account import LoginResponse, RegisterResponse, UserInfo
from app.services.identity_base import IdentityProvider

logger = logging.getLogger(__name__)


class AccountService:

    def __init__(self, identity: IdentityProvider):
        self.identity = identity

    async def register(self, email: Optional[str], password: Optional[str]) -> RegisterResponse:
        """
        Create an account.

        Raises:
            RegistrationError: the provider rejected the request (duplicate
                email, weak password, ...) or could not be reached
        """
        try:
            account = await self.identity.create_account(email or "", password or "")
        except IdentityProviderError as e:
            logger.warning("Registration rejected: %s", e.code or "no provider code")
            raise RegistrationError(code=e.code, context=e.context)
        except Exception as e:
            logger.error("Unexpected identity provider error during registration: %s", str(e), exc_info=True)
            raise RegistrationError(context={"error_type": type(e).__name__})

        logger.info("Account created: %s", account.uid)
        return RegisterResponse(
            message="User created successfully",
            user=UserInfo(uid=account.uid, email=account.email),
        )

    async def login(self, email: Optional[str], password: Optional[str]) -> LoginResponse:
        """
        Verify credentials.

        Raises:
            AuthenticationError: the provider rejected the credentials or could
                not be reached
        """
        try:
            account = await self.identity.verify_credentials(email or "", password or "")
        except IdentityProviderError as e:
            logger.warning("Login rejected: %s", e.code or "no provider code")
            raise AuthenticationError(detail=e.message, context=e.context)
        except Exception as e:
            logger.error("Unexpected identity provider error during login: %s", str(e), exc_info=True)
            raise AuthenticationError(context={"error_type": type(e).__name__})

        logger.info("User logged in: %s", account.uid)
        return LoginResponse(message=True)
