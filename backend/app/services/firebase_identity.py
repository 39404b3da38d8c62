"""
MoodLog Backend — Firebase Authentication Provider
====================================================

What:  IdentityProvider backed by the Firebase Auth Identity Toolkit REST API.
Why:   Firebase Authentication owns the accounts; this service only forwards
       email/password pairs and reshapes the answers.
How:   POST {base}/accounts:signUp and {base}/accounts:signInWithPassword with
       the project's web API key as the `key` query parameter.

Error translation:
    The REST API answers failures with
        {"error": {"code": 400, "message": "EMAIL_EXISTS"}}
    and sometimes a detail: "WEAK_PASSWORD : Password should be at least 6 characters".
    Clients of this API were written against the Firebase client SDK, so the
    server codes are translated into the SDK's codes and message format:
        EMAIL_EXISTS → auth/email-already-in-use
        "Firebase: Error (auth/email-already-in-use)."
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.exceptions import IdentityProviderError
from app.services.identity_base import Account, IdentityProvider

logger = logging.getLogger(__name__)


# Identity Toolkit server codes → Firebase client SDK codes
ERROR_CODES: Dict[str, str] = {
    "EMAIL_EXISTS": "auth/email-already-in-use",
    "INVALID_EMAIL": "auth/invalid-email",
    "MISSING_EMAIL": "auth/missing-email",
    "MISSING_PASSWORD": "auth/missing-password",
    "WEAK_PASSWORD": "auth/weak-password",
    "EMAIL_NOT_FOUND": "auth/user-not-found",
    "INVALID_PASSWORD": "auth/wrong-password",
    "INVALID_LOGIN_CREDENTIALS": "auth/invalid-credential",
    "USER_DISABLED": "auth/user-disabled",
    "OPERATION_NOT_ALLOWED": "auth/operation-not-allowed",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "auth/too-many-requests",
    "INVALID_API_KEY": "auth/invalid-api-key",
    "API_KEY_INVALID": "auth/invalid-api-key",
    "PROJECT_NOT_FOUND": "auth/project-not-found",
}

NETWORK_ERROR_CODE = "auth/network-request-failed"


def translate_error(server_message: str) -> IdentityProviderError:
    """
    Turn an Identity Toolkit error message into an IdentityProviderError.

    >>> translate_error("WEAK_PASSWORD : Password should be at least 6 characters").code
    'auth/weak-password'
    """
    server_code, _, detail = server_message.partition(" : ")
    server_code = server_code.strip()
    code = ERROR_CODES.get(server_code)
    if code is None:
        code = "auth/" + server_code.lower().replace("_", "-")

    if detail:
        message = f"Firebase: {detail.strip()} ({code})."
    else:
        message = f"Firebase: Error ({code})."
    return IdentityProviderError(code=code, message=message, context={"server_code": server_code})


class FirebaseIdentityProvider(IdentityProvider):
    """Email/password accounts through Firebase Authentication."""

    SIGN_UP = "accounts:signUp"
    SIGN_IN = "accounts:signInWithPassword"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        base_url: str = "https://identitytoolkit.googleapis.com/v1",
    ):
        self._http = http_client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    async def create_account(self, email: str, password: str) -> Account:
        payload = await self._post(
            self.SIGN_UP,
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return Account(uid=payload["localId"], email=payload.get("email", email))

    async def verify_credentials(self, email: str, password: str) -> Account:
        payload = await self._post(
            self.SIGN_IN,
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return Account(uid=payload["localId"], email=payload.get("email", email))

    async def _post(self, endpoint: str, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self._base_url}/{endpoint}"
        try:
            response = await self._http.post(url, params={"key": self._api_key}, json=body)
        except httpx.HTTPError as e:
            logger.warning("Identity provider unreachable (%s): %s", endpoint, str(e))
            raise IdentityProviderError(
                code=NETWORK_ERROR_CODE,
                message=f"Firebase: Error ({NETWORK_ERROR_CODE}).",
                context={"error_type": type(e).__name__},
            )

        if response.is_success:
            return response.json()

        server_message = self._server_message(response)
        if server_message is None:
            logger.warning(
                "Identity provider returned %d without a usable error body (%s)",
                response.status_code,
                endpoint,
            )
            raise IdentityProviderError(context={"status": response.status_code})
        raise translate_error(server_message)

    @staticmethod
    def _server_message(response: httpx.Response) -> Optional[str]:
        try:
            message = response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            return None
        return message if isinstance(message, str) and message else None
