"""
MoodLog Backend — Abstract Identity Provider Interface
========================================================

What:  The two identity capabilities the Credential Gateway needs:
       create an account, and verify an email/password pair.
Who:   Implemented by FirebaseIdentityProvider; faked in the test suite.

Contract:
    - Both methods return the provider's Account on success
    - Provider rejections raise IdentityProviderError(code, message)
    - The provider enforces email uniqueness; this service never checks it
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    uid: str
    email: str


class IdentityProvider(ABC):

    @abstractmethod
    async def create_account(self, email: str, password: str) -> Account:
        """Create a new account. Raises IdentityProviderError on rejection."""
        ...

    @abstractmethod
    async def verify_credentials(self, email: str, password: str) -> Account:
        """Check an email/password pair. Raises IdentityProviderError on rejection."""
        ...
