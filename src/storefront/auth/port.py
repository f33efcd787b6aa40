"""Identity token verifier port (abstract interface).

The storefront never issues tokens. An external identity provider does, and an
adapter behind this port turns a bearer token into a verified email address.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class VerifiedToken:
    """Claims extracted from a token the provider vouched for."""

    email: str
    subject: str | None = None


class TokenVerificationError(Exception):
    """The token is expired, forged or otherwise unacceptable."""


class TokenVerifier(ABC):
    @abstractmethod
    def verify(self, token: str) -> VerifiedToken:
        """Verify ``token`` or raise TokenVerificationError."""
        ...
