"""Authenticated caller identity as seen by the application layer."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.auth import get_verifier
from storefront.auth.port import TokenVerificationError
from storefront.user.user import Role, User


class AuthenticationError(Exception):
    """No usable credentials were presented."""


class AuthorizationError(Exception):
    """Credentials were presented but do not grant access."""


@dataclass(frozen=True)
class Principal:
    email: str
    role: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("unauthorized access")
    token = authorization[len("Bearer ") :].strip()
    if not token:
        raise AuthenticationError("unauthorized access")
    return token


def resolve_principal(token: str) -> Principal:
    """Verify ``token`` and attach the role stored for its email, if any."""
    try:
        verified = get_verifier().verify(token)
    except TokenVerificationError as exc:
        raise AuthorizationError("forbidden access") from exc

    user = current_domain.repository_for(User).find_by_email(verified.email)
    return Principal(email=verified.email, role=user.role if user else None)
