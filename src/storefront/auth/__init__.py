"""Token verifier factory.

Provides get_verifier() / set_verifier() to swap implementations; the fake
verifier is the default for development and tests. Deployments install a
real adapter with set_verifier() at startup.
"""

from storefront.auth.fake_adapter import FakeTokenVerifier
from storefront.auth.port import TokenVerifier

_current_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    """Return the active token verifier. Defaults to a FakeTokenVerifier seeded from STOREFRONT_DEV_TOKENS."""
    global _current_verifier
    if _current_verifier is None:
        _current_verifier = FakeTokenVerifier.from_env()
    return _current_verifier


def set_verifier(verifier: TokenVerifier) -> None:
    global _current_verifier
    _current_verifier = verifier


def reset_verifier() -> None:
    global _current_verifier
    _current_verifier = None
