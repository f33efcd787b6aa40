"""In-memory token verifier for development and testing.

Tokens are registered up front and map straight to an email address; any
other token fails verification. Not for production: install a real adapter
with ``storefront.auth.set_verifier`` before serving live traffic.
"""

import os

from storefront.auth.port import TokenVerificationError, TokenVerifier, VerifiedToken


class FakeTokenVerifier(TokenVerifier):
    def __init__(self, tokens: dict[str, str] | None = None, record_calls: bool = True) -> None:
        self.tokens: dict[str, str] = dict(tokens or {})
        self.record_calls = record_calls
        self.calls: list[str] = []

    @classmethod
    def from_env(cls, variable: str = "STOREFRONT_DEV_TOKENS") -> "FakeTokenVerifier":
        """Build from comma-separated ``token:email`` pairs, e.g. ``admin-token:admin@example.com``.

        Serves a running process, so verified tokens are not recorded.
        """
        tokens = {}
        for pair in os.getenv(variable, "").split(","):
            token, sep, email = pair.strip().partition(":")
            if sep and token and email:
                tokens[token] = email
        return cls(tokens, record_calls=False)

    def issue(self, token: str, email: str) -> str:
        self.tokens[token] = email
        return token

    def revoke(self, token: str) -> None:
        self.tokens.pop(token, None)

    def verify(self, token: str) -> VerifiedToken:
        if self.record_calls:
            self.calls.append(token)
        email = self.tokens.get(token)
        if email is None:
            raise TokenVerificationError("Unknown or revoked token")
        return VerifiedToken(email=email, subject=token)
