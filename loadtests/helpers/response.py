"""Response error extraction for load test observability.

Parses Storefront API error responses into human-readable messages.
Handles three response shapes:

- Pydantic validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Auth and lookups (401/403/404): {"detail": "msg"}
- Domain errors (400/404/409/422): {"message": "msg", "kind": "..."} or {"error": {"field": "msg"}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    detail = body.get("detail")
    if isinstance(detail, list):
        parts = []
        for err in detail:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)
    if isinstance(detail, str):
        return detail

    if "message" in body:
        kind = body.get("kind")
        return f"{kind}: {body['message']}" if kind else str(body["message"])

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(f"{k}: {v}" for k, v in error.items())
        return str(error)

    return str(body)[:300]


def is_expected_refusal(response: Response) -> bool:
    """True for refusals a contended storefront is supposed to give."""
    if response.status_code != 409:
        return False
    try:
        kind = response.json().get("kind")
    except ValueError:
        return False
    return kind in ("insufficient_stock", "transaction_conflict")
