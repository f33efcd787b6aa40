"""FastAPI dependencies that turn the Authorization header into a Principal."""

from fastapi import Depends, Header, HTTPException, Query

from storefront.auth.principal import (
    AuthenticationError,
    AuthorizationError,
    Principal,
    bearer_token,
    resolve_principal,
)


async def current_principal(authorization: str | None = Header(default=None)) -> Principal:
    try:
        token = bearer_token(authorization)
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from None
    try:
        return resolve_principal(token)
    except AuthorizationError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from None


async def require_admin(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise HTTPException(status_code=403, detail="forbidden access")
    return principal


async def require_self_email(
    email: str = Query(...),
    principal: Principal = Depends(current_principal),
) -> str:
    """Only let a caller look up the account their token belongs to."""
    if email.strip().lower() != principal.email.strip().lower():
        raise HTTPException(status_code=403, detail="forbidden access")
    return email
