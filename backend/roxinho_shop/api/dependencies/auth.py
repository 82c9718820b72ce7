from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from roxinho_shop.core.exceptions import ForbiddenError, UnauthorizedError
from roxinho_shop.core.security import verify_access_token
from roxinho_shop.models.dto.auth import TokenUser

security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenUser:
    if not credentials:
        raise UnauthorizedError("Missing authentication token")

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError("Invalid or expired token")

    user = TokenUser(
        id=str(payload["sub"]),
        email=payload.get("email"),
        name=payload.get("name"),
        is_admin=payload.get("is_admin") is True,
    )
    request.state.user = user
    return user


async def require_admin(
    user: TokenUser = Depends(get_current_user),
) -> TokenUser:
    if not user.is_admin:
        raise ForbiddenError("Acesso negado. Requer privilégios de administrador.")
    return user
