"""
Autenticación JWT (python-jose, HS256).

El token solo lleva el id del usuario en `sub`; los roles se consultan en cada
request por el camino SQL directo (UserRepository.get_role_names), así una
reasignación de roles aplica sin reemitir tokens.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError, ExpiredSignatureError
from fastapi.security import OAuth2PasswordBearer
from fastapi import Depends, HTTPException, status

from database.models import UserORM
from dependencies import get_user_repository
from repositories.user_repository import UserRepository
from core.exceptions import ForbiddenException
from core.security import require_role
from config import settings

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign an access token for `data["sub"]` (the user id, stored as a string).

    iat, exp, iss and aud come from settings unless `expires_delta` overrides exp.
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_access_minutes))
    if "sub" not in to_encode:
        raise ValueError("`data` must include `sub` (subject / user id)")
    to_encode.update({
        "sub": str(to_encode["sub"]),
        "exp": expire,
        "iat": now,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience
    })
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Return the claims of a valid token; any failure becomes a 401."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )
    except ExpiredSignatureError:
        logger.info("Token expirado")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expirado")
    except JWTError as e:
        logger.info(f"Token rechazado: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido o expirado")


def get_current_user_dep(
    token: str = Depends(oauth2_scheme),
    repository: UserRepository = Depends(get_user_repository),
) -> UserORM:
    payload = decode_token(token)
    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido: sub faltante")
    try:
        user_id = int(sub)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido: sub no numérico")
    user = repository.get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Usuario no encontrado")
    if not user.active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Usuario desactivado")
    return user


def require_roles(*allowed_roles):
    """Dependency factory that ensures the current user holds one of the allowed roles.

    Roles come from the user_rol assignments. Usage in route:
    current_user = Depends(require_roles(settings.admin_role_name))
    """

    def _dependency(
        current_user: UserORM = Depends(get_current_user_dep),
        repository: UserRepository = Depends(get_user_repository),
    ) -> UserORM:
        try:
            require_role(repository.get_role_names(current_user.id), *allowed_roles)
        except ForbiddenException as e:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
        return current_user

    return _dependency


require_admin = require_roles(settings.admin_role_name)
