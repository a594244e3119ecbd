from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel

from auth import create_access_token
from dependencies import get_user_service
from services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    """Request model for JSON login."""
    username: str
    password: str


class LoginResponse(BaseModel):
    """Response model for login with user data."""
    access_token: str
    token_type: str
    user: dict


def _authenticate(service: UserService, username: str, password: str):
    user = service.authenticate(username, password)
    if not user:
        raise HTTPException(status_code=400, detail="Usuario o contraseña incorrectos")

    # Verificar que el usuario no esté desactivado (eliminación lógica)
    if not user.active:
        raise HTTPException(
            status_code=403,
            detail="Esta cuenta ha sido desactivada. Contacte al administrador para restaurarla."
        )
    return user


@router.post("/login", response_model=LoginResponse)
def login_with_json(login_data: LoginRequest, service: UserService = Depends(get_user_service)):
    """
    Login endpoint that accepts JSON and returns user data with its roles.
    """
    user = _authenticate(service, login_data.username, login_data.password)
    role_names = service.get_role_names(user.id)

    token = create_access_token({"sub": user.id, "username": user.username, "roles": role_names})

    return {
        "access_token": token,
        "token_type": "bearer",
        "user": {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "personId": user.person_id,
            "roles": role_names,
            "createDate": user.create_date.isoformat() if user.create_date else None,
            "active": user.active
        }
    }


@router.post("/token")
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    service: UserService = Depends(get_user_service),
):
    """
    OAuth2 compatible token endpoint (form-data).
    Used by Swagger UI and OAuth2 clients.
    """
    user = _authenticate(service, form_data.username, form_data.password)
    token = create_access_token({"sub": user.id, "username": user.username})
    return {"access_token": token, "token_type": "bearer"}
