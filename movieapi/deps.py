from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.orm import Session

from movieapi.config import Settings, settings
from movieapi.containers import Container
from movieapi.core.security import PasswordHasher, TokenService
from movieapi.database.session import get_db

# Services
from movieapi.services.auth_service import AuthService
from movieapi.services.favorites_service import FavoritesService


def get_settings_dep() -> Settings:
    return settings


@inject
def get_token_service(
    token_service: TokenService = Depends(Provide[Container.services.token_service]),
) -> TokenService:
    return token_service


@inject
def get_auth_service(
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(Provide[Container.services.token_service]),
    password_hasher: PasswordHasher = Depends(
        Provide[Container.services.password_hasher]
    ),
) -> AuthService:
    return AuthService(
        db=db,
        token_service=token_service,
        password_hasher=password_hasher,
    )


def get_favorites_service(db: Session = Depends(get_db)) -> FavoritesService:
    return FavoritesService(db=db)
