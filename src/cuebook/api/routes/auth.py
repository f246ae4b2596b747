from __future__ import annotations

from fastapi import APIRouter, Depends

from cuebook.api.dependencies import require_identity
from cuebook.application.dto.requests import LoginRequest, RegisterRequest, UpdateProfileRequest
from cuebook.application.dto.responses import AccountResponse, AuthResponse
from cuebook.application.ports.identity import Identity
from cuebook.application.use_cases.accounts import (
    GetProfile,
    LoginAccount,
    RegisterAccount,
    UpdateProfile,
)
from cuebook.infrastructure.container import get_container

router = APIRouter(prefix="/v1/auth")


def _register_use_case() -> RegisterAccount:
    container = get_container()
    return RegisterAccount(
        account_repository=container.account_repository,
        password_hasher=container.password_hasher,
        token_issuer=container.token_codec,
    )


def _login_use_case() -> LoginAccount:
    container = get_container()
    return LoginAccount(
        account_repository=container.account_repository,
        password_hasher=container.password_hasher,
        token_issuer=container.token_codec,
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(request_dto: RegisterRequest) -> AuthResponse:
    return _register_use_case().execute(request_dto)


@router.post("/login", response_model=AuthResponse)
def login(request_dto: LoginRequest) -> AuthResponse:
    return _login_use_case().execute(request_dto)


@router.get("/profile", response_model=AccountResponse)
def get_profile(identity: Identity = Depends(require_identity)) -> AccountResponse:
    return GetProfile(account_repository=get_container().account_repository).execute(identity)


@router.put("/profile", response_model=AccountResponse)
def update_profile(
    request_dto: UpdateProfileRequest,
    identity: Identity = Depends(require_identity),
) -> AccountResponse:
    return UpdateProfile(account_repository=get_container().account_repository).execute(
        requester=identity,
        request_dto=request_dto,
    )
