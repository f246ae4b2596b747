from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from cuebook.application.dto.requests import LoginRequest, RegisterRequest, UpdateProfileRequest
from cuebook.application.dto.responses import AccountListResponse, AccountResponse, AuthResponse
from cuebook.application.errors import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AuthenticationError,
    BookingValidationError,
    ForbiddenError,
)
from cuebook.application.mappers.account_mapper import to_account_response
from cuebook.application.ports.identity import Identity, PasswordHasher, TokenIssuer
from cuebook.application.ports.repositories import AccountRepository, DuplicateAccountEmailError
from cuebook.domain.account.entities import Account, AccountRole, normalize_email
from cuebook.domain.common.ids import AccountId

logger = logging.getLogger(__name__)


def _identity_for(account: Account) -> Identity:
    return Identity(subject_id=account.account_id, is_admin=account.is_admin)


class RegisterAccount:
    def __init__(
        self,
        account_repository: AccountRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self._account_repository = account_repository
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer

    def execute(self, request_dto: RegisterRequest) -> AuthResponse:
        if request_dto.password != request_dto.confirm_password:
            raise BookingValidationError("passwords do not match")

        email = normalize_email(request_dto.email)
        if self._account_repository.get_by_email(email) is not None:
            raise AccountAlreadyExistsError("email already registered")

        try:
            account = Account(
                account_id=AccountId(f"acc_{uuid4().hex[:12]}"),
                name=request_dto.name.strip(),
                email=email,
                phone=request_dto.phone.strip(),
                password_hash=self._password_hasher.hash(request_dto.password),
                role=AccountRole.MEMBER,
                created_at=datetime.now(timezone.utc),
            )
        except ValueError as exc:
            raise BookingValidationError(str(exc)) from exc

        try:
            self._account_repository.add(account)
        except DuplicateAccountEmailError as exc:
            raise AccountAlreadyExistsError("email already registered") from exc

        logger.info("account_registered", extra={"account_id": account.account_id})
        return AuthResponse(
            account=to_account_response(account),
            token=self._token_issuer.issue(_identity_for(account)),
        )


class LoginAccount:
    def __init__(
        self,
        account_repository: AccountRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self._account_repository = account_repository
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer

    def execute(self, request_dto: LoginRequest) -> AuthResponse:
        account = self._account_repository.get_by_email(normalize_email(request_dto.email))
        if account is None or not self._password_hasher.verify(
            request_dto.password, account.password_hash
        ):
            raise AuthenticationError("invalid email or password")

        return AuthResponse(
            account=to_account_response(account),
            token=self._token_issuer.issue(_identity_for(account)),
        )


class GetProfile:
    def __init__(self, account_repository: AccountRepository) -> None:
        self._account_repository = account_repository

    def execute(self, requester: Identity) -> AccountResponse:
        account = self._account_repository.get(requester.subject_id)
        if account is None:
            raise AccountNotFoundError(f"account {requester.subject_id} not found")
        return to_account_response(account)


class UpdateProfile:
    def __init__(self, account_repository: AccountRepository) -> None:
        self._account_repository = account_repository

    def execute(self, requester: Identity, request_dto: UpdateProfileRequest) -> AccountResponse:
        account = self._account_repository.get(requester.subject_id)
        if account is None:
            raise AccountNotFoundError(f"account {requester.subject_id} not found")

        updated = account.with_profile(
            name=request_dto.name.strip() if request_dto.name else None,
            phone=request_dto.phone.strip() if request_dto.phone else None,
        )
        self._account_repository.update(updated)
        return to_account_response(updated)


class ListAccounts:
    def __init__(self, account_repository: AccountRepository) -> None:
        self._account_repository = account_repository

    def execute(self, requester: Identity) -> AccountListResponse:
        if not requester.is_admin:
            raise ForbiddenError("admin access required")

        accounts = sorted(
            self._account_repository.list_all(),
            key=lambda account: (account.created_at, account.account_id),
        )
        return AccountListResponse(users=[to_account_response(account) for account in accounts])
