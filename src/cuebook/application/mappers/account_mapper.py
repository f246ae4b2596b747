from __future__ import annotations

from cuebook.application.dto.responses import AccountResponse
from cuebook.domain.account.entities import Account


def to_account_response(account: Account) -> AccountResponse:
    return AccountResponse(
        accountId=str(account.account_id),
        name=account.name,
        email=account.email,
        phone=account.phone,
        isAdmin=account.is_admin,
        membershipType=account.membership_type,
        membershipExpiry=account.membership_expiry,
    )
