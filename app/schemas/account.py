"""Account API schemas."""

from datetime import datetime
from typing import Self

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from app.application.dtos.account import AccountPage, AccountResult


class _PasswordConfirmation(BaseModel):
    password: str = Field(..., min_length=8, max_length=191)
    password_confirmation: str

    @model_validator(mode="after")
    def passwords_match(self) -> Self:
        if self.password != self.password_confirmation:
            raise ValueError("password confirmation does not match")
        return self


class AccountCreateRequest(_PasswordConfirmation):
    """Request body for creating an account. At least one role is required."""

    first_name: str = Field(..., min_length=1, max_length=191)
    last_name: str = Field(..., min_length=1, max_length=191)
    email: EmailStr = Field(..., max_length=191)
    active: bool = False
    confirmed: bool = False
    confirmation_email: bool = Field(
        default=False, description="Send the confirmation email after creating"
    )
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)


class AccountUpdateRequest(BaseModel):
    """Request body for updating an account. roles/permissions replace the current sets."""

    first_name: str = Field(..., min_length=1, max_length=191)
    last_name: str = Field(..., min_length=1, max_length=191)
    email: EmailStr = Field(..., max_length=191)
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)


class AccountPasswordRequest(_PasswordConfirmation):
    """Request body for changing an account's password."""


class AccountResponse(BaseModel):
    """Account response (no password, no confirmation code)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    active: bool
    confirmed: bool
    roles: list[str]
    permissions: list[str]
    providers: list[str]
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @classmethod
    def from_result(cls, account: AccountResult) -> "AccountResponse":
        return cls(
            id=account.id,
            first_name=account.first_name,
            last_name=account.last_name,
            full_name=account.full_name,
            email=account.email,
            active=account.active,
            confirmed=account.confirmed,
            roles=list(account.roles),
            permissions=list(account.permissions),
            providers=list(account.providers),
            created_at=account.created_at,
            updated_at=account.updated_at,
            deleted_at=account.deleted_at,
        )


class AccountPageResponse(BaseModel):
    """One page of an account listing."""

    items: list[AccountResponse]
    total: int
    page: int
    per_page: int
    last_page: int

    @classmethod
    def from_page(cls, page: AccountPage) -> "AccountPageResponse":
        return cls(
            items=[AccountResponse.from_result(a) for a in page.items],
            total=page.total,
            page=page.page,
            per_page=page.per_page,
            last_page=page.last_page,
        )
