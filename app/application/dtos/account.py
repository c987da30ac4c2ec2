"""DTOs for account lifecycle use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class AccountCreate:
    """Input for creating an account. roles must be non-empty (checked by the service)."""

    first_name: str
    last_name: str
    email: str
    password: str
    roles: list[str]
    permissions: list[str] = field(default_factory=list)
    active: bool = False
    confirmed: bool = False
    send_confirmation_email: bool = False


@dataclass(frozen=True)
class AccountUpdate:
    """Input for updating an account. roles/permissions replace the current sets."""

    first_name: str
    last_name: str
    email: str
    roles: list[str] = field(default_factory=list)
    permissions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AccountResult:
    """Account read-model. No password or confirmation code."""

    id: int
    first_name: str
    last_name: str
    email: str
    active: bool
    confirmed: bool
    roles: tuple[str, ...] = ()
    permissions: tuple[str, ...] = ()
    providers: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class AccountPage:
    """One page of an account listing."""

    items: list[AccountResult]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        if self.total == 0:
            return 1
        return (self.total + self.per_page - 1) // self.per_page
