"""Seed roles, permissions and the primordial administrator, then print a token.

Usage:
    python -m scripts.seed_access <email> <password> [first_name] [last_name]

Idempotent for roles and permissions. The administrator is created only when
no account with that email exists; on a fresh database it becomes account 1.
Requires DATABASE_URL and SECRET_KEY. All imports use app.*.
"""

import asyncio
import sys

from app.application.dtos import AccountCreate
from app.application.services import AccountLifecycleService
from app.core.config import get_settings
from app.infrastructure.messaging import InProcessEventBus
from app.infrastructure.persistence.database import dispose_engine, get_session_factory
from app.infrastructure.persistence.repositories import (
    AccountRepository,
    PermissionRepository,
    RoleRepository,
)
from app.infrastructure.security import BcryptPasswordHasher, create_access_token
from app.infrastructure.services import (
    LogOnlyAccountNotifier,
    register_account_subscribers,
)
from app.shared.context import ActorContext
from app.shared.telemetry.logging import setup_logging

ADMIN_ROLE = "administrator"

DEFAULT_ROLES: dict[str, str] = {
    ADMIN_ROLE: "Full access to the admin panel",
    "member": "Regular account",
}

DEFAULT_PERMISSIONS: dict[str, str] = {
    "view backend": "Open the admin panel",
    "access.flower_rates.list": "List accounts",
    "access.flower_rates.manage": "Create, edit and delete accounts",
    "access.flower_rates.confirm": "Confirm and un-confirm accounts",
}


async def _seed_catalog() -> None:
    async with get_session_factory()() as session:
        roles = RoleRepository(session)
        permissions = PermissionRepository(session)
        async with roles.transaction("create_error"):
            for name, description in DEFAULT_ROLES.items():
                if await roles.get_by_name(name) is None:
                    await roles.create_role(name, description)
                    print(f"Created role {name!r}")
            for name, description in DEFAULT_PERMISSIONS.items():
                if await permissions.get_by_name(name) is None:
                    await permissions.create_permission(name, description)
                    print(f"Created permission {name!r}")


async def _seed_admin(email: str, password: str, first_name: str, last_name: str) -> int:
    session_factory = get_session_factory()
    bus = InProcessEventBus()
    register_account_subscribers(bus, session_factory)
    async with session_factory() as session:
        accounts = AccountRepository(session)
        if await accounts.email_taken(email):
            print(f"Account {email} already exists; skipping", file=sys.stderr)
            existing = await accounts.get_by_email(email)
            assert existing is not None
            return existing.id
        service = AccountLifecycleService(
            accounts,
            RoleRepository(session),
            PermissionRepository(session),
            bus,
            LogOnlyAccountNotifier(),
            BcryptPasswordHasher(),
        )
        account = await service.create(
            AccountCreate(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password=password,
                roles=[ADMIN_ROLE],
                permissions=list(DEFAULT_PERMISSIONS),
                active=True,
                confirmed=True,
            ),
            ActorContext.system(),
        )
        print(f"Created administrator {account.email} (id={account.id})")
        return account.id


async def main() -> None:
    """Seed the access catalog and the administrator."""
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.seed_access <email> <password> [first_name] [last_name]",
            file=sys.stderr,
        )
        sys.exit(1)
    email, password = sys.argv[1], sys.argv[2]
    first_name = sys.argv[3] if len(sys.argv) > 3 else "Super"
    last_name = sys.argv[4] if len(sys.argv) > 4 else "Admin"

    get_settings()
    setup_logging()
    try:
        await _seed_catalog()
        account_id = await _seed_admin(email, password, first_name, last_name)
    finally:
        await dispose_engine()
    print(f"Access token for account {account_id}:")
    print(create_access_token(account_id))


if __name__ == "__main__":
    asyncio.run(main())
