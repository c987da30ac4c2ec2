"""AccountLifecycleService end to end on SQLite: real repositories, bus and subscribers."""

import pytest

from app.application.dtos import AccountCreate, AccountUpdate
from app.application.events import (
    AccountConfirmed,
    AccountCreated,
    AccountDeactivated,
    AccountDeleted,
    AccountEvent,
    AccountPermanentlyDeleted,
    AccountReactivated,
)
from app.application.services import AccountLifecycleService
from app.domain.exceptions import (
    AlreadyConfirmedException,
    DuplicateEmailException,
    PreconditionException,
    ProtectedAccountException,
    SelfActionException,
    ValidationException,
)
from app.infrastructure.messaging import InProcessEventBus
from app.infrastructure.persistence.repositories import (
    AccountRepository,
    PermissionRepository,
    RoleRepository,
)
from app.infrastructure.persistence.repositories.password_history_repo import (
    PasswordHistoryRepository,
)
from app.infrastructure.security import BcryptPasswordHasher
from app.infrastructure.services import (
    LogOnlyAccountNotifier,
    register_account_subscribers,
)
from app.shared.context import ActorContext

pytestmark = pytest.mark.requires_db


@pytest.fixture
async def flow(session_factory, admin_id):
    """Service over a live session plus the events it published."""
    bus = InProcessEventBus()
    register_account_subscribers(bus, session_factory)
    published: list[AccountEvent] = []

    async def record(event: AccountEvent) -> None:
        published.append(event)

    bus.subscribe(AccountEvent, record)
    notifier = LogOnlyAccountNotifier()
    async with session_factory() as session:
        service = AccountLifecycleService(
            AccountRepository(session),
            RoleRepository(session),
            PermissionRepository(session),
            bus,
            notifier,
            BcryptPasswordHasher(rounds=4),
            requires_approval=lambda: False,
        )
        yield service, published, notifier


def _data(**overrides) -> AccountCreate:
    values = {
        "first_name": "A",
        "last_name": "B",
        "email": "a@x.com",
        "password": "password-123",
        "roles": ["member"],
    }
    values.update(overrides)
    return AccountCreate(**values)


ADMIN = ActorContext.for_account(1)


async def test_end_to_end_scenario(flow, session_factory) -> None:
    """create → confirm → deactivate → restore rejected → soft delete → force delete (twice)."""
    service, published, _ = flow

    account = await service.create(_data(), ADMIN)
    assert account.roles == ("member",)
    assert not account.confirmed

    confirmed = await service.confirm(account.id, ADMIN)
    assert confirmed.confirmed

    other = ActorContext.for_account(account.id + 100)
    marked = await service.mark(account.id, False, other)
    assert not marked.active

    with pytest.raises(PreconditionException) as exc_info:
        await service.restore(account.id, ADMIN)
    assert exc_info.value.message_key.endswith(".cant_restore")

    await service.delete(account.id, ADMIN)
    removed = await service.force_delete(account.id, ADMIN)
    assert removed.id == account.id

    with pytest.raises(PreconditionException) as exc_info:
        await service.force_delete(account.id, ADMIN)
    assert exc_info.value.message_key.endswith(".delete_first")

    assert [type(e) for e in published] == [
        AccountCreated,
        AccountConfirmed,
        AccountDeactivated,
        AccountDeleted,
        AccountPermanentlyDeleted,
    ]
    async with session_factory() as session:
        assert await AccountRepository(session).get_by_id(account.id) is None
        assert await PasswordHistoryRepository(session).list_for_account(account.id) == []


async def test_create_without_roles_persists_nothing(flow) -> None:
    service, published, _ = flow
    with pytest.raises(ValidationException):
        await service.create(_data(roles=[]), ADMIN)

    page = await service.list_inactive()
    assert page.total == 0
    assert published == []


async def test_create_attaches_exactly_the_supplied_roles_and_permissions(flow) -> None:
    service, _, _ = flow
    account = await service.create(
        _data(roles=["member", "administrator"], permissions=["view backend"]), ADMIN
    )

    stored = await service.get(account.id)
    assert stored.roles == ("administrator", "member")
    assert stored.permissions == ("view backend",)


async def test_create_records_password_history_and_sends_confirmation(
    flow, session_factory
) -> None:
    service, _, notifier = flow
    account = await service.create(_data(send_confirmation_email=True), ADMIN)
    await service.update_password(account.id, "another-password", ADMIN)

    async with session_factory() as session:
        history = await PasswordHistoryRepository(session).list_for_account(account.id)
    assert len(history) == 2
    assert history[0] != history[1]
    assert notifier.sent == 1


async def test_self_deactivation_leaves_account_active(flow) -> None:
    service, published, _ = flow
    with pytest.raises(SelfActionException):
        await service.mark(1, False, ADMIN)

    assert (await service.get(1)).active
    assert published == []


async def test_primordial_admin_cannot_be_unconfirmed(flow) -> None:
    service, _, _ = flow
    other = await service.create(_data(roles=["administrator"]), ADMIN)

    for actor in (ADMIN, ActorContext.for_account(other.id), ActorContext.system()):
        with pytest.raises((ProtectedAccountException, SelfActionException)):
            await service.unconfirm(1, actor)
    assert (await service.get(1)).confirmed


async def test_confirm_twice_fails_the_second_time(flow) -> None:
    service, _, _ = flow
    account = await service.create(_data(), ADMIN)
    await service.confirm(account.id, ADMIN)
    with pytest.raises(AlreadyConfirmedException):
        await service.confirm(account.id, ADMIN)


async def test_restore_returns_account_to_its_listing(flow) -> None:
    service, _, _ = flow
    account = await service.create(_data(active=False), ADMIN)
    await service.delete(account.id, ADMIN)
    assert [a.id for a in (await service.list_deleted()).items] == [account.id]
    assert (await service.list_inactive()).total == 0

    restored = await service.restore(account.id, ADMIN)

    assert restored.deleted_at is None
    assert [a.id for a in (await service.list_inactive()).items] == [account.id]
    assert (await service.list_deleted()).total == 0


async def test_update_email_collision_and_own_email(flow) -> None:
    service, _, _ = flow
    first = await service.create(_data(email="one@x.com"), ADMIN)
    await service.create(_data(email="two@x.com"), ADMIN)

    with pytest.raises(DuplicateEmailException):
        await service.update(
            first.id,
            AccountUpdate(first_name="A", last_name="B", email="two@x.com", roles=["member"]),
            ADMIN,
        )
    same = await service.update(
        first.id,
        AccountUpdate(first_name="Z", last_name="B", email="one@x.com", roles=[]),
        ADMIN,
    )
    assert same.first_name == "Z"
    assert same.roles == ()


async def test_soft_deleted_email_can_be_reused(flow) -> None:
    service, _, _ = flow
    old = await service.create(_data(), ADMIN)
    await service.delete(old.id, ADMIN)

    new = await service.create(_data(), ADMIN)
    assert new.id != old.id


async def test_marking_active_account_active_emits_reactivated_again(flow) -> None:
    """Re-marking an already active account active is not a no-op: Reactivated fires each time."""
    service, published, _ = flow
    account = await service.create(_data(active=True), ADMIN)
    await service.mark(account.id, True, ADMIN)
    await service.mark(account.id, True, ADMIN)

    assert [type(e) for e in published[1:]] == [AccountReactivated, AccountReactivated]
