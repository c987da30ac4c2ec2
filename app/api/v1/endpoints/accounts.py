"""Account administration API: thin routes delegating to AccountLifecycleService.

Every route requires a bearer token; the acting account is passed to the
service explicitly. Write routes are rate limited.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, Response

from app.api.v1.dependencies import (
    get_account_service,
    get_cache,
    get_current_actor,
)
from app.application.dtos.account import AccountCreate, AccountUpdate
from app.application.services.account_lifecycle_service import AccountLifecycleService
from app.core.constants import DEFAULT_ORDER_BY, DEFAULT_SORT
from app.core.limiter import limit_writes
from app.infrastructure.cache.keys import account_key
from app.infrastructure.cache.redis_cache import CacheService
from app.schemas.account import (
    AccountCreateRequest,
    AccountPageResponse,
    AccountPasswordRequest,
    AccountResponse,
    AccountUpdateRequest,
)
from app.shared.context import ActorContext

router = APIRouter()

Service = Annotated[AccountLifecycleService, Depends(get_account_service)]
Actor = Annotated[ActorContext, Depends(get_current_actor)]
AccountId = Annotated[int, Path(ge=1, description="Account id")]
Page = Annotated[int, Query(ge=1)]
PerPage = Annotated[int | None, Query(ge=1, le=500)]
OrderBy = Annotated[str, Query(description="Sortable column")]
Sort = Annotated[str, Query(description="asc or desc")]


@router.get("", response_model=AccountPageResponse)
async def list_active_accounts(
    actor: Actor,
    service: Service,
    page: Page = 1,
    per_page: PerPage = None,
    order_by: OrderBy = DEFAULT_ORDER_BY,
    sort: Sort = DEFAULT_SORT,
):
    """Live, active accounts (paginated)."""
    result = await service.list_active(page, per_page, order_by, sort)
    return AccountPageResponse.from_page(result)


@router.get("/deactivated", response_model=AccountPageResponse)
async def list_deactivated_accounts(
    actor: Actor,
    service: Service,
    page: Page = 1,
    per_page: PerPage = None,
    order_by: OrderBy = DEFAULT_ORDER_BY,
    sort: Sort = DEFAULT_SORT,
):
    """Live, inactive accounts (paginated)."""
    result = await service.list_inactive(page, per_page, order_by, sort)
    return AccountPageResponse.from_page(result)


@router.get("/deleted", response_model=AccountPageResponse)
async def list_deleted_accounts(
    actor: Actor,
    service: Service,
    page: Page = 1,
    per_page: PerPage = None,
    order_by: OrderBy = DEFAULT_ORDER_BY,
    sort: Sort = DEFAULT_SORT,
):
    """Soft-deleted accounts (paginated)."""
    result = await service.list_deleted(page, per_page, order_by, sort)
    return AccountPageResponse.from_page(result)


@router.post("", response_model=AccountResponse, status_code=201)
@limit_writes
async def create_account(
    request: Request,
    body: AccountCreateRequest,
    actor: Actor,
    service: Service,
):
    """Create an account with roles (at least one) and direct permissions."""
    created = await service.create(
        AccountCreate(
            first_name=body.first_name,
            last_name=body.last_name,
            email=str(body.email),
            password=body.password,
            active=body.active,
            confirmed=body.confirmed,
            roles=body.roles,
            permissions=body.permissions,
            send_confirmation_email=body.confirmation_email,
        ),
        actor,
    )
    return AccountResponse.from_result(created)


@router.get("/{account_id}", response_model=AccountResponse)
async def show_account(
    account_id: AccountId,
    actor: Actor,
    service: Service,
    cache: Annotated[CacheService | None, Depends(get_cache)],
):
    """Get an account (including soft-deleted). Read-through cached when Redis is up."""
    key = account_key(account_id)
    if cache is not None:
        cached = await cache.get(key)
        if cached is not None:
            return AccountResponse.model_validate(cached)
    response = AccountResponse.from_result(await service.get(account_id))
    if cache is not None:
        await cache.set(key, response.model_dump(mode="json"))
    return response


@router.patch("/{account_id}", response_model=AccountResponse)
@limit_writes
async def update_account(
    request: Request,
    account_id: AccountId,
    body: AccountUpdateRequest,
    actor: Actor,
    service: Service,
):
    """Update names and email; roles and permissions are replaced wholesale."""
    updated = await service.update(
        account_id,
        AccountUpdate(
            first_name=body.first_name,
            last_name=body.last_name,
            email=str(body.email),
            roles=body.roles,
            permissions=body.permissions,
        ),
        actor,
    )
    return AccountResponse.from_result(updated)


@router.delete("/{account_id}", response_model=AccountResponse)
@limit_writes
async def delete_account(
    request: Request,
    account_id: AccountId,
    actor: Actor,
    service: Service,
):
    """Soft-delete an account (recoverable with restore)."""
    return AccountResponse.from_result(await service.delete(account_id, actor))


@router.patch("/{account_id}/password", response_model=AccountResponse)
@limit_writes
async def change_password(
    request: Request,
    account_id: AccountId,
    body: AccountPasswordRequest,
    actor: Actor,
    service: Service,
):
    """Replace the account's password."""
    updated = await service.update_password(account_id, body.password, actor)
    return AccountResponse.from_result(updated)


@router.post("/{account_id}/mark/{status}", response_model=AccountResponse)
@limit_writes
async def mark_account(
    request: Request,
    account_id: AccountId,
    status: Annotated[int, Path(ge=0, le=1, description="1 = active, 0 = inactive")],
    actor: Actor,
    service: Service,
):
    """Activate (1) or deactivate (0) an account. An account cannot deactivate itself."""
    updated = await service.mark(account_id, bool(status), actor)
    return AccountResponse.from_result(updated)


@router.post("/{account_id}/confirm", response_model=AccountResponse)
@limit_writes
async def confirm_account(
    request: Request,
    account_id: AccountId,
    actor: Actor,
    service: Service,
):
    """Confirm an unconfirmed account."""
    return AccountResponse.from_result(await service.confirm(account_id, actor))


@router.post("/{account_id}/unconfirm", response_model=AccountResponse)
@limit_writes
async def unconfirm_account(
    request: Request,
    account_id: AccountId,
    actor: Actor,
    service: Service,
):
    """Un-confirm an account (never the primordial admin, never yourself)."""
    return AccountResponse.from_result(await service.unconfirm(account_id, actor))


@router.post("/{account_id}/confirmation-email", status_code=202)
@limit_writes
async def resend_confirmation(
    request: Request,
    account_id: AccountId,
    actor: Actor,
    service: Service,
) -> Response:
    """Re-send the confirmation email to an unconfirmed account."""
    await service.send_confirmation(account_id, actor)
    return Response(status_code=202)


@router.delete("/{account_id}/delete", response_model=AccountResponse)
@limit_writes
async def force_delete_account(
    request: Request,
    account_id: AccountId,
    actor: Actor,
    service: Service,
):
    """Permanently delete a soft-deleted account. Returns its last state."""
    return AccountResponse.from_result(await service.force_delete(account_id, actor))


@router.post("/{account_id}/restore", response_model=AccountResponse)
@limit_writes
async def restore_account(
    request: Request,
    account_id: AccountId,
    actor: Actor,
    service: Service,
):
    """Restore a soft-deleted account."""
    return AccountResponse.from_result(await service.restore(account_id, actor))
