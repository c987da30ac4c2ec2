"""Account domain enumerations."""

from enum import Enum

from app.shared.enums import ValuesMixin


class AccountSortField(ValuesMixin, str, Enum):
    """Columns the account listings may be ordered by."""

    ID = "id"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    EMAIL = "email"
    ACTIVE = "active"
    CONFIRMED = "confirmed"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    DELETED_AT = "deleted_at"


class SortDirection(ValuesMixin, str, Enum):
    """Listing sort direction."""

    ASC = "asc"
    DESC = "desc"


class AccountListView(ValuesMixin, str, Enum):
    """The three disjoint account listings of the admin panel."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"


class NotificationKind(ValuesMixin, str, Enum):
    """Notifications the lifecycle service asks the dispatcher to deliver."""

    NEEDS_CONFIRMATION = "needs_confirmation"
    ACCOUNT_ACTIVE = "account_active"
