"""Message catalog for account administration errors.

Keys are the short names used by the service (e.g. "role_needed_create");
the full, localizable key is MESSAGE_KEY_PREFIX + "." + short name. Only the
English catalog ships with the service; translations live with the UI.
"""

from app.core.constants import MESSAGE_KEY_PREFIX

EN_MESSAGES: dict[str, str] = {
    "already_confirmed": "This user is already confirmed.",
    "cant_confirm": "There was a problem confirming the user account.",
    "cant_deactivate_self": "You can not do that to yourself.",
    "cant_restore": "This user is not deleted so it can not be restored.",
    "cant_unconfirm": "There was a problem un-confirming the user account.",
    "cant_unconfirm_admin": "You can not un-confirm the super administrator.",
    "cant_unconfirm_self": "You can not un-confirm yourself.",
    "create_error": "There was a problem creating this user. Please try again.",
    "delete_error": "There was a problem deleting this user. Please try again.",
    "delete_first": (
        "This user must be deleted first before it can be destroyed permanently."
    ),
    "already_deleted": "This user is already deleted.",
    "email_error": "That email address belongs to a different user.",
    "mark_error": "There was a problem updating this user. Please try again.",
    "not_confirmed": "This user is not confirmed.",
    "not_found": "That user does not exist.",
    "restore_error": "There was a problem restoring this user. Please try again.",
    "role_needed_create": "You must choose at least one role.",
    "role_not_found": "One or more of the selected roles do not exist.",
    "permission_not_found": "One or more of the selected permissions do not exist.",
    "update_error": "There was a problem updating this user. Please try again.",
    "update_password_error": (
        "There was a problem changing this users password. Please try again."
    ),
}


def message_key(key: str) -> str:
    """Return the full localizable key for a short key."""
    return f"{MESSAGE_KEY_PREFIX}.{key}"


def translate(key: str) -> str:
    """Return the English text for a short key (falls back to the full key)."""
    return EN_MESSAGES.get(key, message_key(key))
