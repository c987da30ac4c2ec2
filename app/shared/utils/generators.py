"""ID and token generators (CUID for lookup tables, confirmation codes for accounts)."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

CONFIRMATION_CODE_BYTES = 16


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_confirmation_code() -> str:
    """Return a fresh opaque confirmation code (32 hex chars, single use)."""
    return secrets.token_hex(CONFIRMATION_CODE_BYTES)
