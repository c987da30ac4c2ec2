"""DTOs for permission lookups (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model (result of get_by_names)."""

    id: str
    name: str
