"""DTOs for role lookups (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleResult:
    """Role read-model (result of get_by_names)."""

    id: str
    name: str
