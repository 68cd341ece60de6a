"""Role-based authorization for user mutations.

Each role maps to a rule deciding whether a principal may mutate a given user
record. ``CONTENT_MANAGER`` is restricted to its own record; ``ADMIN`` may
mutate any record.
"""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from agenda.models.user import Role


@dataclass(frozen=True)
class Principal:
    """Authenticated caller resolved from the bearer token."""

    id: UUID
    role: Role


MutationRule = Callable[[Principal, UUID], bool]


def _unrestricted(principal: Principal, target_id: UUID) -> bool:
    return True


def _own_record_only(principal: Principal, target_id: UUID) -> bool:
    return principal.id == target_id


MUTATION_RULES: dict[Role, MutationRule] = {
    Role.ADMIN: _unrestricted,
    Role.CONTENT_MANAGER: _own_record_only,
}


ROLE_ASSIGNERS = frozenset({Role.ADMIN})


def can_mutate(principal: Principal, target_id: UUID) -> bool:
    """Return True if ``principal`` may update or delete user ``target_id``."""
    rule = MUTATION_RULES.get(principal.role, _own_record_only)
    return rule(principal, target_id)


def can_change_role(principal: Principal) -> bool:
    """Only admins may change a user's role, their own included."""
    return principal.role in ROLE_ASSIGNERS
