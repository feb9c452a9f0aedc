"""Authorization helpers that keep role and claim names in one place."""

from .names import ADMINISTRATOR_ROLE, TENANT_CLAIM, USERS_WRITE


def can_manage_users(user, policy):  # pragma: no cover - demo function
    if user.has_role(ADMINISTRATOR_ROLE):
        return True
    return policy.check(user, USERS_WRITE)


def tenant_of(principal):  # pragma: no cover - demo function
    return principal.claims.get(TENANT_CLAIM)
