"""Authorization helpers that repeat role and claim names inline, used for analyzer demos."""


def can_manage_users(user, policy):  # pragma: no cover - demo function
    if user.has_role("Administrator"):
        return True
    return policy.check(user, "users:write")


def tenant_of(principal):  # pragma: no cover - demo function
    return principal.claims.get("tenant_id")


def audit(logger, user):  # pragma: no cover - demo function
    logger.info("granted %s", user.name)
