PERMISSIONS = [
    "members", "events", "gallery", "donations", "posts",
    "documents", "team", "volunteers", "settings",
]

ROLE_PERMISSIONS = {
    "super_admin": ["*"],
    "admin": list(PERMISSIONS),
    "moderator": ["events", "gallery", "posts"],
}

def effective_permissions(admin: dict) -> list[str]:
    perms = set(ROLE_PERMISSIONS.get(admin.get("role", ""), []))
    perms.update(admin.get("permissions") or [])
    return sorted(perms)

def has_permission(admin: dict, permission: str) -> bool:
    perms = effective_permissions(admin)
    return "*" in perms or permission in perms
