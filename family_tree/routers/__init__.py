from family_tree.routers import backups, debug, family_members, health

__all__ = [
    "health",
    "family_members",
    "backups",
    "debug",
]
