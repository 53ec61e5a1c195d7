"""Per-resource routers (users, roles, logbooks)."""
