"""
Name: Request Context (ContextVars)

Responsibilities:
  - Store request-scoped data (request_id, method, path, user_id)
  - Enable structured logging with request correlation

Collaborators:
  - middleware.py: Sets context at request start
  - auth_users.py: Sets user_id once the principal is resolved
  - logger.py: Reads context for log enrichment

Notes:
  - contextvars are async-safe (isolated per request)
"""

from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")


def get_context_dict() -> dict:
    """R: Current context as dict (non-empty values only)."""
    ctx = {}

    if val := request_id_var.get():
        ctx["request_id"] = val
    if val := http_method_var.get():
        ctx["method"] = val
    if val := http_path_var.get():
        ctx["path"] = val
    if val := user_id_var.get():
        ctx["user_id"] = val

    return ctx


def clear_context() -> None:
    """R: Reset all context vars (called at request end)."""
    request_id_var.set("")
    http_method_var.set("")
    http_path_var.set("")
    user_id_var.set("")
