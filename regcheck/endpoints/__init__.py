"""HTTP endpoints exposed by regcheck."""

from regcheck.endpoints.check_email import check_email, health, routes

__all__ = ["check_email", "health", "routes"]
