"""Audit logging package."""

from fintrack.audit.logger import AuditLogger, get_logger

__all__ = ["AuditLogger", "get_logger"]
