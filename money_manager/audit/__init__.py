"""Audit logging package."""

from money_manager.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
