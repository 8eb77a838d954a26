"""Pydantic models."""

from sitesetup.models.audit_event import AuditEvent
from sitesetup.models.plan import ProvisioningPlan

__all__ = ["AuditEvent", "ProvisioningPlan"]
