"""
Audit Models for Household Ledger

Every dashboard build and every rejected input row is logged.
This provides:
1. Traceability of what the engine saw and produced
2. Debugging information when a view looks wrong
3. Visibility into sloppy upstream data

DESIGN DECISION: Audit events describe outcomes (counts, months,
reasons), never the full transaction snapshot.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Input handling
    TRANSACTIONS_LOADED = "transactions_loaded"
    BUDGETS_LOADED = "budgets_loaded"
    RECORD_REJECTED = "record_rejected"

    # Analytics
    RECURRING_DETECTED = "recurring_detected"
    SAVINGS_COMPUTED = "savings_computed"
    INSUFFICIENT_DATA = "insufficient_data"
    BUDGET_STATUS_COMPUTED = "budget_status_computed"
    DASHBOARD_BUILT = "dashboard_built"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant step creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'budget', 'dashboard')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., all events in one dashboard build)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transactions_loaded(120, 2, correlation_id)
        event = AuditEventBuilder.dashboard_built("2026-01", correlation_id)
    """

    @staticmethod
    def transactions_loaded(
        accepted: int,
        rejected: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_LOADED,
            severity=AuditSeverity.WARNING if rejected else AuditSeverity.INFO,
            entity_type="transaction",
            correlation_id=correlation_id,
            description=f"Loaded {accepted} transactions ({rejected} rejected)",
            details={
                "accepted": accepted,
                "rejected": rejected,
            },
        )

    @staticmethod
    def budgets_loaded(
        accepted: int,
        rejected: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGETS_LOADED,
            severity=AuditSeverity.WARNING if rejected else AuditSeverity.INFO,
            entity_type="budget",
            correlation_id=correlation_id,
            description=f"Loaded {accepted} budgets ({rejected} rejected)",
            details={
                "accepted": accepted,
                "rejected": rejected,
            },
        )

    @staticmethod
    def record_rejected(
        entity_type: str,
        record_id: Optional[str],
        errors: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            entity_id=record_id,
            correlation_id=correlation_id,
            description=f"Rejected {entity_type} record with {len(errors)} issues",
            details={
                "errors": errors,
            },
        )

    @staticmethod
    def recurring_detected(
        count: int,
        total_monthly: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECURRING_DETECTED,
            entity_type="recurring",
            correlation_id=correlation_id,
            description=f"Detected {count} recurring charges",
            details={
                "count": count,
                "total_monthly": round(total_monthly, 2),
            },
        )

    @staticmethod
    def savings_computed(
        month: str,
        savings_rate: float,
        years_to_fi: Optional[float],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVINGS_COMPUTED,
            entity_type="savings",
            entity_id=month,
            correlation_id=correlation_id,
            description=f"Savings rate for {month}: {savings_rate}%",
            details={
                "savings_rate": savings_rate,
                "years_to_fi": years_to_fi,
            },
        )

    @staticmethod
    def insufficient_data(
        view: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INSUFFICIENT_DATA,
            entity_type=view,
            correlation_id=correlation_id,
            description=f"Not enough data for {view}: {reason}",
            details={
                "reason": reason,
            },
        )

    @staticmethod
    def budget_status_computed(
        month: str,
        budget_count: int,
        over_budget: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_STATUS_COMPUTED,
            entity_type="budget",
            entity_id=month,
            correlation_id=correlation_id,
            description=f"Checked {budget_count} budgets for {month}, {len(over_budget)} over",
            details={
                "over_budget": over_budget,
            },
        )

    @staticmethod
    def dashboard_built(
        month: str,
        transaction_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DASHBOARD_BUILT,
            entity_type="dashboard",
            entity_id=month,
            correlation_id=correlation_id,
            description=f"Dashboard built for {month} from {transaction_count} transactions",
            details={
                "transaction_count": transaction_count,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
