"""
Audit Logger

DESIGN DECISION: Every dashboard build is logged.
This provides:
1. Traceability from a rendered view back to the snapshot size
2. Visibility into rejected input rows
3. A quick signal when a household lacks data for a view

The audit logger:
- Is synchronous, like the engine it observes
- Never changes what the engine returns
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from household_ledger.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging (and so structlog) to stderr at ``level``."""
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


class AuditLogger:
    """
    Central audit logging service.

    Events go to the structured local log. ``history`` keeps the
    events of this logger instance for callers that want to show them.
    """

    def __init__(self, keep_history: bool = False):
        """
        Initialize audit logger.

        Args:
            keep_history: Remember logged events in ``history``.
        """
        self._keep_history = keep_history
        self._history: list[AuditEvent] = []
        self._logger = structlog.get_logger("household_ledger.audit")

    @property
    def history(self) -> list[AuditEvent]:
        return list(self._history)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._keep_history:
            self._history.append(event)

    def log_transactions_loaded(
        self,
        accepted: int,
        rejected: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transactions_loaded(accepted, rejected, correlation_id))

    def log_budgets_loaded(
        self,
        accepted: int,
        rejected: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.budgets_loaded(accepted, rejected, correlation_id))

    def log_record_rejected(
        self,
        entity_type: str,
        record_id: Optional[str],
        errors: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an input row that could not be coerced."""
        self.log(AuditEventBuilder.record_rejected(
            entity_type=entity_type,
            record_id=record_id,
            errors=errors,
            correlation_id=correlation_id,
        ))

    def log_recurring_detected(
        self,
        count: int,
        total_monthly: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.recurring_detected(count, total_monthly, correlation_id))

    def log_savings_computed(
        self,
        month: str,
        savings_rate: float,
        years_to_fi: Optional[float],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.savings_computed(
            month=month,
            savings_rate=savings_rate,
            years_to_fi=years_to_fi,
            correlation_id=correlation_id,
        ))

    def log_insufficient_data(
        self,
        view: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.insufficient_data(view, reason, correlation_id))

    def log_budget_status(
        self,
        month: str,
        budget_count: int,
        over_budget: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.budget_status_computed(
            month=month,
            budget_count=budget_count,
            over_budget=over_budget,
            correlation_id=correlation_id,
        ))

    def log_dashboard_built(
        self,
        month: str,
        transaction_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.dashboard_built(month, transaction_count, correlation_id))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a dashboard build and pass it through
    every event logged for that build.
    """
    return uuid4()
