"""
Input Loading

DESIGN DECISION: Bad rows are dropped, not fixed silently and not fatal.

Coercion of sloppy-but-meaningful values (string amounts, odd casing,
missing descriptions) happens in the models themselves. What reaches
this module as a failure is a row that cannot mean anything: no valid
date, a negative amount, a budget without a category. Such a row is
reported as a RejectedRecord and logged, and the rest of the snapshot
is analyzed as usual.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Generic, Optional, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError

from household_ledger.audit import AuditLogger
from household_ledger.models.transaction import Budget, HouseholdMember, Transaction


ModelT = TypeVar("ModelT", bound=BaseModel)

RecordLike = Union[Mapping[str, Any], BaseModel]


class RejectedRecord(BaseModel):
    """An input row that failed validation."""

    index: int = Field(..., ge=0, description="Position of the row in the input")
    record_id: Optional[str] = None
    errors: list[dict] = Field(default_factory=list)


class LoadResult(BaseModel, Generic[ModelT]):
    """Accepted models plus the rows that were dropped."""

    accepted: list[ModelT] = Field(default_factory=list)
    rejected: list[RejectedRecord] = Field(default_factory=list)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)


def _error_summary(exc: ValidationError) -> list[dict]:
    """Keep only the JSON-safe parts of pydantic's error list."""
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "issue_type": err.get("type", "invalid"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]


def _record_id(record: RecordLike) -> Optional[str]:
    value = record.get("id") if isinstance(record, Mapping) else getattr(record, "id", None)
    return str(value) if value is not None else None


def _load(
    model: type[ModelT],
    entity_type: str,
    records: Iterable[RecordLike],
    audit_logger: Optional[AuditLogger],
    correlation_id: Optional[UUID],
) -> LoadResult[ModelT]:
    result: LoadResult[ModelT] = LoadResult()

    for index, record in enumerate(records):
        if isinstance(record, model):
            result.accepted.append(record)
            continue

        data = record.model_dump() if isinstance(record, BaseModel) else record
        try:
            result.accepted.append(model.model_validate(data))
        except ValidationError as e:
            rejected = RejectedRecord(
                index=index,
                record_id=_record_id(record),
                errors=_error_summary(e),
            )
            result.rejected.append(rejected)
            if audit_logger:
                audit_logger.log_record_rejected(
                    entity_type=entity_type,
                    record_id=rejected.record_id,
                    errors=rejected.errors,
                    correlation_id=correlation_id,
                )

    return result


def load_transactions(
    records: Iterable[RecordLike],
    audit_logger: Optional[AuditLogger] = None,
    correlation_id: Optional[UUID] = None,
) -> LoadResult[Transaction]:
    """Coerce raw transaction rows, dropping the ones that cannot be used."""
    result = _load(Transaction, "transaction", records, audit_logger, correlation_id)
    if audit_logger:
        audit_logger.log_transactions_loaded(
            accepted=len(result.accepted),
            rejected=result.rejected_count,
            correlation_id=correlation_id,
        )
    return result


def load_budgets(
    records: Iterable[RecordLike],
    audit_logger: Optional[AuditLogger] = None,
    correlation_id: Optional[UUID] = None,
) -> LoadResult[Budget]:
    """Coerce raw budget rows, dropping the ones that cannot be used."""
    result = _load(Budget, "budget", records, audit_logger, correlation_id)
    if audit_logger:
        audit_logger.log_budgets_loaded(
            accepted=len(result.accepted),
            rejected=result.rejected_count,
            correlation_id=correlation_id,
        )
    return result


def load_members(
    records: Iterable[RecordLike],
    audit_logger: Optional[AuditLogger] = None,
    correlation_id: Optional[UUID] = None,
) -> LoadResult[HouseholdMember]:
    return _load(HouseholdMember, "member", records, audit_logger, correlation_id)
