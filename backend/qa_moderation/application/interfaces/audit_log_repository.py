"""Abstract repository interface (port) for the append-only audit log."""

from abc import ABC, abstractmethod

from qa_moderation.domain.entities import AuditLogType, AuditRecord


class AuditLogRepository(ABC):
    """Port for audit records. Records are only ever appended."""

    @abstractmethod
    async def append(self, record: AuditRecord) -> AuditRecord:
        """Persist ``record`` and return it with its generated ID."""
        ...

    @abstractmethod
    async def list_records(
        self,
        *,
        exclude_types: frozenset[AuditLogType] = frozenset(),
        sort: str = "age",
        skip: int = 0,
        limit: int = 100,
    ) -> list[AuditRecord]:
        """List records ordered by ``sort`` (age, type, event, related, user)."""
        ...
