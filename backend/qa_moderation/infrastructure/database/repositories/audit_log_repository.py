"""SQLAlchemy implementation of the AuditLogRepository. Insert and select only."""

from dataclasses import replace

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qa_moderation.application.interfaces import AuditLogRepository
from qa_moderation.domain.entities import AuditLogType, AuditRecord
from qa_moderation.domain.exceptions import PersistenceError
from qa_moderation.infrastructure.database.models import AuditLogModel
from qa_moderation.infrastructure.database.repositories._mapping import as_utc

_SORT_COLUMNS = {
    "age": (AuditLogModel.created_at.desc(),),
    "type": (AuditLogModel.log_type.asc(),),
    "event": (AuditLogModel.event_type.asc(),),
    "related": (AuditLogModel.related_type.desc(), AuditLogModel.related_id.desc()),
    "user": (AuditLogModel.user_id.asc(),),
}


class SQLAlchemyAuditLogRepository(AuditLogRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def append(self, record: AuditRecord) -> AuditRecord:
        model = AuditLogModel(
            log_type=record.log_type.value,
            event_type=record.event_type,
            related_type=record.related_type,
            related_id=record.related_id,
            user_id=record.user_id,
            comment=record.comment,
            created_at=record.created_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError("append audit record", str(exc)) from exc
        return replace(record, id=model.id)

    async def list_records(
        self,
        *,
        exclude_types: frozenset[AuditLogType] = frozenset(),
        sort: str = "age",
        skip: int = 0,
        limit: int = 100,
    ) -> list[AuditRecord]:
        stmt = select(AuditLogModel)
        if exclude_types:
            stmt = stmt.where(AuditLogModel.log_type.not_in([t.value for t in exclude_types]))
        order = _SORT_COLUMNS.get(sort, _SORT_COLUMNS["age"])
        stmt = stmt.order_by(*order, AuditLogModel.id.desc()).offset(skip).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_domain(m) for m in result.scalars().all()]

    @staticmethod
    def _to_domain(model: AuditLogModel) -> AuditRecord:
        return AuditRecord(
            id=model.id,
            log_type=AuditLogType(model.log_type),
            event_type=model.event_type,
            related_type=model.related_type,
            related_id=model.related_id,
            user_id=model.user_id,
            comment=model.comment,
            created_at=as_utc(model.created_at),
        )
