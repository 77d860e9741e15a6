"""SQLAlchemy implementation of the SuggestedEditRepository."""

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qa_moderation.application.interfaces import SuggestedEditRepository
from qa_moderation.domain.entities import ProposedFields, SuggestedEdit
from qa_moderation.domain.exceptions import PersistenceError
from qa_moderation.infrastructure.database.models import SuggestedEditModel
from qa_moderation.infrastructure.database.repositories._mapping import as_utc


class SQLAlchemySuggestedEditRepository(SuggestedEditRepository):
    """Concrete suggested edit repository.

    Decisions are written with ``UPDATE ... WHERE active``, so of two
    concurrent decisions on one edit only the first matches a row.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, edit_id: int) -> SuggestedEdit | None:
        result = await self._session.execute(
            select(SuggestedEditModel).where(SuggestedEditModel.id == edit_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def list_for_post(self, post_id: int, active_only: bool = False) -> list[SuggestedEdit]:
        stmt = select(SuggestedEditModel).where(SuggestedEditModel.post_id == post_id)
        if active_only:
            stmt = stmt.where(SuggestedEditModel.active.is_(True))
        result = await self._session.execute(
            stmt.order_by(SuggestedEditModel.created_at.asc(), SuggestedEditModel.id.asc())
            .execution_options(populate_existing=True)
        )
        return [self._to_domain(m) for m in result.scalars().all()]

    async def create(self, edit: SuggestedEdit) -> SuggestedEdit:
        model = SuggestedEditModel(
            post_id=edit.post_id,
            user_id=edit.user_id,
            title=edit.fields.title,
            tags=edit.fields.tags,
            body=edit.fields.body,
            body_markdown=edit.fields.body_markdown,
            comment=edit.comment,
            active=edit.active,
            accepted=edit.accepted,
            decided_at=edit.decided_at,
            decided_by_id=edit.decided_by_id,
            rejected_comment=edit.rejected_comment,
            created_at=edit.created_at,
            updated_at=edit.updated_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError("create suggested edit", str(exc)) from exc
        edit.id = model.id
        return edit

    async def record_decision(self, edit: SuggestedEdit) -> bool:
        stmt = (
            update(SuggestedEditModel)
            .where(
                SuggestedEditModel.id == edit.id,
                SuggestedEditModel.active.is_(True),
            )
            .values(
                active=edit.active,
                accepted=edit.accepted,
                rejected_comment=edit.rejected_comment,
                decided_at=edit.decided_at,
                decided_by_id=edit.decided_by_id,
                updated_at=edit.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("record suggested edit decision", str(exc)) from exc
        return result.rowcount == 1

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _to_domain(model: SuggestedEditModel) -> SuggestedEdit:
        return SuggestedEdit(
            id=model.id,
            post_id=model.post_id,
            user_id=model.user_id,
            fields=ProposedFields(
                title=model.title,
                tags=list(model.tags) if model.tags is not None else None,
                body=model.body,
                body_markdown=model.body_markdown,
            ),
            comment=model.comment,
            active=model.active,
            accepted=model.accepted,
            decided_at=as_utc(model.decided_at),
            decided_by_id=model.decided_by_id,
            rejected_comment=model.rejected_comment,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
