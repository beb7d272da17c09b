"""Board repository — persistence for board posts.

Learn: Every method that lets a caller change or enumerate boards takes
the owner's id and puts it in the WHERE clause. find_by_id and
update_status are the exceptions: the service decides what gating they
need. delete reports "nothing matched" the same way whether the board
never existed or belongs to somebody else.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from boardkeep.db.engine import STORAGE_ERRORS
from boardkeep.db.models import Board, BoardStatus
from boardkeep.errors import ResourceNotFound, StorageUnavailable
from boardkeep.schemas.board import BoardCreate

logger = structlog.get_logger()


class BoardRepository:
    """Owns persisted board records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, board_id: int) -> Optional[Board]:
        try:
            result = await self.db.execute(select(Board).where(Board.id == board_id))
        except STORAGE_ERRORS as e:
            raise self._storage_error("find_by_id", e) from e
        return result.scalars().first()

    async def list_by_owner(self, owner_id: uuid.UUID) -> list[Board]:
        try:
            result = await self.db.execute(
                select(Board).where(Board.owner_id == owner_id).order_by(Board.id)
            )
        except STORAGE_ERRORS as e:
            raise self._storage_error("list_by_owner", e) from e
        return list(result.scalars().all())

    async def create(self, fields: BoardCreate, owner_id: uuid.UUID) -> Board:
        board = Board(
            title=fields.title,
            description=fields.description,
            status=BoardStatus.PUBLIC,
            owner_id=owner_id,
        )
        self.db.add(board)
        await self._commit("create")
        return board

    async def delete_by_id_and_owner(self, board_id: int, owner_id: uuid.UUID) -> None:
        try:
            result = await self.db.execute(
                delete(Board).where(Board.id == board_id, Board.owner_id == owner_id)
            )
        except STORAGE_ERRORS as e:
            await self.db.rollback()
            raise self._storage_error("delete", e) from e

        if result.rowcount == 0:
            raise ResourceNotFound(f"Can't find Board with id {board_id}")
        await self._commit("delete")

    async def update_status(self, board: Board, status: BoardStatus) -> Board:
        board.status = status
        await self._commit("update_status")
        return board

    # ─── Helpers ────────────────────────────────────────

    async def _commit(self, op: str) -> None:
        try:
            await self.db.commit()
        except STORAGE_ERRORS as e:
            await self.db.rollback()
            raise self._storage_error(op, e) from e

    @staticmethod
    def _storage_error(op: str, e: Exception) -> StorageUnavailable:
        logger.error("storage.error", op=f"boards.{op}", error=type(e).__name__)
        return StorageUnavailable("Board storage is unavailable")
