"""Board service — business logic for board posts.

Learn: Routes/CLI call the service, the service calls the repository.
The resolved owner is always an explicit argument; nothing here reads a
"current user" from ambient context.

get_by_id (and so set_status) is NOT owner-scoped: any authenticated
caller can fetch or re-status a board by id. list_mine and delete are
scoped. This mirrors the behaviour the service was built to reproduce.
"""

import structlog

from boardkeep.db.board_repository import BoardRepository
from boardkeep.db.models import Board, BoardStatus, User
from boardkeep.errors import ResourceNotFound
from boardkeep.schemas.board import BoardCreate

logger = structlog.get_logger()


class BoardService:
    """Business logic for board CRUD and status changes."""

    def __init__(self, boards: BoardRepository):
        self.boards = boards

    async def get_by_id(self, board_id: int) -> Board:
        found = await self.boards.find_by_id(board_id)
        if found is None:
            raise ResourceNotFound(f"Can't find Board with id {board_id}")
        return found

    async def list_mine(self, owner: User) -> list[Board]:
        return await self.boards.list_by_owner(owner.id)

    async def create(self, fields: BoardCreate, owner: User) -> Board:
        board = await self.boards.create(fields, owner.id)
        logger.info("boards.created", board_id=board.id, owner_id=str(owner.id))
        return board

    async def delete(self, board_id: int, owner: User) -> None:
        await self.boards.delete_by_id_and_owner(board_id, owner.id)
        logger.info("boards.deleted", board_id=board_id, owner_id=str(owner.id))

    async def set_status(self, board_id: int, status: BoardStatus) -> Board:
        board = await self.get_by_id(board_id)
        board = await self.boards.update_status(board, status)
        logger.info("boards.status_changed", board_id=board_id, status=status.value)
        return board
