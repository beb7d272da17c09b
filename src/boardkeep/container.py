"""Explicit wiring of the core components.

Learn: No framework does dependency resolution for us. Given the settings
built at start-up and one request-scoped session, build the stack
leaf-first: CredentialStore → TokenService → AuthService →
BoardRepository → BoardService.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from boardkeep.auth.credentials import CredentialStore
from boardkeep.auth.jwt import TokenService
from boardkeep.config import Settings
from boardkeep.db.board_repository import BoardRepository
from boardkeep.services.auth_service import AuthService
from boardkeep.services.board_service import BoardService


@dataclass
class Services:
    auth: AuthService
    boards: BoardService


def build_services(settings: Settings, db: AsyncSession) -> Services:
    credentials = CredentialStore(db, bcrypt_rounds=settings.bcrypt_rounds)
    tokens = TokenService(settings)
    auth = AuthService(credentials, tokens)
    boards = BoardService(BoardRepository(db))
    return Services(auth=auth, boards=boards)
