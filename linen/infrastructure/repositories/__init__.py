from .sqlalchemy_activity_repository import SqlAlchemyActivityRepository
from .sqlalchemy_recap_repository import SqlAlchemyRecapRepository
from .sqlalchemy_theme_repository import SqlAlchemyThemeRepository
from .sqlalchemy_user_repository import SqlAlchemyUserRepository

__all__ = [
    "SqlAlchemyActivityRepository",
    "SqlAlchemyRecapRepository",
    "SqlAlchemyThemeRepository",
    "SqlAlchemyUserRepository",
]
