from .activity_repository import ActivityRepository
from .recap_repository import RecapRepository
from .theme_repository import ThemeRepository
from .user_repository import UserRepository

__all__ = [
    "ActivityRepository",
    "RecapRepository",
    "ThemeRepository",
    "UserRepository",
]
