from .activity import (
    CheckInConversation,
    CommunityPost,
    SomaticCompletion,
    SomaticExercise,
    UserReflection,
)
from .base import Base, TimestampMixin
from .user import User, UserSession
from .weekly_recap import RecapPreferences, WeeklyRecap
from .weekly_theme import DailyContent, WeeklyTheme

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "UserSession",
    "WeeklyTheme",
    "DailyContent",
    "WeeklyRecap",
    "RecapPreferences",
    "UserReflection",
    "SomaticExercise",
    "SomaticCompletion",
    "CheckInConversation",
    "CommunityPost",
]
