# Module imports so Alembic autogenerate sees every table
# findmygym/models/__init__.py
from .base import Base
from .booking import BOOKING_STATUSES, BOOKING_TYPES, Booking
from .deal import Deal
from .favorite import Favorite
from .gym import GYM_TYPES, PRICE_RANGES, Gym, GymAmenity, GymClass, GymHour, GymPhoto, Membership
from .project_task import ProjectTask
from .recent_view import RecentView
from .review import Review, ReviewHelpful, ReviewReport
from .user import User

__all__ = [
    "Base",
    "BOOKING_STATUSES",
    "BOOKING_TYPES",
    "Booking",
    "Deal",
    "Favorite",
    "GYM_TYPES",
    "PRICE_RANGES",
    "Gym",
    "GymAmenity",
    "GymClass",
    "GymHour",
    "GymPhoto",
    "Membership",
    "ProjectTask",
    "RecentView",
    "Review",
    "ReviewHelpful",
    "ReviewReport",
    "User",
]
