from .common import CamelModel, ErrorResponse, OkResponse, SuccessResponse
from .gym import (
    FavoriteGymCard,
    FeaturedGymsResponse,
    GymCard,
    GymCompareResponse,
    GymDetail,
    GymFilterCriteria,
    GymListResponse,
)
from .review import ReviewListResponse, ReviewOut

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "OkResponse",
    "SuccessResponse",
    "FavoriteGymCard",
    "FeaturedGymsResponse",
    "GymCard",
    "GymCompareResponse",
    "GymDetail",
    "GymFilterCriteria",
    "GymListResponse",
    "ReviewListResponse",
    "ReviewOut",
]
