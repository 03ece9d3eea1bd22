"""Repository abstractions for the service layer."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from findmygym.models import Gym


class GymReadRepository(Protocol):
    """Read-only repository boundary for gym queries.

    Listing methods return gyms with amenities, reviews, memberships and hours
    eagerly loaded so aggregates can be computed without further IO.
    """

    async def list_active(
        self,
        *,
        q: str | None = None,
        gym_type: str | None = None,
        price_range: str | None = None,
        amenities: Sequence[str] = (),
    ) -> list[Gym]: ...

    async def list_by_slugs(self, slugs: Sequence[str]) -> list[Gym]: ...

    async def list_by_ids(self, gym_ids: Sequence[int]) -> list[Gym]: ...

    async def get_detail_by_slug(self, slug: str) -> Gym | None: ...

    async def get_by_id(self, gym_id: int) -> Gym | None: ...
