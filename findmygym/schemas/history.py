from __future__ import annotations

from pydantic import Field, model_validator

from findmygym.schemas.common import CamelModel
from findmygym.schemas.gym import GymCard


class HistoryPushRequest(CamelModel):
    """Single view (``gymId``) or a client-side backlog (``gymIds``, most recent first)."""

    gym_id: int | None = None
    gym_ids: list[int] | None = Field(default=None, max_length=50)

    @model_validator(mode="after")
    def _require_one(self) -> HistoryPushRequest:
        if self.gym_id is None and not self.gym_ids:
            raise ValueError("gymId or gymIds is required")
        return self

    def ordered_ids(self) -> list[int]:
        ids = [self.gym_id] if self.gym_id is not None else list(self.gym_ids or [])
        seen: set[int] = set()
        out: list[int] = []
        for gid in ids:
            if gid not in seen:
                seen.add(gid)
                out.append(gid)
        return out


class HistoryResponse(CamelModel):
    gyms: list[GymCard] = Field(default_factory=list)
