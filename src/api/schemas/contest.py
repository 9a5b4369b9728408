"""Pydantic schemas for contest API endpoints."""

from datetime import datetime

from pydantic import BaseModel

from domain.models import ContestStatus, Platform


class ContestResponse(BaseModel):
    """A contest as shown in the unified view."""

    id: str
    name: str
    platform: Platform
    start_time: datetime
    end_time: datetime
    url: str
    status: ContestStatus
    solution_link: str | None = None

    class Config:
        from_attributes = True


class ContestListResponse(BaseModel):
    """Ordered contests plus any platforms that could not be fetched."""

    contests: list[ContestResponse]
    generated_at: datetime
    failed_platforms: list[Platform] = []


class SolutionLinkRequest(BaseModel):
    """Solution link to store for a contest."""

    url: str


class SolutionLinkResponse(BaseModel):
    contest_id: str
    url: str
