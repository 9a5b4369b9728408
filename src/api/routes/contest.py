"""API routes for the unified contest view and solution links."""

from litestar import Controller, delete, get, put
from litestar.status_codes import HTTP_200_OK, HTTP_204_NO_CONTENT
from loguru import logger

from api.schemas.contest import (
    ContestListResponse,
    ContestResponse,
    SolutionLinkRequest,
    SolutionLinkResponse,
)
from domain.exceptions import StoreError
from domain.models import ContestStatus, Platform
from services import create_contest_service, create_solution_service
from services.contest import filter_contests


class ContestController(Controller):
    """Controller for contest listing endpoints."""

    path = "/contests"

    @get("/", status_code=HTTP_200_OK)
    async def list_contests(
        self,
        platform: Platform | None = None,
        status: ContestStatus | None = None,
    ) -> ContestListResponse:
        """
        List contests from all platforms: ongoing first, then upcoming, then past.

        Query parameters:
        - platform: only contests from this platform
        - status: only contests in this lifecycle state
        """
        logger.debug(f"API request for contests: platform={platform}, status={status}")

        service = create_contest_service()
        try:
            result = await service.aggregate()
        finally:
            await service.close()
        contests = filter_contests(result.contests, platform=platform, status=status)

        return ContestListResponse(
            contests=[ContestResponse.model_validate(contest) for contest in contests],
            generated_at=result.generated_at,
            failed_platforms=result.failed_platforms,
        )


class SolutionController(Controller):
    """Controller for saving and removing solution links."""

    path = "/solutions"

    @put("/{contest_id:str}", status_code=HTTP_200_OK)
    async def save_solution(self, contest_id: str, data: SolutionLinkRequest) -> SolutionLinkResponse:
        logger.debug(f"API request to save solution link for {contest_id}")

        service = create_solution_service()
        try:
            saved = await service.save_solution_link(contest_id, data.url.strip())
        finally:
            await service.close()

        if not saved:
            raise StoreError("Failed to save solution link. Please try again later.")

        return SolutionLinkResponse(contest_id=contest_id, url=data.url.strip())

    @delete("/{contest_id:str}", status_code=HTTP_204_NO_CONTENT)
    async def remove_solution(self, contest_id: str) -> None:
        logger.debug(f"API request to remove solution link for {contest_id}")

        service = create_solution_service()
        try:
            removed = await service.remove_solution_link(contest_id)
        finally:
            await service.close()

        if not removed:
            raise StoreError("Failed to remove solution link. Please try again later.")
