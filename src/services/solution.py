"""Service for saving and removing contest solution links."""

from loguru import logger

from domain.exceptions import MissingInputError
from infrastructure.parsers import SolutionLinkStoreProtocol


class SolutionLinkService:
    """Validates solution link edits and writes them to the link store."""

    def __init__(self, *, link_store: SolutionLinkStoreProtocol):
        self.link_store = link_store

    async def save_solution_link(self, contest_id: str, url: str) -> bool:
        """Store a solution link for a contest; last write wins."""
        if not contest_id or not url:
            raise MissingInputError("Contest id and solution link are required")
        logger.debug(f"Saving solution link for {contest_id}")
        return await self.link_store.set(contest_id, url)

    async def remove_solution_link(self, contest_id: str) -> bool:
        if not contest_id:
            raise MissingInputError("Contest id is required")
        return await self.link_store.remove(contest_id)

    async def close(self) -> None:
        await self.link_store.close()
