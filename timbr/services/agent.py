"""
Agent service for the public agent page.
"""

from typing import Union
from sqlalchemy.ext.asyncio import AsyncSession
from timbr.repositories.user import UserRepository
from timbr.models.profile import AgentProfile
from timbr.utils.exceptions import AgentNotFoundError
import uuid


class AgentService:
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def get_agent(self, agent_id: Union[str, uuid.UUID]) -> AgentProfile:
        """
        Get an agent profile with its user and all of its listings.

        Raises:
            AgentNotFoundError: If the id is malformed or unknown
        """
        if not isinstance(agent_id, uuid.UUID):
            try:
                agent_id = uuid.UUID(str(agent_id))
            except ValueError:
                raise AgentNotFoundError()

        agent = await self.user_repo.get_agent_with_listings(agent_id)
        if not agent:
            raise AgentNotFoundError()
        return agent
