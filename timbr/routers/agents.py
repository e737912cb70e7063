"""
Public agent endpoint.
"""

from fastapi import APIRouter, Depends, status, Path

from timbr.services.agent import AgentService
from timbr.schemas.agent import AgentDetail, AgentEnvelope
from timbr.schemas.error import get_error_responses
from timbr.utils.dependencies import get_agent_service


router = APIRouter(prefix="/agents", tags=["Agents"])


@router.get(
    "/{agent_id}",
    response_model=AgentEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Agent profile",
    description="Agent profile with its user and every listing it represents",
    responses=get_error_responses(404)
)
async def get_agent(
    agent_id: str = Path(..., description="Agent profile id"),
    agent_service: AgentService = Depends(get_agent_service)
) -> AgentEnvelope:
    agent = await agent_service.get_agent(agent_id)
    return AgentEnvelope(agent=AgentDetail.model_validate(agent))
