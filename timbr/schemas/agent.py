"""
Pydantic schemas for the public agent page.
"""

from typing import List
from timbr.schemas.common import CamelModel
from timbr.schemas.house import AgentSummary, HouseBase


class AgentDetail(AgentSummary):
    """Agent with every listing they represent, active or not."""

    listings: List[HouseBase]


class AgentEnvelope(CamelModel):
    agent: AgentDetail
