"""
Agent directory endpoints.
"""

from fastapi import APIRouter, Depends, Path, Query
from typing import List, Optional
from rural_properties.schemas.agent import AgentResponse, AgentListResponse, AgentProfileUpdate
from rural_properties.schemas.error import get_error_responses
from rural_properties.schemas.review import ReviewResponse, ReviewListResponse
from rural_properties.services.access import Role, SessionContext
from rural_properties.services.agent import AgentService
from rural_properties.services.review import ReviewService
from rural_properties.utils.dependencies import get_agent_service, get_review_service, require_role


router = APIRouter(prefix="/agents", tags=["Agents"])


@router.get("", response_model=AgentListResponse, summary="List active agents by rating")
async def list_agents(
    area: Optional[str] = Query(None, description="Only agents covering this province"),
    agent_service: AgentService = Depends(get_agent_service)
) -> AgentListResponse:
    agents = await agent_service.list_agents(area)
    return AgentListResponse(
        agents=[AgentResponse.model_validate(a.to_dict()) for a in agents],
        total=len(agents)
    )


@router.get("/top", response_model=List[AgentResponse], summary="Highest rated agents")
async def get_top_agents(
    limit: int = Query(3, ge=1, le=20),
    agent_service: AgentService = Depends(get_agent_service)
) -> List[AgentResponse]:
    agents = await agent_service.get_top_agents(limit)
    return [AgentResponse.model_validate(a.to_dict()) for a in agents]


@router.get(
    "/me",
    response_model=AgentResponse,
    summary="Own agent profile",
    responses=get_error_responses(401, 403, 404)
)
async def get_own_profile(
    session: SessionContext = Depends(require_role(Role.AGENT)),
    agent_service: AgentService = Depends(get_agent_service)
) -> AgentResponse:
    agent = await agent_service.get_own_profile(session)
    return AgentResponse.model_validate(agent.to_dict())


@router.patch(
    "/me",
    response_model=AgentResponse,
    summary="Update own agent profile",
    responses=get_error_responses(401, 403, 404, 422)
)
async def update_own_profile(
    profile: AgentProfileUpdate,
    session: SessionContext = Depends(require_role(Role.AGENT)),
    agent_service: AgentService = Depends(get_agent_service)
) -> AgentResponse:
    agent = await agent_service.update_own_profile(session, profile)
    return AgentResponse.model_validate(agent.to_dict())


@router.get(
    "/{agent_id}",
    response_model=AgentResponse,
    summary="Get agent",
    responses=get_error_responses(404)
)
async def get_agent(
    agent_id: str = Path(...),
    agent_service: AgentService = Depends(get_agent_service)
) -> AgentResponse:
    agent = await agent_service.get_agent(agent_id)
    return AgentResponse.model_validate(agent.to_dict())


@router.get(
    "/{agent_id}/reviews",
    response_model=ReviewListResponse,
    summary="Approved reviews for an agent",
    responses=get_error_responses(404)
)
async def get_agent_reviews(
    agent_id: str = Path(...),
    agent_service: AgentService = Depends(get_agent_service),
    review_service: ReviewService = Depends(get_review_service)
) -> ReviewListResponse:
    agent = await agent_service.get_agent(agent_id)
    reviews = await review_service.list_reviews(agent_id=str(agent.id))
    return ReviewListResponse(
        reviews=[ReviewResponse.model_validate(r.to_dict()) for r in reviews],
        total=len(reviews)
    )
