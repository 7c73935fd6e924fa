"""
Route gate endpoint used by the frontend before rendering a page.
"""

from fastapi import APIRouter, Depends, Query
from rural_properties.schemas.admin import AccessCheckResponse
from rural_properties.services.access import SessionContext, decide_route
from rural_properties.utils.dependencies import get_session_context


router = APIRouter(prefix="/access", tags=["Access"])


@router.get("/check", response_model=AccessCheckResponse, summary="Gate decision for a page")
async def check_access(
    path: str = Query(..., min_length=1, examples=["/agent/properties"]),
    session: SessionContext = Depends(get_session_context)
) -> AccessCheckResponse:
    """
    Allowed, or denied with the page the caller should be sent to instead.
    """
    decision = decide_route(path, session.role, session.resolved)
    return AccessCheckResponse(
        path=path,
        role=session.role.value,
        state=decision.state.value,
        redirect_to=decision.redirect_to
    )
