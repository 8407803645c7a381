from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.depends import Principal, get_current_principal

router = APIRouter(tags=["Profile"])


class ProfileResponse(BaseModel):
    """GET /profile response payload"""
    user_id: str
    message: str


@router.get("/profile", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def get_profile(principal: Principal = Depends(get_current_principal)):
    """
    Protected profile

    Raises:
        - 401 Unauthorized: Missing, malformed, forged or expired access token
    """
    return ProfileResponse(user_id=principal.user_id, message="Protected profile data")
