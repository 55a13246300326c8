"""
Profile API endpoints.
"""

from fastapi import APIRouter

from weekplan.api.deps import CurrentUser, ProfileRepo
from weekplan.models.profile import Profile, ProfileUpdate

router = APIRouter()


@router.get("", response_model=Profile)
async def get_profile(
    user: CurrentUser,
    repo: ProfileRepo,
) -> Profile:
    """Get the user's profile, creating one with defaults on first access."""
    profile = await repo.get(user.id)
    if profile is None:
        profile = await repo.upsert(user.id, ProfileUpdate())
    return profile


@router.patch("", response_model=Profile)
async def update_profile(
    update: ProfileUpdate,
    user: CurrentUser,
    repo: ProfileRepo,
) -> Profile:
    """Partially update the profile."""
    return await repo.upsert(user.id, update)
