from fastapi import APIRouter

from couponhub.api.deps import CurrentUser, DbSession
from couponhub.domain.user_operations import user_ops
from couponhub.models.user import User, UserProfileUpdate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
async def get_current_user_profile(current_user: CurrentUser) -> User:
    """Get current user's profile."""
    return current_user


@router.patch("/me", response_model=UserRead)
async def update_current_user_profile(
    data: UserProfileUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> User:
    """Update current user's profile. Only the fields sent are changed."""
    return await user_ops.update_profile(db, current_user, data)
