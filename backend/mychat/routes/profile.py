from fastapi import APIRouter, Depends, File, UploadFile
from typing import Optional
from mychat.models.user import User
from mychat.schemas.user import UpdateUserProfileRequest, UserProfileResponse
from mychat.services.avatars import AvatarFile
from mychat.services.profile import ProfileService
from mychat.core.auth import get_current_user, get_optional_user
from mychat.core.deps import get_profile_service

router = APIRouter()

@router.get("/me", response_model=UserProfileResponse)
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service)
):
    """
    Get the current user's profile
    """
    return profiles.get_own_profile(current_user.id)

@router.put("/me", response_model=UserProfileResponse)
async def update_my_profile(
    request: UpdateUserProfileRequest,
    current_user: User = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service)
):
    """
    Update the current user's profile
    """
    return profiles.update_own_profile(current_user.id, request)

@router.post("/me/avatar", response_model=UserProfileResponse)
async def upload_my_avatar(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service)
):
    """
    Upload a new avatar image (jpg, jpeg, png or gif, up to 5 MB)
    """
    return profiles.set_avatar(current_user.id, AvatarFile.from_upload(file))

@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user_profile(
    user_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    profiles: ProfileService = Depends(get_profile_service)
):
    """
    Get a user's profile by ID (respects privacy settings)
    """
    viewer_id = current_user.id if current_user else None
    return profiles.get_profile(viewer_id, user_id)
