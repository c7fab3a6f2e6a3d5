from pydantic import BaseModel, Field
from typing import Optional
from mychat.models.user import ProfileVisibility

DISPLAY_NAME_MAX_LENGTH = 100
BIO_MAX_LENGTH = 500


class UserProfileResponse(BaseModel):
    user_id: str
    username: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    profile_visibility: ProfileVisibility


class UpdateUserProfileRequest(BaseModel):
    display_name: Optional[str] = Field(default=None, max_length=DISPLAY_NAME_MAX_LENGTH)
    bio: Optional[str] = Field(default=None, max_length=BIO_MAX_LENGTH)
    profile_visibility: Optional[ProfileVisibility] = None
