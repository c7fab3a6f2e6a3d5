"""
User profiles and who may see them.

Visibility rules:
    public         anyone, including anonymous viewers
    contacts_only  the owner, or users with an accepted contact relationship
    private        the owner only

Email is only ever shown to the profile owner.
"""
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mychat.core.errors import ForbiddenError, NotFoundError, UnauthenticatedError, ValidationError
from mychat.models.user import ProfileVisibility, User
from mychat.schemas.user import (
    BIO_MAX_LENGTH,
    DISPLAY_NAME_MAX_LENGTH,
    UpdateUserProfileRequest,
    UserProfileResponse,
)
from mychat.services.avatars import AvatarFile, AvatarService
from mychat.services.contacts import ContactService
from mychat.utils.logger import get_logger

logger = get_logger(__name__)


def _to_profile(user: User, include_email: bool = True) -> UserProfileResponse:
    return UserProfileResponse(
        user_id=user.id,
        username=user.username,
        email=user.email if include_email else None,
        display_name=user.display_name,
        bio=user.bio,
        avatar_url=user.avatar_url,
        profile_visibility=user.profile_visibility,
    )


class ProfileService:
    def __init__(self, db: Session, contacts: ContactService, avatars: Optional[AvatarService] = None):
        self.db = db
        self.contacts = contacts
        self.avatars = avatars

    def get_own_profile(self, viewer_id: Optional[str]) -> UserProfileResponse:
        return _to_profile(self._current_user(viewer_id))

    def get_profile(self, viewer_id: Optional[str], target_id: str) -> UserProfileResponse:
        target = self.db.query(User).filter(User.id == target_id).first()
        if not target:
            raise NotFoundError("User")

        is_self = viewer_id is not None and viewer_id == target.id
        if not is_self:
            if target.profile_visibility == ProfileVisibility.private:
                raise ForbiddenError("This profile is private")
            if target.profile_visibility == ProfileVisibility.contacts_only:
                if viewer_id is None or not self.contacts.are_contacts(viewer_id, target.id):
                    raise ForbiddenError("This profile is only visible to contacts")

        return _to_profile(target, include_email=is_self)

    def update_own_profile(self, viewer_id: Optional[str], patch: UpdateUserProfileRequest) -> UserProfileResponse:
        """Apply the fields present in the patch; absent fields stay untouched."""
        user = self._current_user(viewer_id)

        errors: List[str] = []
        if patch.display_name is not None and len(patch.display_name) > DISPLAY_NAME_MAX_LENGTH:
            errors.append(f"Display name cannot exceed {DISPLAY_NAME_MAX_LENGTH} characters")
        if patch.bio is not None and len(patch.bio) > BIO_MAX_LENGTH:
            errors.append(f"Bio cannot exceed {BIO_MAX_LENGTH} characters")
        if errors:
            raise ValidationError(errors)

        if patch.display_name is not None:
            user.display_name = patch.display_name
        if patch.bio is not None:
            user.bio = patch.bio
        if patch.profile_visibility is not None:
            user.profile_visibility = patch.profile_visibility

        self._save(user)
        logger.info("User %s updated their profile", user.id)
        return _to_profile(user)

    def set_avatar(self, viewer_id: Optional[str], file: Optional[AvatarFile]) -> UserProfileResponse:
        """Store a new avatar and drop the previous one from disk."""
        user = self._current_user(viewer_id)
        if self.avatars is None:
            raise RuntimeError("ProfileService was created without an AvatarService")

        new_url = self.avatars.upload(file, user.id)
        old_url = user.avatar_url
        user.avatar_url = new_url
        try:
            self._save(user)
        except ValidationError:
            self.avatars.delete(new_url)
            raise

        if old_url and old_url != new_url:
            self.avatars.delete(old_url)
        return _to_profile(user)

    def _current_user(self, viewer_id: Optional[str]) -> User:
        if viewer_id is None:
            raise UnauthenticatedError()
        user = self.db.query(User).filter(User.id == viewer_id).first()
        if not user:
            raise UnauthenticatedError()
        return user

    def _save(self, user: User) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            message = str(getattr(e, "orig", None) or e)
            logger.warning("Profile update for user %s rejected by the store: %s", user.id, message)
            raise ValidationError([message])
        self.db.refresh(user)
