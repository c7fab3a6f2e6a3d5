from mychat.models.user import User, ProfileVisibility
from mychat.models.contact import Contact, ContactStatus

__all__ = [
    "User",
    "ProfileVisibility",
    "Contact",
    "ContactStatus",
]
