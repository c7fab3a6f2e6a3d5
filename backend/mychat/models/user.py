from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy import Enum as SAEnum
from datetime import datetime
from enum import Enum
import uuid
from mychat.db.session import Base


class ProfileVisibility(str, Enum):
    public = 'public'
    contacts_only = 'contacts_only'
    private = 'private'


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String, unique=True, nullable=True)
    email = Column(String, unique=True, nullable=True)
    display_name = Column(String(100), nullable=True)
    bio = Column(Text, nullable=True)
    avatar_url = Column(String, nullable=True)
    profile_visibility = Column(
        SAEnum(ProfileVisibility, name='profile_visibility'),
        nullable=False,
        default=ProfileVisibility.public
    )
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<User id={self.id} username={self.username}>"
