from sqlalchemy import Column, Integer, String

from app.models.base import Base


class User(Base):
    """User model for storing user information"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Not unique by schema, although lookups treat it as the record key
    username = Column(String(50), nullable=False)
    email = Column(String(50), nullable=False)
