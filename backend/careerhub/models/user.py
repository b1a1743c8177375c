from sqlalchemy import Column, Integer, String, Boolean

from careerhub.db.base import Base


class User(Base):
    """User record created on first login (residents) or admin login."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, default="user")  # 'user' | 'admin' | 'recruiter' (reserved)
    created_at = Column(String)
    updated_at = Column(String)
    last_login_at = Column(String, nullable=True)


class AuthSession(Base):
    """Opaque login session with a fixed expiry."""

    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True)
    session_id = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, index=True, nullable=False)
    is_admin = Column(Boolean, default=False)
    created_at = Column(String)
    expires_at = Column(String)
