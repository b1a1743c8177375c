from sqlalchemy import Column, Integer, String, Boolean

from careerhub.db.base import Base


class WhitelistEntry(Base):
    """Resident email allowed to log in."""

    __tablename__ = "email_whitelist"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)  # stored lower-case
    name = Column(String, nullable=True)
    unit = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)
    added_by = Column(String, nullable=True)
    created_at = Column(String)
    updated_at = Column(String)


class AccessRequest(Base):
    """Request from a resident who is not yet whitelisted."""

    __tablename__ = "access_requests"

    id = Column(Integer, primary_key=True)
    full_name = Column(String, nullable=False)
    email = Column(String, index=True, nullable=False)
    unit_number = Column(String, nullable=False)
    mobile = Column(String, nullable=True)
    status = Column(String, default="pending")  # "pending", "approved", "rejected"
    created_at = Column(String)
    updated_at = Column(String)
