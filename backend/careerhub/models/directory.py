from sqlalchemy import Column, Integer, String, Boolean, Text, JSON

from careerhub.db.base import Base


class Profile(Base):
    """Resident entry in the professional directory."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=True)
    owner_email = Column(String, index=True, nullable=True)  # stored lower-case
    name = Column(String, nullable=False)
    title = Column(String, nullable=False)
    company = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    skills = Column(Text, nullable=True)  # comma-joined
    industry = Column(String, nullable=True)
    experience_level = Column(String, nullable=True)
    contact = Column(String, nullable=True)
    linkedin_url = Column(String, nullable=True)
    portfolio_url = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    how_can_you_support = Column(Text, nullable=True)
    is_visible = Column(Boolean, default=True)

    created_at = Column(String)
    updated_at = Column(String)


class CommunityBenefit(Base):
    """Discount or perk offered to residents by a local business."""

    __tablename__ = "community_benefits"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    business_name = Column(String, nullable=False)
    discount_percentage = Column(String, nullable=True)
    location = Column(String, nullable=True)
    category = Column(String, nullable=True)
    valid_until = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    image_urls = Column(JSON, nullable=True)  # list of image URLs
    is_active = Column(Boolean, default=True)
    show_on_homepage = Column(Boolean, default=False)

    created_at = Column(String)
    updated_at = Column(String)
