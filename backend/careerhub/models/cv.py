from sqlalchemy import Column, Integer, String, Text

from careerhub.db.base import Base


class CvShowcase(Base):
    """Resident CV shown in the professional directory."""

    __tablename__ = "cv_showcase"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, index=True, nullable=False)  # owner, stored lower-case
    phone = Column(String, nullable=True)
    title = Column(String, nullable=False)
    section = Column(String, nullable=False)
    bio = Column(Text, nullable=True)
    skills = Column(Text, nullable=True)
    experience = Column(Text, nullable=True)
    education = Column(Text, nullable=True)
    years_of_experience = Column(String, nullable=True)
    linkedin_url = Column(String, nullable=True)

    # File reference in the external blob store
    cv_file_name = Column(String, nullable=True)
    cv_storage_id = Column(String, nullable=True)
    cv_file_hash = Column(String, nullable=True)

    created_at = Column(String)
    updated_at = Column(String)


class CvFileHash(Base):
    """Content hash of an attached CV file, bound to exactly one CV."""

    __tablename__ = "cv_file_hashes"

    id = Column(Integer, primary_key=True)
    content_hash = Column(String, unique=True, index=True, nullable=False)
    cv_id = Column(Integer, index=True, nullable=False)
    created_at = Column(String)
