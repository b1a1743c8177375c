from sqlalchemy import Column, Integer, String, Text

from careerhub.db.base import Base


class Application(Base):
    """Application to either a job or an internship (never both)."""

    __tablename__ = "applications"

    id = Column(Integer, primary_key=True)
    applicant_name = Column(String, nullable=False)
    applicant_email = Column(String, index=True, nullable=False)
    applicant_phone = Column(String, nullable=False)
    cover_letter = Column(Text, nullable=True)
    cv_file_name = Column(String, nullable=True)
    cv_storage_id = Column(String, nullable=True)

    # No foreign keys: postings can be archived while applications stay
    job_id = Column(Integer, index=True, nullable=True)
    internship_id = Column(Integer, index=True, nullable=True)

    status = Column(String, default="pending")
    notes = Column(Text, nullable=True)
    created_at = Column(String)
    updated_at = Column(String)
