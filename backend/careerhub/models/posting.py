"""
Posting models.

Jobs, internships and courses share the moderation fields; jobs and
internships additionally have an archive table that receives the row when
the posting is deleted.
"""

from sqlalchemy import Column, Integer, String, Boolean, Text

from careerhub.db.base import Base


class ModerationMixin:
    """Lifecycle fields shared by every posting."""

    status = Column(String, default="pending")  # "pending", "approved", "rejected", "active"
    is_active = Column(Boolean, default=True)
    is_approved = Column(Boolean, default=False)
    posted_by = Column(String, nullable=True)  # user id of the poster, if logged in


class JobFieldsMixin(ModerationMixin):
    title = Column(String, nullable=False)
    company = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=True)
    skills = Column(Text, nullable=True)  # comma-joined
    industry = Column(String, nullable=True)
    experience_level = Column(String, nullable=True)
    job_type = Column(String, nullable=True)
    location = Column(String, nullable=True)
    salary_range = Column(String, nullable=True)
    contact_email = Column(String, nullable=False)
    contact_phone = Column(String, nullable=False)
    poster_email = Column(String, nullable=True)
    poster_role = Column(String, nullable=True)


class InternshipFieldsMixin(ModerationMixin):
    title = Column(String, nullable=False)
    company = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=True)
    skills = Column(Text, nullable=True)
    department = Column(String, nullable=True)
    duration = Column(String, nullable=False)
    is_paid = Column(Boolean, default=False)
    stipend = Column(String, nullable=True)
    location = Column(String, nullable=True)
    positions = Column(Integer, default=1)
    poster_email = Column(String, nullable=True)
    poster_role = Column(String, nullable=True)
    contact_email = Column(String, nullable=False)
    contact_phone = Column(String, nullable=True)
    start_date = Column(String, nullable=True)
    application_deadline = Column(String, nullable=True)


class ArchiveFieldsMixin:
    """Bookkeeping added when a posting is moved to its archive."""

    original_id = Column(Integer, index=True)
    original_created_at = Column(String, nullable=True)
    original_updated_at = Column(String, nullable=True)
    removed_at = Column(String, index=True)
    removed_by = Column(String, nullable=True)
    removal_reason = Column(String, nullable=True)


class Job(JobFieldsMixin, Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(String)
    updated_at = Column(String)


class Internship(InternshipFieldsMixin, Base):
    __tablename__ = "internships"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(String)
    updated_at = Column(String)


class Course(ModerationMixin, Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String, nullable=False)  # "workshop", "course", "seminar", ...
    instructor = Column(String, nullable=True)
    duration = Column(String, nullable=True)
    price = Column(String, nullable=True)
    start_date = Column(String, nullable=True)
    end_date = Column(String, nullable=True)
    max_attendees = Column(Integer, nullable=True)
    current_attendees = Column(Integer, default=0)
    location = Column(String, nullable=True)
    is_online = Column(Boolean, default=False)
    registration_url = Column(String, nullable=True)
    skills = Column(Text, nullable=True)
    is_featured = Column(Boolean, default=False)
    created_at = Column(String)
    updated_at = Column(String)


class RemovedJob(JobFieldsMixin, ArchiveFieldsMixin, Base):
    __tablename__ = "removed_jobs"

    id = Column(Integer, primary_key=True, index=True)


class RemovedInternship(InternshipFieldsMixin, ArchiveFieldsMixin, Base):
    __tablename__ = "removed_internships"

    id = Column(Integer, primary_key=True, index=True)
