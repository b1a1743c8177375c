from careerhub.models.user import User, AuthSession
from careerhub.models.whitelist import WhitelistEntry, AccessRequest
from careerhub.models.posting import Job, Internship, Course, RemovedJob, RemovedInternship
from careerhub.models.cv import CvShowcase, CvFileHash
from careerhub.models.application import Application
from careerhub.models.directory import Profile, CommunityBenefit

__all__ = [
    "User",
    "AuthSession",
    "WhitelistEntry",
    "AccessRequest",
    "Job",
    "Internship",
    "Course",
    "RemovedJob",
    "RemovedInternship",
    "CvShowcase",
    "CvFileHash",
    "Application",
    "Profile",
    "CommunityBenefit",
]
