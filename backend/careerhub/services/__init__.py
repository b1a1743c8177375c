from careerhub.services.keywords import extract_keywords, match_score, KEYWORD_VOCABULARY, ROLE_SUFFIXES
from careerhub.services.matching import match_jobs_for_cv, match_cvs_for_job
from careerhub.services.auth import (
    Identity,
    login,
    admin_login,
    resolve_session,
    logout,
    require_identity,
    require_admin,
)
from careerhub.services.postings import (
    POSTING_KINDS,
    submit_posting,
    get_posting,
    update_posting,
    approve_posting,
    reject_posting,
    delete_posting,
    restore_posting,
    purge_posting,
    list_postings,
    list_archive,
)

__all__ = [
    "extract_keywords",
    "match_score",
    "KEYWORD_VOCABULARY",
    "ROLE_SUFFIXES",
    "match_jobs_for_cv",
    "match_cvs_for_job",
    "Identity",
    "login",
    "admin_login",
    "resolve_session",
    "logout",
    "require_identity",
    "require_admin",
    "POSTING_KINDS",
    "submit_posting",
    "get_posting",
    "update_posting",
    "approve_posting",
    "reject_posting",
    "delete_posting",
    "restore_posting",
    "purge_posting",
    "list_postings",
    "list_archive",
]
