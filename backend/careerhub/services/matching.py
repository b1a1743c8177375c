"""
Matching Service - keyword affinity between CVs and jobs.

Both directions are computed on demand from the keyword sets of the stored
records; nothing is cached. Scores only rank candidates, they never gate
access to a posting.
"""

from __future__ import annotations

import math
from typing import Any

from careerhub.core.config import settings
from careerhub.core.errors import NotFound
from careerhub.core.logging import get_logger
from careerhub.repositories import Record, Stores
from careerhub.services.keywords import extract_keywords, join_text, match_score

logger = get_logger("matching")


def _cv_profile_text(cv: Record, include_skills: bool = True) -> str:
    parts = [cv.get("name"), cv.get("title"), cv.get("section"), cv.get("bio")]
    if include_skills:
        parts.append(cv.get("skills"))
    return join_text(*parts)


def _job_text(job: Record, include_body: bool = True) -> str:
    parts = [job.get("title"), job.get("industry"), job.get("skills")]
    if include_body:
        parts += [job.get("description"), job.get("requirements")]
    return join_text(*parts)


def display_score(ratio: float) -> int:
    """Convert a [0, 1] ratio to a 0-100 score, rounding halves up."""
    return int(math.floor(ratio * 100 + 0.5))


def _visible_jobs(stores: Stores) -> list[Record]:
    return stores.jobs.query({"is_active": True, "is_approved": True})


def match_jobs_for_cv(
    stores: Stores,
    cv_id: Any,
    threshold: int | None = None,
) -> list[Record]:
    """
    Rank the visible jobs against one CV.

    Args:
        stores: Record stores
        cv_id: Id of the CV to match
        threshold: Minimum display score to exceed (defaults to settings)

    Returns:
        Job records with an added integer ``score``, best first. Jobs with
        equal scores keep their stored order.

    Raises:
        NotFound: If the CV does not exist
    """
    cv = stores.cvs.get(cv_id)
    if cv is None:
        raise NotFound("CV not found")

    cutoff = settings.MATCH_SCORE_THRESHOLD if threshold is None else threshold
    cv_keywords = extract_keywords(_cv_profile_text(cv))

    scored: list[Record] = []
    for job in _visible_jobs(stores):
        score = display_score(match_score(cv_keywords, extract_keywords(_job_text(job))))
        if score > cutoff:
            scored.append({**job, "score": score})

    ranked = sorted(scored, key=lambda job: job["score"], reverse=True)
    logger.info(f"CV {cv_id}: {len(ranked)} matching jobs above {cutoff}")
    return ranked


def match_cvs_for_job(
    stores: Stores,
    job_id: Any,
    threshold: float | None = None,
) -> list[Record]:
    """
    Find the CVs whose profile fits a job.

    Only the job's headline fields (title, industry, skills) and the CV's
    profile (name, title, section, bio) take part.

    Raises:
        NotFound: If the job does not exist
    """
    job = stores.jobs.get(job_id)
    if job is None:
        raise NotFound("Job not found")

    cutoff = settings.CV_MATCH_RATIO_THRESHOLD if threshold is None else threshold
    job_keywords = extract_keywords(_job_text(job, include_body=False))

    matches: list[Record] = []
    for cv in stores.cvs.collect():
        ratio = match_score(job_keywords, extract_keywords(_cv_profile_text(cv, include_skills=False)))
        if ratio > cutoff:
            matches.append({**cv, "score": display_score(ratio)})

    matches.sort(key=lambda cv: cv["score"], reverse=True)
    logger.info(f"Job {job_id}: {len(matches)} matching CVs above {cutoff}")
    return matches
