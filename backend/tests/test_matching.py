"""Tests for CV <-> job matching."""

import pytest

from careerhub.core.errors import NotFound
from careerhub.services import cv_showcase, matching, postings


# ===== FIXTURES =====

@pytest.fixture
def python_cv(stores):
    return cv_showcase.create_cv(stores, {
        "name": "Layla Hassan",
        "email": "layla@example.com",
        "title": "Senior Python Developer",
        "section": "Technology/IT",
        "bio": "Backend developer using Django and AWS",
        "skills": "python, django, aws",
    })


@pytest.fixture
def marketing_cv(stores):
    return cv_showcase.create_cv(stores, {
        "name": "Omar Fathy",
        "email": "omar@example.com",
        "title": "Marketing Manager",
        "section": "Marketing",
        "bio": "Brand strategy for retail",
    })


def _approved_job(stores, admin, **fields):
    base = {
        "company": "Acme",
        "contact_email": "jobs@acme.example",
        "contact_phone": "0100",
        "description": "Open role",
    }
    job = postings.submit_posting(stores, "jobs", {**base, **fields})
    return postings.approve_posting(stores, "jobs", job["id"], admin)


@pytest.fixture
def python_job_fields():
    return {
        "title": "Senior Python Developer",
        "industry": "Technology",
        "skills": "python, django, aws",
        "description": "Build services with Django on AWS.",
        "requirements": "Docker",
    }


# ===== TESTS: match_jobs_for_cv =====

class TestMatchJobsForCv:

    def test_ranks_best_match_first(self, stores, admin, python_cv, python_job_fields):
        strong = _approved_job(stores, admin, **python_job_fields)
        weak = _approved_job(
            stores, admin,
            title="Java Developer",
            industry="Technology",
            skills="java, spring",
            description="Enterprise backend work",
        )
        _approved_job(
            stores, admin,
            title="Marketing Manager",
            industry="Retail",
            skills="marketing, strategy",
            description="Lead our brand.",
        )

        results = matching.match_jobs_for_cv(stores, python_cv["id"])

        assert [job["id"] for job in results] == [strong["id"], weak["id"]]
        assert results[0]["score"] == 86  # 6 shared of 7 job keywords
        assert results[1]["score"] == 33  # 2 shared of 6 CV keywords

    def test_scores_always_exceed_threshold(self, stores, admin, python_cv, python_job_fields):
        _approved_job(stores, admin, **python_job_fields)
        _approved_job(stores, admin, title="Java Developer", industry="Technology", skills="java")

        for job in matching.match_jobs_for_cv(stores, python_cv["id"]):
            assert job["score"] > 30

    def test_custom_threshold_is_exclusive(self, stores, admin, python_cv):
        _approved_job(
            stores, admin,
            title="Java Developer",
            industry="Technology",
            skills="java, spring",
            description="Enterprise backend work",
        )
        assert matching.match_jobs_for_cv(stores, python_cv["id"], threshold=33) == []
        assert len(matching.match_jobs_for_cv(stores, python_cv["id"], threshold=32)) == 1

    def test_hidden_jobs_are_not_matched(self, stores, admin, python_cv, python_job_fields):
        pending = postings.submit_posting(stores, "jobs", {
            **python_job_fields,
            "company": "Acme",
            "contact_email": "jobs@acme.example",
            "contact_phone": "0100",
        })
        rejected = postings.submit_posting(stores, "jobs", {
            **python_job_fields,
            "company": "Acme",
            "contact_email": "jobs@acme.example",
            "contact_phone": "0100",
        })
        postings.reject_posting(stores, "jobs", rejected["id"], admin)

        ids = [job["id"] for job in matching.match_jobs_for_cv(stores, python_cv["id"])]
        assert pending["id"] not in ids
        assert rejected["id"] not in ids

    def test_equal_scores_keep_stored_order(self, stores, admin, python_cv, python_job_fields):
        first = _approved_job(stores, admin, **python_job_fields)
        second = _approved_job(stores, admin, **python_job_fields)

        results = matching.match_jobs_for_cv(stores, python_cv["id"])
        assert [job["id"] for job in results] == [first["id"], second["id"]]

    def test_missing_cv(self, stores):
        with pytest.raises(NotFound):
            matching.match_jobs_for_cv(stores, 999)


# ===== TESTS: match_cvs_for_job =====

class TestMatchCvsForJob:

    def test_returns_fitting_cvs_only(self, stores, admin, python_cv, marketing_cv, python_job_fields):
        job = _approved_job(stores, admin, **python_job_fields)

        results = matching.match_cvs_for_job(stores, job["id"])

        assert [cv["id"] for cv in results] == [python_cv["id"]]
        assert results[0]["score"] == 100

    def test_missing_job(self, stores):
        with pytest.raises(NotFound):
            matching.match_cvs_for_job(stores, 42)
