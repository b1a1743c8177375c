"""Tests for the posting lifecycle: submit, moderate, archive, restore, purge."""

import pytest

from careerhub.core.errors import Forbidden, NotFound, Unauthenticated, ValidationError
from careerhub.services import postings


# ===== TESTS: submit =====

class TestSubmit:

    def test_new_posting_is_pending_and_hidden(self, stores, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields)

        assert job["status"] == "pending"
        assert job["is_active"] is True
        assert job["is_approved"] is False
        assert job["created_at"] == job["updated_at"]
        assert job["posted_by"] is None
        assert postings.list_postings(stores, "jobs") == []

    def test_absent_content_fields_are_stored_empty(self, stores, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields)

        for name in postings.JOBS.content_fields:
            assert name in job
        assert job["experience_level"] is None
        assert stores.jobs.get(job["id"]) == job

    @pytest.mark.parametrize("kind,missing", [
        ("jobs", "contact_phone"),
        ("internships", "duration"),
        ("courses", "type"),
    ])
    def test_required_fields(self, stores, job_fields, internship_fields, course_fields, kind, missing):
        fields = {"jobs": job_fields, "internships": internship_fields, "courses": course_fields}[kind]
        fields = {**fields, missing: "   "}

        with pytest.raises(ValidationError) as exc_info:
            postings.submit_posting(stores, kind, fields)
        assert missing in exc_info.value.message

    def test_kind_defaults(self, stores, internship_fields, course_fields):
        internship = postings.submit_posting(stores, "internships", internship_fields)
        course = postings.submit_posting(stores, "courses", course_fields)

        assert internship["is_paid"] is False
        assert internship["positions"] == 1
        assert course["current_attendees"] == 0
        assert course["is_online"] is False
        assert course["is_featured"] is False

    def test_lifecycle_fields_cannot_be_submitted(self, stores, job_fields):
        job = postings.submit_posting(stores, "jobs", {**job_fields, "status": "approved", "is_approved": True})
        assert job["status"] == "pending"
        assert job["is_approved"] is False

    def test_unknown_field_rejected(self, stores, job_fields):
        with pytest.raises(ValidationError):
            postings.submit_posting(stores, "jobs", {**job_fields, "salary": "lots"})

    def test_logged_in_poster_is_recorded(self, stores, resident, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields, resident)

        assert job["posted_by"] == str(resident.user_id)
        assert job["poster_email"] == resident.email
        assert job["poster_role"] == "user"

    def test_skill_list_is_joined(self, stores, job_fields):
        job = postings.submit_posting(stores, "jobs", {**job_fields, "skills": ["python", " sql ", ""]})
        assert job["skills"] == "python, sql"

    def test_unknown_kind(self, stores, job_fields):
        with pytest.raises(NotFound):
            postings.submit_posting(stores, "gigs", job_fields)


# ===== TESTS: moderation =====

class TestModeration:

    def test_approve_makes_posting_visible(self, stores, admin, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields)

        approved = postings.approve_posting(stores, "jobs", job["id"], admin)

        assert approved["status"] == "approved"
        assert approved["is_approved"] is True
        assert approved["is_active"] is True
        assert [j["id"] for j in postings.list_postings(stores, "jobs")] == [job["id"]]

    def test_approve_twice_is_noop(self, stores, admin, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields)
        first = postings.approve_posting(stores, "jobs", job["id"], admin)
        second = postings.approve_posting(stores, "jobs", job["id"], admin)
        assert first == second

    def test_reject_keeps_row(self, stores, admin, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields)

        rejected = postings.reject_posting(stores, "jobs", job["id"], admin)

        assert rejected["status"] == "rejected"
        assert rejected["is_approved"] is False
        assert stores.jobs.get(job["id"]) is not None
        assert postings.list_postings(stores, "jobs") == []

    def test_moderation_requires_admin(self, stores, resident, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields)

        with pytest.raises(Unauthenticated):
            postings.approve_posting(stores, "jobs", job["id"], None)
        with pytest.raises(Forbidden):
            postings.approve_posting(stores, "jobs", job["id"], resident)
        with pytest.raises(Forbidden):
            postings.reject_posting(stores, "jobs", job["id"], resident)

    def test_approve_missing(self, stores, admin):
        with pytest.raises(NotFound):
            postings.approve_posting(stores, "jobs", 404, admin)

    def test_pending_queue(self, stores, admin, job_fields):
        pending = postings.submit_posting(stores, "jobs", job_fields)
        approved = postings.submit_posting(stores, "jobs", job_fields)
        postings.approve_posting(stores, "jobs", approved["id"], admin)

        queue = postings.list_pending(stores, "jobs", admin)
        assert [job["id"] for job in queue] == [pending["id"]]


# ===== TESTS: get / update =====

class TestGetAndUpdate:

    def test_hidden_posting_visible_to_poster_and_admin_only(self, stores, admin, resident, other_resident, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields, resident)

        assert postings.get_posting(stores, "jobs", job["id"], resident)["id"] == job["id"]
        assert postings.get_posting(stores, "jobs", job["id"], admin)["id"] == job["id"]
        with pytest.raises(NotFound):
            postings.get_posting(stores, "jobs", job["id"], other_resident)
        with pytest.raises(NotFound):
            postings.get_posting(stores, "jobs", job["id"])

    def test_poster_can_edit_content(self, stores, resident, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields, resident)

        updated = postings.update_posting(stores, "jobs", job["id"], {"location": "Cairo"}, resident)

        assert updated["location"] == "Cairo"
        assert updated["status"] == "pending"

    def test_poster_edit_of_approved_posting_goes_back_to_review(self, stores, admin, resident, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields, resident)
        postings.approve_posting(stores, "jobs", job["id"], admin)

        updated = postings.update_posting(stores, "jobs", job["id"], {"salary_range": "Top of market"}, resident)

        assert updated["status"] == "pending"
        assert updated["is_approved"] is False
        assert postings.list_postings(stores, "jobs") == []
        assert [j["id"] for j in postings.list_pending(stores, "jobs", admin)] == [job["id"]]

    def test_admin_edit_keeps_approval(self, stores, admin, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields)
        postings.approve_posting(stores, "jobs", job["id"], admin)

        updated = postings.update_posting(stores, "jobs", job["id"], {"location": "Giza"}, admin)

        assert updated["status"] == "approved"
        assert [j["id"] for j in postings.list_postings(stores, "jobs")] == [job["id"]]

    def test_update_cannot_change_lifecycle(self, stores, resident, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields, resident)
        updated = postings.update_posting(stores, "jobs", job["id"], {"is_approved": True}, resident)
        assert updated["is_approved"] is False

    def test_stranger_cannot_edit(self, stores, resident, other_resident, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields, resident)
        with pytest.raises(Forbidden):
            postings.update_posting(stores, "jobs", job["id"], {"location": "Giza"}, other_resident)

    def test_update_cannot_blank_required_field(self, stores, admin, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields)
        with pytest.raises(ValidationError):
            postings.update_posting(stores, "jobs", job["id"], {"title": ""}, admin)


# ===== TESTS: listing =====

class TestListing:

    def test_jobs_newest_first_internships_in_order(self, stores, admin, job_fields, internship_fields):
        job_ids = []
        internship_ids = []
        for _ in range(3):
            job = postings.submit_posting(stores, "jobs", job_fields)
            postings.approve_posting(stores, "jobs", job["id"], admin)
            job_ids.append(job["id"])
            internship = postings.submit_posting(stores, "internships", internship_fields)
            postings.approve_posting(stores, "internships", internship["id"], admin)
            internship_ids.append(internship["id"])

        assert [j["id"] for j in postings.list_postings(stores, "jobs")] == list(reversed(job_ids))
        assert [i["id"] for i in postings.list_postings(stores, "internships")] == internship_ids

    def test_equality_filters(self, stores, admin, job_fields):
        tech = postings.submit_posting(stores, "jobs", job_fields)
        finance = postings.submit_posting(stores, "jobs", {**job_fields, "industry": "Finance"})
        for job in (tech, finance):
            postings.approve_posting(stores, "jobs", job["id"], admin)

        results = postings.list_postings(stores, "jobs", {"industry": "Finance", "location": ""})
        assert [job["id"] for job in results] == [finance["id"]]

    def test_boolean_filter_coercion(self, stores, admin, internship_fields):
        paid = postings.submit_posting(stores, "internships", {**internship_fields, "is_paid": True})
        unpaid = postings.submit_posting(stores, "internships", internship_fields)
        for internship in (paid, unpaid):
            postings.approve_posting(stores, "internships", internship["id"], admin)

        results = postings.list_postings(stores, "internships", {"is_paid": "true"})
        assert [i["id"] for i in results] == [paid["id"]]

    def test_unknown_filter(self, stores):
        with pytest.raises(ValidationError):
            postings.list_postings(stores, "jobs", {"salary": "high"})

    def test_admin_sees_hidden_postings(self, stores, admin, resident, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields)

        assert [j["id"] for j in postings.list_postings(stores, "jobs", identity=admin)] == [job["id"]]
        assert postings.list_postings(stores, "jobs", identity=resident) == []
        assert postings.list_postings(stores, "jobs", {"status": "pending"}, identity=resident) == []


# ===== TESTS: archive =====

class TestArchive:

    @pytest.fixture
    def approved_job(self, stores, admin, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields)
        return postings.approve_posting(stores, "jobs", job["id"], admin)

    def test_delete_moves_row_to_archive(self, stores, admin, approved_job):
        archived = postings.delete_posting(stores, "jobs", approved_job["id"], admin)

        assert stores.jobs.get(approved_job["id"]) is None
        assert postings.list_postings(stores, "jobs") == []
        assert archived["original_id"] == approved_job["id"]
        assert archived["original_created_at"] == approved_job["created_at"]
        assert archived["original_updated_at"] == approved_job["updated_at"]
        assert archived["removal_reason"] == "Deleted by user"
        assert archived["removed_by"] == admin.email
        assert archived["removed_at"]
        for name in postings.JOBS.content_fields:
            assert archived[name] == approved_job[name]
        assert stores.removed_jobs.count() == 1

    def test_second_delete_is_not_found(self, stores, admin, approved_job):
        postings.delete_posting(stores, "jobs", approved_job["id"], admin)
        with pytest.raises(NotFound):
            postings.delete_posting(stores, "jobs", approved_job["id"], admin)
        assert stores.removed_jobs.count() == 1

    def test_owner_can_delete_own_posting(self, stores, admin, resident, other_resident, job_fields):
        job = postings.submit_posting(stores, "jobs", job_fields, resident)

        with pytest.raises(Forbidden):
            postings.delete_posting(stores, "jobs", job["id"], other_resident)
        with pytest.raises(Unauthenticated):
            postings.delete_posting(stores, "jobs", job["id"], None)

        archived = postings.delete_posting(stores, "jobs", job["id"], resident, reason="Position filled")
        assert archived["removal_reason"] == "Position filled"

    def test_courses_are_deleted_outright(self, stores, admin, course_fields):
        course = postings.submit_posting(stores, "courses", course_fields)

        assert postings.delete_posting(stores, "courses", course["id"], admin) is None
        assert stores.courses.get(course["id"]) is None

    def test_restore_republishes_with_new_id(self, stores, admin, approved_job):
        archived = postings.delete_posting(stores, "jobs", approved_job["id"], admin)

        restored = postings.restore_posting(stores, "jobs", archived["id"], admin)

        assert restored["id"] != approved_job["id"]
        assert restored["status"] == "active"
        assert restored["is_active"] is True
        assert restored["is_approved"] is True
        assert restored["created_at"] == approved_job["created_at"]
        for name in postings.JOBS.content_fields:
            assert restored[name] == archived[name]
        assert stores.removed_jobs.get(archived["id"]) is None
        assert [job["id"] for job in postings.list_postings(stores, "jobs")] == [restored["id"]]

    def test_restore_without_original_timestamp_uses_now(self, stores, admin, approved_job):
        archived = postings.delete_posting(stores, "jobs", approved_job["id"], admin)
        stores.removed_jobs.patch(archived["id"], {"original_created_at": None})

        restored = postings.restore_posting(stores, "jobs", archived["id"], admin)
        assert restored["created_at"] == restored["updated_at"]

    def test_purge(self, stores, admin, approved_job):
        archived = postings.delete_posting(stores, "jobs", approved_job["id"], admin)

        postings.purge_posting(stores, "jobs", archived["id"], admin)

        assert stores.removed_jobs.count() == 0
        with pytest.raises(NotFound):
            postings.purge_posting(stores, "jobs", archived["id"], admin)

    def test_archive_operations_require_admin(self, stores, admin, resident, approved_job):
        archived = postings.delete_posting(stores, "jobs", approved_job["id"], admin)

        with pytest.raises(Forbidden):
            postings.restore_posting(stores, "jobs", archived["id"], resident)
        with pytest.raises(Forbidden):
            postings.purge_posting(stores, "jobs", archived["id"], resident)
        with pytest.raises(Unauthenticated):
            postings.list_archive(stores, "jobs", None)

    def test_courses_have_no_archive(self, stores, admin):
        with pytest.raises(NotFound):
            postings.list_archive(stores, "courses", admin)

    def test_archive_listing_most_recent_first(self, stores, admin, internship_fields):
        ids = []
        for _ in range(3):
            internship = postings.submit_posting(stores, "internships", internship_fields)
            ids.append(postings.delete_posting(stores, "internships", internship["id"], admin)["id"])

        assert [row["id"] for row in postings.list_archive(stores, "internships", admin)] == list(reversed(ids))

    def test_failed_move_leaves_posting_in_place(self, stores, admin, approved_job, monkeypatch):
        def broken_delete(record_id):
            raise RuntimeError("storage unavailable")

        monkeypatch.setattr(stores.jobs, "delete", broken_delete)

        with pytest.raises(RuntimeError):
            postings.delete_posting(stores, "jobs", approved_job["id"], admin)

        assert stores.jobs.get(approved_job["id"]) is not None
        assert stores.removed_jobs.count() == 0
