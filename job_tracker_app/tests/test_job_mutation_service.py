"""
Test create and partial-update semantics, including the read-only switch.
"""
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from job_tracker_app.backend.exceptions import (
    ForbiddenError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)
from job_tracker_app.backend.models.db.job_application import JobApplication
from job_tracker_app.backend.services.job_mutation import JobMutationService


@pytest.fixture
def service(test_db_session, test_settings):
    return JobMutationService(test_db_session, test_settings)


def count_jobs(session):
    return session.query(JobApplication).count()


class TestCreateJob:

    def test_defaults_applied(self, service):
        job = service.create_job({"company": "Acme", "position": "Eng"})

        assert job.id
        assert job.position_type == "Unknown"
        assert job.location == "Unknown"
        assert job.link == ""
        assert job.status == "Applied"
        assert job.date_applied is None
        assert job.created_at is not None

    def test_all_fields(self, service):
        job = service.create_job({
            "company": "Initech",
            "position": "Developer",
            "positionType": "Full Time",
            "location": "Austin, TX",
            "link": "initech.com/careers/42",
            "dateApplied": "2024-03-01",
            "status": "Interview",
        })

        assert job.position_type == "Full Time"
        assert job.location == "Austin, TX"
        assert job.link == "https://initech.com/careers/42"
        assert job.date_applied == date(2024, 3, 1)
        assert job.status == "Interview"

    def test_ids_are_unique(self, service):
        first = service.create_job({"company": "A", "position": "Eng"})
        second = service.create_job({"company": "A", "position": "Eng"})
        assert first.id != second.id

    @pytest.mark.parametrize("payload", [
        {"company": "Acme"},
        {"position": "Eng"},
        {"company": "", "position": "Eng"},
        {"company": "Acme", "position": "   "},
        {"company": None, "position": "Eng"},
        {},
        None,
    ])
    def test_missing_required_fields(self, service, test_db_session, payload):
        with pytest.raises(ValidationError):
            service.create_job(payload)
        assert count_jobs(test_db_session) == 0

    @pytest.mark.parametrize("payload", [
        {"company": "Acme", "position": "Eng", "positionType": "Intern"},
        {"company": "Acme", "position": "Eng", "status": "Ghosted"},
        {"company": "Acme", "position": "Eng", "link": "not a url"},
        {"company": "Acme", "position": "Eng", "salary": 100},
    ])
    def test_invalid_fields(self, service, test_db_session, payload):
        with pytest.raises(ValidationError):
            service.create_job(payload)
        assert count_jobs(test_db_session) == 0

    def test_read_only_rejects_valid_payload(self, make_settings, test_db_session):
        service = JobMutationService(test_db_session, make_settings(read_only=True))

        with pytest.raises(ForbiddenError):
            service.create_job({"company": "Acme", "position": "Eng"})
        assert count_jobs(test_db_session) == 0

    def test_read_only_checked_before_validation(self, make_settings, test_db_session):
        service = JobMutationService(test_db_session, make_settings(demo_mode=True))

        with pytest.raises(ForbiddenError):
            service.create_job({})

    def test_store_failure_rolls_back(self, service, monkeypatch):
        def broken():
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(service.db, "commit", broken)

        with pytest.raises(TransientStoreError):
            service.create_job({"company": "Acme", "position": "Eng"})


class TestUpdateJob:

    @pytest.fixture
    def existing(self, service):
        return service.create_job({
            "company": "Acme",
            "position": "Eng",
            "positionType": "Contractor",
            "location": "Remote",
            "link": "https://acme.test/jobs/1",
            "dateApplied": "2024-02-02",
        })

    def test_changes_only_supplied_field(self, service, existing):
        before = {
            "company": existing.company,
            "position": existing.position,
            "position_type": existing.position_type,
            "location": existing.location,
            "link": existing.link,
            "date_applied": existing.date_applied,
            "created_at": existing.created_at,
        }

        job = service.update_job(existing.id, {"status": "Offer"})

        assert job.status == "Offer"
        for field, value in before.items():
            assert getattr(job, field) == value

    def test_multiple_fields(self, service, existing):
        job = service.update_job(existing.id, {"company": "Acme Corp", "location": "Berlin"})
        assert job.company == "Acme Corp"
        assert job.location == "Berlin"
        assert job.position == "Eng"

    def test_empty_payload_rejected(self, service, existing):
        with pytest.raises(ValidationError):
            service.update_job(existing.id, {})
        with pytest.raises(ValidationError):
            service.update_job(existing.id, None)
        assert service.db.get(JobApplication, existing.id).company == "Acme"

    @pytest.mark.parametrize("payload", [
        {"company": ""},
        {"company": None},
        {"position": None},
        {"status": None},
        {"positionType": None},
        {"location": None},
        {"status": "Hired"},
        {"id": "another-id"},
        {"createdAt": "2020-01-01T00:00:00"},
        {"link": "not a url"},
    ])
    def test_invalid_payload_leaves_record_untouched(self, service, existing, payload):
        with pytest.raises(ValidationError):
            service.update_job(existing.id, payload)

        job = service.db.get(JobApplication, existing.id)
        assert job.company == "Acme"
        assert job.status == "Applied"
        assert job.link == "https://acme.test/jobs/1"

    def test_date_applied_can_be_cleared(self, service, existing):
        job = service.update_job(existing.id, {"dateApplied": None})
        assert job.date_applied is None

    def test_null_link_becomes_empty(self, service, existing):
        job = service.update_job(existing.id, {"link": None})
        assert job.link == ""

    def test_link_scheme_assumed(self, service, existing):
        job = service.update_job(existing.id, {"link": "example.com/apply"})
        assert job.link == "https://example.com/apply"

    def test_unknown_id(self, service):
        with pytest.raises(NotFoundError):
            service.update_job("missing", {"status": "Offer"})

    def test_read_only_rejects_update(self, make_settings, test_db_session, existing):
        read_only = JobMutationService(test_db_session, make_settings(read_only=True))

        with pytest.raises(ForbiddenError):
            read_only.update_job(existing.id, {"status": "Offer"})
        assert test_db_session.get(JobApplication, existing.id).status == "Applied"
