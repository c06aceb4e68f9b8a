"""
Tests for CompanyRepository against the seeded database.
"""
import pytest

from jobly.core.exceptions import (
    BadRequestException,
    CompanyNotFoundException,
    DuplicateCompanyException,
)
from jobly.repositories import CompanyRepository

repo = CompanyRepository()

NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "New Description",
    "numEmployees": 1,
    "logoUrl": "http://new.img",
}


class TestCreate:
    async def test_works(self, db_session):
        company = await repo.create(db_session, NEW_COMPANY)

        assert company == NEW_COMPANY
        assert (await repo.get(db_session, "new"))["jobs"] == []

    async def test_duplicate_handle(self, db_session):
        await repo.create(db_session, NEW_COMPANY)

        with pytest.raises(DuplicateCompanyException):
            await repo.create(db_session, {**NEW_COMPANY, "name": "Other"})

    async def test_duplicate_name(self, db_session):
        with pytest.raises(DuplicateCompanyException):
            await repo.create(db_session, {**NEW_COMPANY, "name": "C1"})


class TestFindAll:
    async def test_no_filter(self, db_session):
        companies = await repo.find_all(db_session)

        assert [c["handle"] for c in companies] == ["c1", "c2", "c3"]
        assert companies[0] == {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }

    async def test_name_is_case_insensitive(self, db_session):
        companies = await repo.find_all(db_session, name="c2")

        assert [c["handle"] for c in companies] == ["c2"]

    async def test_min_employees(self, db_session):
        companies = await repo.find_all(db_session, min_employees=2)

        assert [c["handle"] for c in companies] == ["c2", "c3"]

    async def test_employee_range(self, db_session):
        companies = await repo.find_all(db_session, min_employees=2, max_employees=2)

        assert [c["handle"] for c in companies] == ["c2"]

    async def test_no_match(self, db_session):
        assert await repo.find_all(db_session, name="nope") == []

    async def test_min_greater_than_max(self, db_session):
        with pytest.raises(BadRequestException):
            await repo.find_all(db_session, min_employees=20, max_employees=10)


class TestGet:
    async def test_with_jobs(self, db_session, job_ids):
        company = await repo.get(db_session, "c1")

        assert company["handle"] == "c1"
        assert company["jobs"] == [
            {"id": job_ids[0], "title": "title-1", "salary": 50000, "equity": "0"},
            {"id": job_ids[1], "title": "title-2", "salary": 60000, "equity": "0.01"},
        ]

    async def test_without_jobs(self, db_session):
        assert (await repo.get(db_session, "c3"))["jobs"] == []

    async def test_not_found(self, db_session):
        with pytest.raises(CompanyNotFoundException) as exc_info:
            await repo.get(db_session, "nope")

        assert exc_info.value.message == "No company: nope"


class TestUpdate:
    async def test_works(self, db_session):
        company = await repo.update(
            db_session, "c1", {"name": "New", "numEmployees": 10}
        )

        assert company == {
            "handle": "c1",
            "name": "New",
            "description": "Desc1",
            "numEmployees": 10,
            "logoUrl": "http://c1.img",
        }

    async def test_null_fields(self, db_session):
        company = await repo.update(
            db_session, "c1", {"numEmployees": None, "logoUrl": None}
        )

        assert company["numEmployees"] is None
        assert company["logoUrl"] is None

    async def test_not_found(self, db_session):
        with pytest.raises(CompanyNotFoundException):
            await repo.update(db_session, "nope", {"name": "X"})

    async def test_no_data(self, db_session):
        with pytest.raises(BadRequestException):
            await repo.update(db_session, "c1", {})

    async def test_name_taken(self, db_session):
        with pytest.raises(DuplicateCompanyException):
            await repo.update(db_session, "c1", {"name": "C2"})


class TestRemove:
    async def test_cascades_to_jobs(self, db_session):
        await repo.remove(db_session, "c1")

        with pytest.raises(CompanyNotFoundException):
            await repo.get(db_session, "c1")

        jobs = await repo.fetch_all(
            db_session, "SELECT id FROM jobs WHERE company_handle = 'c1'"
        )
        assert jobs == []

    async def test_not_found(self, db_session):
        with pytest.raises(CompanyNotFoundException):
            await repo.remove(db_session, "nope")
