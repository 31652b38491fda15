"""Tests for JobDAO / BaseDAO against an in-memory SQLite store."""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from jobboard.dao.job_dao import JobDAO


@pytest.fixture
def dao():
    return JobDAO()


class TestAdd:
    async def test_add_assigns_uuid(self, dao, session):
        job = await dao.add(session, "Backend Developer")

        assert str(uuid.UUID(job.id)) == job.id
        assert job.title == "Backend Developer"
        assert job.created_at is not None

    async def test_add_then_get_by_id(self, dao, session):
        job = await dao.add(session, "Frontend Developer")

        fetched = await dao.get_by_id(session, job.id)

        assert fetched is not None
        assert fetched.id == job.id
        assert fetched.title == "Frontend Developer"

    async def test_title_unique_constraint(self, dao, session):
        await dao.add(session, "Data Engineer")

        with pytest.raises(IntegrityError):
            await dao.add(session, "Data Engineer")


class TestReads:
    async def test_get_all_in_insertion_order(self, dao, session):
        titles = ["Job 1", "Job 2", "Job 3"]
        for title in titles:
            await dao.add(session, title)

        jobs = await dao.get_all(session)

        assert [j.title for j in jobs] == titles

    async def test_get_all_empty(self, dao, session):
        assert await dao.get_all(session) == []

    async def test_get_by_title_exact_match(self, dao, session):
        job = await dao.add(session, "QA Engineer")

        assert (await dao.get_by_title(session, "QA Engineer")).id == job.id
        assert await dao.get_by_title(session, "qa engineer") is None
        assert await dao.get_by_title(session, "QA") is None

    async def test_get_by_id_missing(self, dao, session):
        assert await dao.get_by_id(session, str(uuid.uuid4())) is None

    async def test_get_by_field_requires_filters(self, dao, session):
        with pytest.raises(ValueError, match="at least one filter"):
            await dao.get_by_field(session)


class TestEdit:
    async def test_edit_changes_title_keeps_id(self, dao, session):
        job = await dao.add(session, "Old")

        updated = await dao.edit(session, job.id, "New")

        assert updated.id == job.id
        assert updated.title == "New"
        assert await dao.get_by_title(session, "Old") is None

    async def test_edit_missing_returns_none(self, dao, session):
        assert await dao.edit(session, str(uuid.uuid4()), "New") is None

    async def test_id_is_immutable(self, dao, session):
        job = await dao.add(session, "Fixed")

        with pytest.raises(AttributeError, match="immutable"):
            await dao.update(session, job.id, id="other")

    async def test_unknown_column_rejected(self, dao, session):
        job = await dao.add(session, "Fixed")

        with pytest.raises(AttributeError, match="no column"):
            await dao.update(session, job.id, salary=100)


class TestDelete:
    async def test_delete_returns_record_and_removes_it(self, dao, session):
        job = await dao.add(session, "Temp")

        removed = await dao.delete(session, job.id)

        assert removed.id == job.id
        assert removed.title == "Temp"
        assert await dao.get_by_id(session, job.id) is None

    async def test_delete_missing_returns_none(self, dao, session):
        assert await dao.delete(session, str(uuid.uuid4())) is None

    async def test_none_pk_rejected(self, dao, session):
        with pytest.raises(ValueError, match="pk must not be None"):
            await dao.delete(session, None)
