"""ResourceWriter: validate -> persist -> flush -> invalidate, with mocked collaborators."""

from unittest.mock import AsyncMock, MagicMock, call

import pytest

from bookapi.application.dtos.violation import Violation
from bookapi.application.use_cases.resource_writer import ResourceWriter
from bookapi.domain.exceptions import StoreException, ValidationException


@pytest.fixture
def writer_mocks():
    """ResourceWriter with mocked repository, validator and cache, sharing one call log."""
    manager = MagicMock()
    repository = MagicMock()
    repository.flush = AsyncMock()
    repository.remove = AsyncMock()
    validator = MagicMock()
    validator.validate = MagicMock(return_value=[])
    cache = MagicMock()
    cache.invalidate_tags = AsyncMock()
    manager.attach_mock(repository, "repository")
    manager.attach_mock(validator, "validator")
    manager.attach_mock(cache, "cache")
    writer = ResourceWriter(repository, validator, cache, "authorsCache")
    return writer, repository, validator, cache, manager


async def test_create_runs_steps_in_order(writer_mocks) -> None:
    writer, _, _, _, manager = writer_mocks
    entity = object()

    assert await writer.create(entity) is entity

    assert manager.mock_calls == [
        call.validator.validate(entity),
        call.repository.persist(entity),
        call.repository.flush(),
        call.cache.invalidate_tags({"authorsCache"}),
    ]


async def test_update_invalidates_after_flush(writer_mocks) -> None:
    writer, repository, _, cache, _ = writer_mocks
    await writer.update(object())
    repository.flush.assert_awaited_once()
    cache.invalidate_tags.assert_awaited_once_with({"authorsCache"})


async def test_delete_removes_then_invalidates(writer_mocks) -> None:
    writer, repository, validator, cache, manager = writer_mocks
    entity = object()
    await writer.delete(entity)
    assert manager.mock_calls == [
        call.repository.remove(entity),
        call.repository.flush(),
        call.cache.invalidate_tags({"authorsCache"}),
    ]
    validator.validate.assert_not_called()


async def test_violations_abort_before_store_and_cache(writer_mocks) -> None:
    writer, repository, validator, cache, _ = writer_mocks
    violations = [Violation("last_name", "Field required")]
    validator.validate.return_value = violations

    with pytest.raises(ValidationException) as exc_info:
        await writer.create(object())

    assert exc_info.value.violations == violations
    repository.persist.assert_not_called()
    repository.flush.assert_not_awaited()
    cache.invalidate_tags.assert_not_awaited()


async def test_store_failure_skips_invalidation(writer_mocks) -> None:
    writer, repository, _, cache, _ = writer_mocks
    repository.flush.side_effect = StoreException("flush", "unique violation")

    with pytest.raises(StoreException):
        await writer.create(object())
    cache.invalidate_tags.assert_not_awaited()
