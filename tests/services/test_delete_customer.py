"""Delete Customer — tests for lookup-then-delete and bulk deletion.

Tests cover:
    - Deletion by id and by document number returns the removed customer
    - Lookup miss never calls the deletion primitive
    - Removal reporting False is "failed to delete", distinct from "not found"
    - delete_many keeps only successful deletions
"""

from unittest.mock import AsyncMock

from customer_registry.core.errors import ErrorCategory, StorageError
from customer_registry.core.query_spec import CustomerFilter
from customer_registry.services.delete_customer import DeleteCustomer


async def test_delete_by_id(repository, make_customer):
    customer = await repository.create(make_customer(id="a"))
    result = await DeleteCustomer(repository).execute("a")
    assert result.success
    assert result.data == customer
    assert not await repository.exists_by_id("a")


async def test_delete_by_document_number(repository, make_customer):
    await repository.create(make_customer(id="a"))
    result = await DeleteCustomer(repository).execute_by_document_number("12345678901")
    assert result.data.id == "a"
    assert not await repository.exists_by_id("a")


async def test_missing_id_never_calls_remove():
    repo = AsyncMock()
    repo.find_by_id.return_value = None
    result = await DeleteCustomer(repo).execute("zzz")
    assert result.error == "Customer with id zzz not found"
    assert result.category is ErrorCategory.RESOURCE_NOT_FOUND
    repo.delete_by_id.assert_not_awaited()


async def test_missing_document_number_never_calls_remove():
    repo = AsyncMock()
    repo.find_by_field.return_value = None
    result = await DeleteCustomer(repo).execute_by_document_number("00000000000")
    assert result.error == "Customer with document number 00000000000 not found"
    repo.delete_by_document_number.assert_not_awaited()


async def test_removal_false_is_failed_delete(make_customer):
    repo = AsyncMock()
    repo.find_by_id.return_value = make_customer(id="a")
    repo.delete_by_id.return_value = False
    result = await DeleteCustomer(repo).execute("a")
    assert result.error == "Failed to delete customer with id a"
    assert result.category is ErrorCategory.INTEGRITY


async def test_storage_failure(make_customer):
    repo = AsyncMock()
    repo.find_by_id.return_value = make_customer(id="a")
    repo.delete_by_id.side_effect = StorageError("locked", "execute")
    result = await DeleteCustomer(repo).execute("a")
    assert result.error == "Error deleting customer: Storage execute failed: locked"


async def test_unexpected_failure():
    repo = AsyncMock()
    repo.find_by_id.side_effect = RuntimeError("boom")
    result = await DeleteCustomer(repo).execute("a")
    assert result.error == "Unexpected error during customer deletion"


async def test_delete_many_with_no_matches(repository):
    result = await DeleteCustomer(repository).delete_many(CustomerFilter())
    assert result.success
    assert result.data == []


async def test_delete_many_removes_matches(repository, make_customer):
    await repository.create(make_customer(id="a"))
    await repository.create(make_customer(id="b", documentNum="98765432100", email="b@example.com"))
    result = await DeleteCustomer(repository).delete_many(CustomerFilter())
    assert sorted(c.id for c in result.data) == ["a", "b"]
    assert await repository.count(CustomerFilter()) == 0


async def test_delete_many_drops_individual_failures(make_customer):
    a, b = make_customer(id="a"), make_customer(id="b")
    repo = AsyncMock()
    repo.find_all.return_value = [a, b]
    repo.find_by_id.side_effect = lambda customer_id: {"a": a, "b": b}[customer_id]
    repo.delete_by_id.side_effect = lambda customer_id: customer_id == "a"
    result = await DeleteCustomer(repo).delete_many(CustomerFilter())
    assert result.success
    assert result.data == [a]


async def test_delete_many_selection_failure():
    repo = AsyncMock()
    repo.find_all.side_effect = StorageError("down", "query")
    result = await DeleteCustomer(repo).delete_many(CustomerFilter())
    assert result.error == "Error deleting customers: Storage query failed: down"
