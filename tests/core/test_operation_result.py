"""Operation Result — tests for the success/failure contract.

Tests cover:
    - ok/fail shapes are mutually exclusive
    - to_dict() has exactly success, data, error (category never serialized)
    - Customer payloads and lists serialize with wire names
"""

import pytest

from customer_registry.core.errors import ErrorCategory
from customer_registry.core.operation_result import OperationResult


def test_ok_carries_data_and_no_error():
    result = OperationResult.ok(3)
    assert result.success is True
    assert result.data == 3
    assert result.error is None


def test_fail_carries_error_and_no_data():
    result = OperationResult.fail("Customer not found", ErrorCategory.RESOURCE_NOT_FOUND)
    assert result.success is False
    assert result.data is None
    assert result.error == "Customer not found"
    assert result.category is ErrorCategory.RESOURCE_NOT_FOUND


def test_fail_defaults_to_internal_category():
    assert OperationResult.fail("boom").category is ErrorCategory.INTERNAL


def test_ok_allows_false_and_empty_payloads():
    assert OperationResult.ok(False).to_dict() == {"success": True, "data": False, "error": None}
    assert OperationResult.ok([]).to_dict() == {"success": True, "data": [], "error": None}


def test_success_with_error_is_rejected():
    with pytest.raises(ValueError):
        OperationResult(success=True, data=1, error="nope")


def test_failure_with_data_is_rejected():
    with pytest.raises(ValueError):
        OperationResult(success=False, data=1, error="nope")


def test_failure_without_message_is_rejected():
    with pytest.raises(ValueError):
        OperationResult(success=False)


def test_to_dict_has_exactly_three_keys():
    result = OperationResult.fail("Conflict", ErrorCategory.CONFLICT)
    assert set(result.to_dict()) == {"success", "data", "error"}


def test_to_dict_serializes_customers(make_customer):
    customer = make_customer(id="c-1")
    assert OperationResult.ok(customer).to_dict()["data"]["documentNum"] == "12345678901"
    data = OperationResult.ok([customer, customer]).to_dict()["data"]
    assert [row["id"] for row in data] == ["c-1", "c-1"]
    assert data[0]["dateBirthday"] == "1990-01-01"


def test_category_does_not_affect_equality():
    assert OperationResult.fail("x", ErrorCategory.CONFLICT) == OperationResult.fail("x")
