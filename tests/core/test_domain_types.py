"""Domain Types — verifies field names and sort directions.

Tests:
    - CustomerField resolves Python and wire names, rejects anything else
    - id is not a mutable field
    - SortDirection parses the accepted spellings
"""

import pytest

from customer_registry.core.domain_types import (
    MUTABLE_FIELDS, CustomerField, SortDirection,
)


def test_customer_field_has_five_members():
    assert len(CustomerField) == 5


@pytest.mark.parametrize("name,expected", [
    ("documentNum", CustomerField.DOCUMENT_NUM),
    ("document_num", CustomerField.DOCUMENT_NUM),
    ("dateBirthday", CustomerField.DATE_BIRTHDAY),
    ("email", CustomerField.EMAIL),
    (CustomerField.NAME, CustomerField.NAME),
])
def test_parse_resolves_both_spellings(name, expected):
    assert CustomerField.parse(name) is expected


def test_parse_rejects_unknown_names():
    with pytest.raises(ValueError):
        CustomerField.parse("DocumentNum")


def test_wire_names():
    assert [f.wire_name for f in CustomerField] == [
        "id", "name", "documentNum", "dateBirthday", "email",
    ]


def test_id_is_not_mutable():
    assert CustomerField.ID not in MUTABLE_FIELDS
    assert len(MUTABLE_FIELDS) == 4


@pytest.mark.parametrize("value,expected", [
    (1, SortDirection.ASCENDING),
    (-1, SortDirection.DESCENDING),
    ("ASC", SortDirection.ASCENDING),
    ("descending", SortDirection.DESCENDING),
    (SortDirection.DESCENDING, SortDirection.DESCENDING),
])
def test_sort_direction_parse(value, expected):
    assert SortDirection.parse(value) is expected


@pytest.mark.parametrize("value", [0, 2, "up", True])
def test_sort_direction_rejects_other_values(value):
    with pytest.raises(ValueError):
        SortDirection.parse(value)
