"""Domain Types — tests for pagination defaults and store key enums."""

from perspective.core.domain_types import (
    DEFAULT_LIMIT, DEFAULT_PAGE, SortField, UserProperty,
)


def test_pagination_defaults():
    assert DEFAULT_PAGE == 1
    assert DEFAULT_LIMIT == 10


def test_sort_field_values_are_document_keys():
    assert SortField.CREATED_AT.value == "createdAt"
    assert SortField("name") is SortField.NAME


def test_user_property_excludes_id():
    assert "id" not in {p.value for p in UserProperty}
