from __future__ import annotations

import pytest

from schematree.model.nodes import (
    PROPERTY_TYPES,
    ArrayProperty,
    BooleanProperty,
    IntegerProperty,
    NumberProperty,
    ObjectProperty,
    StringProperty,
)
from schematree.schema.normalize import normalize_for_type


def _string_node() -> StringProperty:
    return StringProperty(
        id="p1",
        key="code",
        required=True,
        title="Code",
        description="Product code",
        min_length=2,
        max_length=8,
        pattern="^[A-Z]+$",
        enum=("AB", "CD"),
    )


def test_switch_to_boolean_purges_string_constraints() -> None:
    node = normalize_for_type(_string_node(), "boolean")

    assert isinstance(node, BooleanProperty)
    for name in ("min_length", "max_length", "pattern", "enum"):
        assert not hasattr(node, name)
    assert node.model_dump(by_alias=True) == {
        "id": "p1",
        "key": "code",
        "required": True,
        "title": "Code",
        "description": "Product code",
        "type": "boolean",
    }


def test_same_type_is_a_no_op() -> None:
    node = _string_node()

    assert normalize_for_type(node, "string") is node


@pytest.mark.parametrize("target", PROPERTY_TYPES)
def test_normalization_is_idempotent(target: str) -> None:
    once = normalize_for_type(_string_node(), target)
    twice = normalize_for_type(once, target)

    assert twice == once
    assert once.type == target


def test_number_bounds_survive_switch_to_integer() -> None:
    node = NumberProperty(id="p2", key="qty", minimum=1, maximum=10)

    switched = normalize_for_type(node, "integer")

    assert isinstance(switched, IntegerProperty)
    assert (switched.minimum, switched.maximum) == (1, 10)


def test_leaving_object_discards_children() -> None:
    node = ObjectProperty(
        id="p3",
        key="address",
        children=(StringProperty(key="street"),),
    )

    switched = normalize_for_type(node, "array")

    assert isinstance(switched, ArrayProperty)
    assert not hasattr(switched, "children")
    assert switched.items is None
    back = normalize_for_type(switched, "object")
    assert back.children == ()


def test_leaving_array_discards_items_and_counts() -> None:
    node = ArrayProperty(
        id="p4",
        key="tags",
        min_items=1,
        unique_items=True,
        items=StringProperty(),
    )

    switched = normalize_for_type(node, "string")

    assert switched.model_dump(exclude_none=True) == {
        "id": "p4",
        "key": "tags",
        "required": False,
        "type": "string",
    }


def test_unknown_type_raises() -> None:
    with pytest.raises(ValueError, match="Unknown property type"):
        normalize_for_type(_string_node(), "date")
