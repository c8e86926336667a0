from __future__ import annotations

from schematree.model.ids import IdGenerator
from schematree.model.nodes import (
    ArrayProperty,
    FileProperty,
    IntegerProperty,
    NumberProperty,
    ObjectProperty,
    SchemaMetadata,
    StringProperty,
)
from schematree.schema.generate import generate_schema
from schematree.schema.parse import ParsedSchema, parse_schema


def _without_ids(value):
    if isinstance(value, dict):
        return {key: _without_ids(item) for key, item in value.items() if key != "id"}
    if isinstance(value, list):
        return [_without_ids(item) for item in value]
    return value


def _shape(nodes) -> list:
    return _without_ids([node.model_dump(mode="json") for node in nodes])


def test_parse_schema_degenerate_input_returns_empty_tree() -> None:
    for value in (None, "schema", [], {}, {"type": "object"}, {"properties": []}):
        parsed = parse_schema(value)
        assert parsed.properties == ()
        assert parsed.metadata == SchemaMetadata(title="", description="", version="")


def test_parse_schema_reads_properties_in_order_with_required(counter_ids: IdGenerator) -> None:
    schema = {
        "type": "object",
        "title": "User Profile",
        "properties": {
            "username": {"type": "string", "minLength": 3, "maxLength": 20},
            "email": {"type": "string", "pattern": "^[^@]+@[^@]+$"},
            "age": {"type": "integer", "minimum": 18},
        },
        "required": ["email", "username"],
    }

    parsed = parse_schema(schema, id_factory=counter_ids)

    assert [node.key for node in parsed.properties] == ["username", "email", "age"]
    assert [node.required for node in parsed.properties] == [True, True, False]
    assert [node.id for node in parsed.properties] == ["t_fixed_1", "t_fixed_2", "t_fixed_3"]
    username, email, age = parsed.properties
    assert isinstance(username, StringProperty)
    assert (username.min_length, username.max_length) == (3, 20)
    assert email.pattern == "^[^@]+@[^@]+$"
    assert isinstance(age, IntegerProperty)
    assert age.minimum == 18
    assert parsed.metadata == SchemaMetadata(title="User Profile")


def test_parse_schema_recognizes_file_representation() -> None:
    parsed = parse_schema(
        {
            "properties": {
                "resume": {"type": "string", "format": "binary"},
                "email": {"type": "string", "format": "email"},
            }
        }
    )

    resume, email = parsed.properties
    assert isinstance(resume, FileProperty)
    assert isinstance(email, StringProperty)


def test_parse_schema_unknown_or_missing_type_defaults_to_string() -> None:
    parsed = parse_schema(
        {
            "properties": {
                "a": {"type": "null"},
                "b": {},
                "c": {"type": "file"},
                "d": "not a schema",
            }
        }
    )

    assert [node.type for node in parsed.properties] == ["string"] * 4


def test_parse_schema_drops_illegal_and_malformed_constraints() -> None:
    parsed = parse_schema(
        {
            "properties": {
                "flag": {"type": "boolean", "minLength": 2, "minimum": 1},
                "count": {"type": "number", "minimum": "low", "maximum": 9.5, "pattern": "x"},
                "name": {"type": "string", "minLength": -1, "enum": ["a", 1], "maxLength": True},
                "list": {"type": "array", "minItems": 2, "uniqueItems": "yes", "items": "bad"},
            },
            "required": "flag",
        }
    )

    flag, count, name, listing = parsed.properties
    assert flag.model_dump(exclude={"id"}) == {
        "key": "flag",
        "required": False,
        "title": None,
        "description": None,
        "type": "boolean",
    }
    assert isinstance(count, NumberProperty)
    assert count.minimum is None
    assert count.maximum == 9.5
    assert name.min_length is None
    assert name.max_length is None
    assert name.enum is None
    assert isinstance(listing, ArrayProperty)
    assert listing.min_items == 2
    assert listing.unique_items is None
    assert listing.items is None


def test_parse_schema_recurses_into_nested_objects_and_items() -> None:
    parsed = parse_schema(
        {
            "properties": {
                "address": {
                    "type": "object",
                    "properties": {
                        "street": {"type": "string"},
                        "geo": {
                            "type": "object",
                            "properties": {"lat": {"type": "number"}},
                            "required": ["lat"],
                        },
                    },
                    "required": ["street"],
                },
                "contacts": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {"email": {"type": "string"}},
                    },
                },
            }
        }
    )

    address, contacts = parsed.properties
    assert isinstance(address, ObjectProperty)
    street, geo = address.children
    assert street.required is True
    assert isinstance(geo, ObjectProperty)
    assert geo.children[0].key == "lat"
    assert geo.children[0].required is True
    assert isinstance(contacts.items, ObjectProperty)
    assert contacts.items.key == ""
    assert contacts.items.children[0].key == "email"


def test_parse_schema_assigns_fresh_ids_every_time() -> None:
    schema = {"properties": {"a": {"type": "string"}}}

    first = parse_schema(schema).properties[0]
    second = parse_schema(schema).properties[0]

    assert first.id != second.id


def test_generate_then_parse_round_trips_up_to_ids() -> None:
    metadata = SchemaMetadata(title="Profile", description="Account data", version="1.2")
    nodes = (
        StringProperty(
            key="username",
            required=True,
            title="User name",
            min_length=3,
            max_length=20,
            pattern="^[a-z0-9_]+$",
        ),
        StringProperty(key="role", enum=("admin", "staff")),
        NumberProperty(key="score", minimum=0.5, maximum=99.5),
        IntegerProperty(key="age", minimum=18, description="Years"),
        FileProperty(key="avatar", required=True),
        ObjectProperty(
            key="address",
            required=True,
            children=(
                StringProperty(key="street", required=True),
                StringProperty(key="city"),
            ),
        ),
        ArrayProperty(
            key="contacts",
            min_items=1,
            max_items=5,
            unique_items=False,
            items=ObjectProperty(children=(StringProperty(key="email", required=True),)),
        ),
    )

    parsed = parse_schema(generate_schema(nodes, metadata, True))

    assert isinstance(parsed, ParsedSchema)
    assert _shape(parsed.properties) == _shape(nodes)
    assert parsed.metadata == metadata


def test_nested_object_round_trip_keeps_child_order_and_required() -> None:
    parent = ObjectProperty(
        key="person",
        children=(
            StringProperty(key="last", required=True),
            StringProperty(key="first", required=False),
        ),
    )

    (parsed,) = parse_schema(generate_schema([parent])).properties

    assert [child.key for child in parsed.children] == ["last", "first"]
    assert [child.required for child in parsed.children] == [True, False]


def test_array_items_carry_no_key_or_required_flag() -> None:
    tags = ArrayProperty(key="tags", items=StringProperty(key="tag", required=True, min_length=1))

    (parsed,) = parse_schema(generate_schema([tags])).properties

    assert tags.items.key == ""
    assert tags.items.required is False
    assert _shape([parsed]) == _shape([tags])


def test_parse_schema_accepts_integral_float_counts() -> None:
    schema = {
        "properties": {
            "name": {"type": "string", "minLength": 3.0, "maxLength": 2.5},
            "tags": {"type": "array", "minItems": 1.0, "maxItems": -1.0},
        }
    }

    name, tags = parse_schema(schema).properties

    assert name.min_length == 3
    assert isinstance(name.min_length, int)
    assert name.max_length is None
    assert tags.min_items == 1
    assert tags.max_items is None
