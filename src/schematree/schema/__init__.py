from .document import (
    SchemaLoadError,
    TreeDocument,
    TreeDocumentError,
    check_schema,
    load_schema_file,
    load_tree_document,
    write_schema_file,
)
from .generate import FILE_SCHEMA, generate_schema
from .normalize import normalize_for_type
from .parse import ParsedSchema, parse_schema

__all__ = [
    "FILE_SCHEMA",
    "ParsedSchema",
    "SchemaLoadError",
    "TreeDocument",
    "TreeDocumentError",
    "check_schema",
    "generate_schema",
    "load_schema_file",
    "load_tree_document",
    "normalize_for_type",
    "parse_schema",
    "write_schema_file",
]
