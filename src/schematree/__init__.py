"""Build JSON Schema documents from an editable tree of property nodes."""

__version__ = "0.1.0"

from schematree.model.ids import IdGenerator, generate_id  # noqa: E402
from schematree.schema.generate import generate_schema  # noqa: E402
from schematree.schema.normalize import normalize_for_type  # noqa: E402
from schematree.schema.parse import parse_schema  # noqa: E402

__all__ = [
    "IdGenerator",
    "__version__",
    "generate_id",
    "generate_schema",
    "normalize_for_type",
    "parse_schema",
]
