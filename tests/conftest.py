from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def counter_ids():
    from schematree.model.ids import IdGenerator

    return IdGenerator(prefix="t", session="fixed")


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    project_dir = tmp_path / "project"
    project_dir.mkdir(parents=True)
    (project_dir / "schema").mkdir()

    (project_dir / "schematree.yaml").write_text(
        """
version: v1
include_metadata: true
key_editable: true
type_labels:
  string: Text
  boolean: Yes/No
  object: Form
  array: List
""".strip()
        + "\n",
        encoding="utf-8",
    )

    (project_dir / "tree.yaml").write_text(
        """
metadata:
  title: User Profile
  description: Account holder details
  version: "1.0.0"
properties:
  - key: username
    type: string
    required: true
    minLength: 3
    maxLength: 20
  - key: age
    type: integer
    minimum: 18
  - key: avatar
    type: file
  - key: address
    type: object
    required: true
    children:
      - key: street
        required: true
      - key: city
  - key: tags
    type: array
    uniqueItems: true
    items:
      type: string
      enum: [admin, staff]
""".strip()
        + "\n",
        encoding="utf-8",
    )

    (project_dir / "schema" / "profile.schema.json").write_text(
        """
{
  "type": "object",
  "title": "User Profile",
  "properties": {
    "username": { "type": "string", "minLength": 3, "maxLength": 20 },
    "email": { "type": "string", "pattern": "^[^@]+@[^@]+$" },
    "age": { "type": "integer", "minimum": 18 },
    "resume": { "type": "string", "format": "binary" }
  },
  "required": ["username", "email"]
}
""".strip()
        + "\n",
        encoding="utf-8",
    )

    return project_dir
