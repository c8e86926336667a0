from __future__ import annotations

from schematree.model.nodes import NODE_CLASSES, PropertyBase, PropertyNode, legal_fields


def normalize_for_type(node: PropertyBase, new_type: str) -> PropertyNode:
    """Return ``node`` retyped to ``new_type``, keeping only fields legal for it.

    Universal fields (id, key, required, title, description) always carry
    over. Constraints the new type cannot hold are dropped, not reset, so
    they never serialize again. Leaving ``object`` drops the whole child
    subtree; callers confirm that with the user before calling this.
    """
    if new_type not in NODE_CLASSES:
        raise ValueError(f"Unknown property type: {new_type!r}")
    if node.type == new_type:
        return node

    allowed = legal_fields(new_type)
    carried = {name: value for name, value in node if name in allowed}
    return NODE_CLASSES[new_type](**carried)
