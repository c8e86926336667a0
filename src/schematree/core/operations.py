from __future__ import annotations

from typing import Sequence

from schematree.model.ids import IdFactory, generate_id
from schematree.model.nodes import (
    ArrayProperty,
    ObjectProperty,
    PropertyBase,
    PropertyNode,
    StringProperty,
)


def add_property(id_factory: IdFactory | None = None) -> StringProperty:
    """Create a fresh, unattached node with the default type."""
    new_id = id_factory or generate_id
    return StringProperty(id=new_id(), key="", required=False)


def update_property(
    nodes: Sequence[PropertyNode],
    node_id: str,
    updated: PropertyNode,
) -> tuple[PropertyNode, ...]:
    if any(node.id == node_id for node in nodes):
        return tuple(updated if node.id == node_id else node for node in nodes)
    return (*nodes, updated)


def delete_property(nodes: Sequence[PropertyNode], node_id: str) -> tuple[PropertyNode, ...]:
    return tuple(node for node in nodes if node.id != node_id)


def add_child(parent: ObjectProperty, child: PropertyNode) -> ObjectProperty:
    return parent.model_copy(update={"children": (*parent.children, child)})


def update_child(parent: ObjectProperty, child_id: str, updated: PropertyNode) -> ObjectProperty:
    children = tuple(updated if child.id == child_id else child for child in parent.children)
    return parent.model_copy(update={"children": children})


def delete_child(parent: ObjectProperty, child_id: str) -> ObjectProperty:
    return parent.model_copy(update={"children": delete_property(parent.children, child_id)})


def find_property(nodes: Sequence[PropertyBase], node_id: str) -> PropertyBase | None:
    for node in nodes:
        if node.id == node_id:
            return node
        nested: Sequence[PropertyBase] = ()
        if isinstance(node, ObjectProperty):
            nested = node.children
        elif isinstance(node, ArrayProperty) and node.items is not None:
            nested = (node.items,)
        found = find_property(nested, node_id)
        if found is not None:
            return found
    return None


def replace_property(
    nodes: Sequence[PropertyNode],
    node_id: str,
    updated: PropertyNode,
) -> tuple[PropertyNode, ...]:
    """Swap the node with ``node_id`` anywhere in the tree, leaving the rest shared."""
    result: list[PropertyNode] = []
    for node in nodes:
        if node.id == node_id:
            result.append(updated)
        elif isinstance(node, ObjectProperty):
            children = replace_property(node.children, node_id, updated)
            result.append(node.model_copy(update={"children": children}))
        elif isinstance(node, ArrayProperty) and node.items is not None:
            (items,) = replace_property((node.items,), node_id, updated)
            result.append(node.model_copy(update={"items": items}))
        else:
            result.append(node)
    return tuple(result)
