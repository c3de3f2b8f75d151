"""JSON form of resolved orgweave documents.

A node becomes a dict carrying a ``_type`` discriminator plus its fields.
Tuples become lists and the ``meta``/``footnotes`` mappings of a Document
stay objects keyed by label. Deserialization turns lists back into tuples,
so a round trip gives an equal Document.

Keys are sorted, so the same document always gives the same JSON text.

Example:
    from orgweave import parse
    from orgweave.serialization import to_json, from_json

    doc = parse("* Notes\\nSee [[https://orgmode.org][the manual]].")
    assert from_json(to_json(doc)) == doc

"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from typing import Any

from orgweave.nodes import (
    Attr,
    BlockQuote,
    BulletList,
    Code,
    CodeBlock,
    DefinitionItem,
    DefinitionList,
    Div,
    Document,
    Emphasis,
    Header,
    HorizontalRule,
    Image,
    LineBreak,
    Link,
    ListItem,
    MetaInlines,
    MetaList,
    Note,
    OrderedList,
    Para,
    Plain,
    RawBlock,
    SoftBreak,
    Span,
    Strikethrough,
    Strong,
    Table,
    Text,
    Underline,
    Verbatim,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        Attr,
        BlockQuote,
        BulletList,
        Code,
        CodeBlock,
        DefinitionItem,
        DefinitionList,
        Div,
        Document,
        Emphasis,
        Header,
        HorizontalRule,
        Image,
        LineBreak,
        Link,
        ListItem,
        MetaInlines,
        MetaList,
        Note,
        OrderedList,
        Para,
        Plain,
        RawBlock,
        SoftBreak,
        Span,
        Strikethrough,
        Strong,
        Table,
        Text,
        Underline,
        Verbatim,
    )
}


# Fields holding label-keyed mappings rather than nodes
_MAPPING_FIELDS: dict[str, tuple[str, ...]] = {"Document": ("meta", "footnotes")}


def to_dict(node: Any) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes and attributes.

    Args:
        node: Any orgweave node, Attr or Document.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize_value(item) for key, item in value.items()}
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Any:
    """Reconstruct a typed node from a dict.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)
    if not isinstance(type_name, str):
        msg = f"Invalid '_type' field: {type_name!r}"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        raw = data[f.name]
        if f.name in _MAPPING_FIELDS.get(type_name, ()):
            # Keys are user labels; a key named "_type" is still just a label
            kwargs[f.name] = {key: _deserialize_value(item) for key, item in raw.items()}
        else:
            kwargs[f.name] = _deserialize_value(raw)
    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        if "_type" in value:
            return from_dict(value)
        return {key: _deserialize_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
