"""eVatR XML-RPC response decoder.

The service answers with an XML-RPC parameter list in which every logical field is
a two-element array ``[name, value]``:

    <params>
      <param><value><array><data>
        <value><string>ErrorCode</string></value>
        <value><string>200</string></value>
      </data></array></value></param>
      ...
    </params>

Decoding happens in three steps:
  1. deserialize_xml: XML text → generic tree of mappings/lists/strings (lxml).
     A tag occurring once stays a scalar, a repeated tag becomes a list.
  2. as_list: the one place where that single-item shorthand is normalized.
  3. decode_envelope: tree → typed Envelope of FieldPair(name, value).

Everything after step 1 is total: a missing or malformed envelope yields no value,
never an exception.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

from lxml import etree

from evatr.errors import DecodeError

# XML-RPC scalar type tags accepted for a field value
_SCALAR_TAGS = ("string", "i4", "int")


# ---------------------------------------------------------------------------
# XML → generic tree
# ---------------------------------------------------------------------------


def _local_name(el: etree._Element) -> str:
    return etree.QName(el).localname


def _element_to_tree(el: etree._Element) -> Any:
    children = [child for child in el if isinstance(child.tag, str)]  # skip comments/PIs
    if not children:
        return el.text or ""

    tree: dict[str, Any] = {}
    for child in children:
        key = _local_name(child)
        value = _element_to_tree(child)
        if key not in tree:
            tree[key] = value
        elif isinstance(tree[key], list):
            tree[key].append(value)
        else:
            tree[key] = [tree[key], value]
    return tree


def deserialize_xml(text: str) -> dict[str, Any]:
    """Parse XML text into ``{root_tag: tree}``.

    Raises:
        DecodeError: The text is not well-formed XML.
    """
    # encoding= overrides the declaration; the text is already decoded
    parser = etree.XMLParser(resolve_entities=False, no_network=True, encoding="utf-8")
    try:
        root = etree.fromstring(text.encode("utf-8"), parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise DecodeError(f"Response is not well-formed XML: {exc}") from exc
    if root is None:
        raise DecodeError("Response is empty")
    return {_local_name(root): _element_to_tree(root)}


# ---------------------------------------------------------------------------
# Typed envelope
# ---------------------------------------------------------------------------


class FieldPair(NamedTuple):
    name: str
    value: str | None


@dataclass(frozen=True)
class Envelope:
    """Ordered name/value pairs of an eVatR response."""

    pairs: tuple[FieldPair, ...] = ()

    def get(self, name: str) -> str | None:
        """Return the value of the first pair called ``name``, or None."""
        for pair in self.pairs:
            if pair.name == name:
                return pair.value
        return None

    def names(self) -> list[str]:
        return [pair.name for pair in self.pairs]


def as_list(node: Any) -> list[Any]:
    """Normalize the single-item shorthand: None → [], x → [x], list → list."""
    if node is None:
        return []
    if isinstance(node, list):
        return node
    return [node]


def _child(node: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def _scalar(node: Any) -> str | None:
    """Value of an XML-RPC <value>: typed child or bare text."""
    if isinstance(node, str):
        return node
    if isinstance(node, Mapping):
        for tag in _SCALAR_TAGS:
            if isinstance(node.get(tag), str):
                return node[tag]
    return None


def _decode_pair(param: Any) -> FieldPair | None:
    values = as_list(_child(param, "value", "array", "data", "value"))
    if len(values) < 2:
        return None
    name = _scalar(values[0])
    if name is None:
        return None
    return FieldPair(name=name, value=_scalar(values[1]))


def decode_envelope(tree: Any) -> Envelope:
    """Decode the generic tree of an eVatR response into an Envelope."""
    params = _child(tree, "params")
    if params is None:
        params = _child(tree, "methodResponse", "params")

    pairs = [
        pair
        for pair in (_decode_pair(param) for param in as_list(_child(params, "param")))
        if pair is not None
    ]
    return Envelope(pairs=tuple(pairs))


def extract_field(tree: Any, field_name: str) -> str | None:
    """Return the value of ``field_name`` from a deserialized response, or None."""
    return decode_envelope(tree).get(field_name)
