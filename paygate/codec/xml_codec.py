"""
XML wire codec for gateway requests and responses.

Wire format:
  - root element ``<xml>``, one child element per field
  - numbers as plain text nodes
  - text wrapped in CDATA (escaped text when it contains ``]]>`` or a CR)
  - no attributes, no namespaces, no XML declaration, UTF-8

Decoding never resolves entities, never loads a DTD and never touches the
network. Documents that declare a DOCTYPE are rejected outright.
"""

from typing import Any, Dict, List, Union

from lxml import etree

from paygate.exceptions import InvalidArgumentError, ProtocolError
from paygate.models.enums import ValueKind
from paygate.models.params import ParameterMap, ParamValue

ROOT_TAG = "xml"
_CDATA_END = "]]>"
# Parsers normalise CR inside CDATA; escaped text keeps it as &#13;
_ESCAPE_MARKERS = (_CDATA_END, "\r")


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        load_dtd=False,
        dtd_validation=False,
        no_network=True,
        huge_tree=False,
        remove_comments=True,
        remove_pis=True,
    )


def _append_value(parent: etree._Element, key: str, value: ParamValue) -> None:
    if value.kind is ValueKind.COMPOSITE:
        if isinstance(value.value, ParameterMap):
            child = _new_child(parent, key)
            for name, item in value.value.items():
                _append_value(child, name, item)
        else:
            # Repeated elements share the parent's field name
            for item in value.value:
                _append_value(parent, key, item)
        return

    child = _new_child(parent, key)
    text = value.text()
    try:
        if value.kind is ValueKind.NUMBER or any(marker in text for marker in _ESCAPE_MARKERS):
            child.text = text
        else:
            child.text = etree.CDATA(text)
    except ValueError as e:
        # lxml refuses control characters that XML 1.0 cannot represent
        raise InvalidArgumentError(f"Convert to XML error: field {key!r}: {e}") from e


def _new_child(parent: etree._Element, key: str) -> etree._Element:
    try:
        return etree.SubElement(parent, key)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid XML element name: {key!r}") from e


def encode(params: Any) -> bytes:
    """
    Serialize a parameter map into the gateway's XML document.

    Raises:
        InvalidArgumentError: If ``params`` is not a mapping, is empty, or
            holds a field name that is not a valid XML element name.
    """
    fields = ParameterMap.of(params)
    if len(fields) == 0:
        raise InvalidArgumentError("Convert to XML error: empty parameter map")

    root = etree.Element(ROOT_TAG)
    for key, value in fields.items():
        _append_value(root, key, value)

    return etree.tostring(root, encoding="utf-8", xml_declaration=False)


class _Repeated(list):
    """Marks values collected from repeated sibling elements."""


def _decode_element(element: etree._Element) -> Any:
    children = [child for child in element if isinstance(child.tag, str)]
    if not children:
        return element.text or ""

    grouped: Dict[str, Union[Any, List[Any]]] = {}
    for child in children:
        value = _decode_element(child)
        if child.tag in grouped:
            existing = grouped[child.tag]
            if isinstance(existing, _Repeated):
                existing.append(value)
            else:
                grouped[child.tag] = _Repeated([existing, value])
        else:
            grouped[child.tag] = value

    return {
        tag: tuple(value) if isinstance(value, _Repeated) else value
        for tag, value in grouped.items()
    }


def decode(body: Union[bytes, str, None]) -> ParameterMap:
    """
    Parse a gateway XML document into a ParameterMap.

    Leaf elements become text values (CDATA unwrapped, text kept exactly).
    Elements with children become nested maps; repeated sibling names
    become tuples.

    Raises:
        InvalidArgumentError: If ``body`` is None or empty.
        ProtocolError: If the document is malformed or declares a DTD.
    """
    if not body:
        raise InvalidArgumentError("Convert to parameters error: empty XML")
    if isinstance(body, str):
        body = body.encode("utf-8")
    if not isinstance(body, (bytes, bytearray)):
        raise InvalidArgumentError(f"Convert to parameters error: unsupported body type {type(body).__name__}")

    try:
        root = etree.fromstring(bytes(body), parser=_make_parser())
    except etree.XMLSyntaxError as e:
        raise ProtocolError(f"Malformed XML from gateway: {e}") from e

    docinfo = root.getroottree().docinfo
    if docinfo.doctype or docinfo.internalDTD is not None:
        raise ProtocolError("XML documents with a DOCTYPE are not accepted")

    decoded = _decode_element(root)
    if not isinstance(decoded, dict):
        # Root without child elements carries no fields
        return ParameterMap()
    return ParameterMap(decoded)
