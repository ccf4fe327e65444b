"""
Top-level property extraction.

Scalar properties are listed with their value in the type column, so numeric
text is mapped back to ``integer`` / ``number``. Object-valued properties may
expose methods of their own; when that nested table cannot be read as methods
the property is kept as an opaque immediate value instead of failing the page.
"""

import logging
from typing import List

from bs4 import Tag

from extractors.api_schema import ImmediateProperty, Method, ObjectProperty, Property
from extractors.element_parser import child_tags, nested_tbodies, parse_element, take_one
from extractors.errors import ExtractionError
from extractors.method_parser import parse_method
from extractors.type_descriptor import OPAQUE_TYPE

logger = logging.getLogger(__name__)

PROPERTY_METHOD_TITLE = 'h3[id^="method-"]'


def normalize_property_type(type_text: str) -> str:
    """``"1.5"`` -> ``number``, ``"42"`` -> ``integer``, names pass through."""
    first = type_text[:1]
    if first and not (first.isascii() and first.isalpha()):
        return "number" if "." in type_text else "integer"
    return type_text


def method_table(name: str, description: Tag) -> Tag:
    """
    Body of the single method table inside an object property's description cell.

    Raises:
        ExtractionError: No nested table, or more than one
    """
    return take_one(nested_tbodies(description), f"method table for property {name!r}")


def parse_methods(tbody: Tag) -> List[Method]:
    return [parse_method(row, PROPERTY_METHOD_TITLE) for row in child_tags(tbody, "tr")]


def parse_properties(prop_table: Tag) -> List[Property]:
    """
    Read the namespace properties table.

    Raises:
        ExtractionError: Malformed table or row, an optional property, or an
            object property without a nested table
    """
    tbody = take_one(child_tags(prop_table), "tbody in Properties")
    result: List[Property] = []

    for row in child_tags(tbody):
        parsed = parse_element(row)
        if parsed.optional:
            raise ExtractionError(f"Properties cannot be optional ({parsed.name!r})")

        if parsed.type_text != OPAQUE_TYPE:
            result.append(ImmediateProperty(
                name=parsed.name,
                type_name=normalize_property_type(parsed.type_text),
            ))
            continue

        if parsed.description is None:
            result.append(ImmediateProperty(name=parsed.name, type_name=parsed.type_text))
            continue

        methods_body = method_table(parsed.name, parsed.description)
        try:
            methods = parse_methods(methods_body)
        except ExtractionError as e:
            logger.debug(f"Keeping {parsed.name} as opaque property: {e}")
            result.append(ImmediateProperty(name=parsed.name, type_name=parsed.type_text))
            continue

        result.append(ObjectProperty(name=parsed.name, methods=methods))

    return result
