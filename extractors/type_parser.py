"""
Type extraction.

A type's table is a run of rows split into groups by header rows (a single
``th`` naming the group: Enum, properties, methods or events).
"""

import logging
from typing import List, Tuple

from bs4 import Tag

from extractors.api_schema import DataType, Element, EnumType, Method, StructType, Type
from extractors.element_parser import child_tags, parse_element, parse_heading, take_one
from extractors.errors import ExtractionError
from extractors.method_parser import NESTED_METHOD_TITLE, parse_inner_event, parse_method

logger = logging.getLogger(__name__)

TYPE_TITLE = 'h3[id^="type-"]'
TYPE_ROWS = f"{TYPE_TITLE} ~ table > tbody > tr"


def _is_header(row: Tag) -> bool:
    return len(child_tags(row, "th")) > 0


def group_rows(rows: List[Tag]) -> List[Tuple[str, List[Tag]]]:
    """
    Split type table rows into ``(header text, member rows)`` groups.

    Raises:
        ExtractionError: A group does not start with exactly one ``th``
    """
    groups: List[Tuple[str, List[Tag]]] = []
    index = 0
    while index < len(rows):
        th = take_one(child_tags(rows[index], "th"), "type header")
        header = th.get_text(strip=True)
        index += 1
        start = index
        while index < len(rows) and not _is_header(rows[index]):
            index += 1
        groups.append((header, rows[start:index]))
    return groups


def _member_body(row: Tag, what: str) -> Tag:
    """The single ``div`` inside the single ``td`` of a methods/events row."""
    td = take_one(child_tags(row, "td"), f"td in {what} row")
    return take_one(child_tags(td, "div"), f"div in {what} row")


def parse_type(type_div: Tag) -> Type:
    """
    Read one type subsection.

    Returns:
        DataType when the type has no table, EnumType when an Enum header is
        present, otherwise a StructType. Events are folded into the struct's
        methods as ``"<event>.<listener>"``.
    """
    name = parse_heading(type_div, TYPE_TITLE)
    rows = type_div.select(TYPE_ROWS)
    if not rows:
        return DataType(name=name)

    properties: List[Element] = []
    optional_properties: List[Element] = []
    methods: List[Method] = []
    events: List[Method] = []

    for header, members in group_rows(rows):
        if header == "Enum":
            return EnumType(name=name)
        elif header == "properties":
            for row in members:
                parsed = parse_element(row)
                if parsed.description is None:
                    raise ExtractionError(f"Property row of {name!r} must have 3 cells")
                element = Element.from_declaration(parsed.type_text, parsed.name)
                if parsed.optional:
                    optional_properties.append(element)
                else:
                    properties.append(element)
        elif header == "methods":
            for row in members:
                methods.append(parse_method(_member_body(row, "methods"), NESTED_METHOD_TITLE))
        elif header == "events":
            for row in members:
                events.append(parse_inner_event(_member_body(row, "events")).as_method())
        else:
            raise ExtractionError(f"Invalid type section {header!r} in {name!r}")

    logger.debug(
        f"Type {name}: {len(properties)} required, {len(optional_properties)} optional, "
        f"{len(methods)} methods, {len(events)} events"
    )
    return StructType(
        name=name,
        properties=properties,
        optional_properties=optional_properties,
        methods=methods + events,
    )
