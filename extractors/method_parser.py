"""
Method and event extraction.

Argument tables are read row by row; ``function``-typed arguments are
callbacks whose own argument table sits inside the description cell, so the
body reader recurses once per nesting level.
"""

import logging
from typing import List

from bs4 import Tag

from extractors.api_schema import (
    Argument,
    CallbackArgument,
    Element,
    ElementArgument,
    Event,
    Method,
)
from extractors.element_parser import nested_tbodies, parse_element, parse_heading, take_one
from extractors.errors import ExtractionError
from extractors.type_descriptor import CALLBACK_TYPE

logger = logging.getLogger(__name__)

TOP_LEVEL_METHOD_TITLE = "h3"
NESTED_METHOD_TITLE = "h4"
TOP_LEVEL_EVENT_TITLE = 'h3[id^="event-"]'
LISTENER_TITLE = "div.description > div > h4"
EVENT_SUMMARY = "div.summary > code.prettyprint"


def parse_method(container: Tag, title_selector: str) -> Method:
    """
    Read a method subsection.

    Args:
        container: Element holding the heading and its description block
        title_selector: CSS selector of the method heading

    Returns:
        Method with its ordered arguments (empty when there is no argument table)
    """
    name = parse_heading(container, title_selector)
    tbody = take_one(
        container.select(f"{title_selector} ~ div.description > table > tbody"),
        f"argument table for method {name!r}",
        allow_zero=True,
    )
    arguments = parse_method_body(tbody) if tbody is not None else []
    return Method(name=name, arguments=arguments)


def parse_method_body(tbody: Tag) -> List[Argument]:
    """Arguments described by the ``id``-carrying rows of ``tbody``."""
    arguments: List[Argument] = []
    for row in tbody.find_all("tr", recursive=False):
        if not row.has_attr("id"):
            continue
        parsed = parse_element(row)

        if parsed.type_text == CALLBACK_TYPE:
            if parsed.description is None:
                raise ExtractionError(f"No info for callback {parsed.name!r} found")
            body = take_one(
                nested_tbodies(parsed.description),
                f"argument tables for callback {parsed.name!r}",
                allow_zero=True,
            )
            callback_args = parse_method_body(body) if body is not None else []
            arguments.append(CallbackArgument(
                callback=Method(name=parsed.name, arguments=callback_args),
                optional=parsed.optional,
            ))
        else:
            arguments.append(ElementArgument(
                element=Element.from_declaration(parsed.type_text, parsed.name),
                optional=parsed.optional,
            ))
    return arguments


def parse_event(event_div: Tag) -> Event:
    """Top-level event: name from its ``event-`` heading, listener from the nested h4."""
    method = parse_method(event_div, LISTENER_TITLE)
    name = parse_heading(event_div, TOP_LEVEL_EVENT_TITLE)
    return Event(name=name, method=method)


def parse_inner_event(event_div: Tag) -> Event:
    """Event declared inside a type; the name comes from the registration summary."""
    method = parse_method(event_div, NESTED_METHOD_TITLE)
    summary = event_div.select_one(EVENT_SUMMARY)
    if summary is None:
        raise ExtractionError("Invalid event name structure")
    # "onClicked.addListener" -> "onClicked"
    name = summary.get_text().strip().split(".")[0]
    if not name:
        raise ExtractionError("Invalid event code structure")
    logger.debug(f"Parsed nested event {name} ({len(method.arguments)} listener args)")
    return Event(name=name, method=method)
