#!/usr/bin/env python3
"""
Schema Builder for extension API reference pages.

Walks the top-level sections of one page (types, properties, methods, events),
hands each section child to the matching extractor and folds the results into
a single Namespace. A malformed type, method or event is logged, recorded as a
failure and skipped; problems in the properties section or an unknown section
kind abort the page.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from extractors.api_schema import Event, Method, Namespace, Property, Type
from extractors.errors import ExtractionError, SectionKindError
from extractors.method_parser import TOP_LEVEL_METHOD_TITLE, parse_event, parse_method
from extractors.property_parser import parse_properties
from extractors.type_parser import parse_type

logger = logging.getLogger(__name__)

PAGE_SECTIONS = "div.api-reference > *"
SECTION_MARKER = "h2"


class SectionKind(str, Enum):
    TYPES = "types"
    PROPERTIES = "properties"
    METHODS = "methods"
    EVENTS = "events"


def parse_section_kind(text: str) -> SectionKind:
    try:
        return SectionKind(text)
    except ValueError:
        raise SectionKindError(text) from None


@dataclass
class ExtractionFailure:
    """One section child that could not be extracted."""
    section: str
    index: int
    reason: str
    heading: Optional[str] = None


@dataclass
class PageExtraction:
    """Extraction result for one page: the schema plus every skipped child."""
    namespace: Namespace
    failures: List[ExtractionFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class SchemaBuilder:
    """Accumulates one page's sections. Build a new instance per page."""

    def __init__(self, name: str):
        self.name = name
        self.types: List[Type] = []
        self.properties: List[Property] = []
        self.methods: List[Method] = []
        self.events: List[Event] = []
        self.failures: List[ExtractionFailure] = []

    def add_child(self, kind: SectionKind, child: Tag, index: int):
        """Extract one section child; properties failures propagate."""
        if kind is SectionKind.PROPERTIES:
            # the latest properties table wins
            self.properties = parse_properties(child)
            return

        try:
            if kind is SectionKind.TYPES:
                self.types.append(parse_type(child))
            elif kind is SectionKind.METHODS:
                self.methods.append(parse_method(child, TOP_LEVEL_METHOD_TITLE))
            elif kind is SectionKind.EVENTS:
                self.events.append(parse_event(child))
        except (ExtractionError, ValidationError) as e:
            heading = child.find(["h3", "h4"])
            failure = ExtractionFailure(
                section=kind.value,
                index=index,
                reason=str(e),
                heading=heading.get_text(strip=True) if heading else None,
            )
            logger.warning(f"{self.name}: skipped {kind.value}[{index}] ({failure.heading}): {e}")
            self.failures.append(failure)

    def feed(self, sections: List[Tag]):
        """
        Dispatch page children section by section.

        Args:
            sections: Direct children of the API reference container, in order

        Raises:
            ExtractionError: A section marker without an id, an unknown section
                kind, or a malformed properties section
        """
        index = 0
        while index < len(sections):
            marker_id = sections[index].get("id")
            if not marker_id:
                raise ExtractionError(f"Invalid API structure in {self.name!r}: section marker without id")
            kind = parse_section_kind(marker_id)
            index += 1
            position = 0
            while index < len(sections) and sections[index].name != SECTION_MARKER:
                self.add_child(kind, sections[index], position)
                position += 1
                index += 1

    def build(self) -> PageExtraction:
        namespace = Namespace.from_sections(
            self.name, self.types, self.properties, self.methods, self.events
        )
        return PageExtraction(namespace=namespace, failures=list(self.failures))


def build_namespace(name: str, markup: str, parser: str = "html.parser") -> PageExtraction:
    """
    Extract the schema of one API page.

    Args:
        name: Namespace identifier (e.g. "tabs")
        markup: Raw page HTML
        parser: BeautifulSoup tree builder

    Returns:
        PageExtraction with the namespace and the skipped children
    """
    soup = BeautifulSoup(markup, parser)
    builder = SchemaBuilder(name)
    builder.feed(soup.select(PAGE_SECTIONS))
    extraction = builder.build()
    ns = extraction.namespace
    logger.info(
        f"{name}: {len(ns.types)} types, {len(ns.properties)} properties, "
        f"{len(ns.methods)} methods, {len(extraction.failures)} skipped"
    )
    return extraction
