"""
Table-row readers shared by every extractor.

A "field" row in the reference docs has a type cell, a name cell (optionally
carrying ``<span class="optional">``) and, usually, a description cell that may
nest further tables for callbacks or method lists.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, TypeVar

from bs4 import Tag

from extractors.errors import ExtractionError

T = TypeVar("T")

OPTIONAL_MARKER = "span.optional"


def take_one(items: Iterable[T], what: str, allow_zero: bool = False) -> Optional[T]:
    """
    Return the only item of ``items``.

    Args:
        items: Candidate matches
        what: Name used in error messages
        allow_zero: Return None instead of raising when nothing matched

    Raises:
        ExtractionError: More than one match, or no match when not allowed
    """
    found: List[T] = []
    for item in items:
        found.append(item)
        if len(found) > 1:
            raise ExtractionError(f"Multiple {what} found")
    if not found:
        if allow_zero:
            return None
        raise ExtractionError(f"No {what} found")
    return found[0]


def child_tags(tag: Tag, name=True) -> List[Tag]:
    """Direct element children of ``tag``, optionally filtered by tag name."""
    return tag.find_all(name, recursive=False)


def nested_tbodies(cell: Tag) -> List[Tag]:
    """Bodies of the tables placed directly inside a description cell."""
    bodies = []
    for table in child_tags(cell, "table"):
        bodies.append(take_one(child_tags(table, "tbody"), "tbody in nested table"))
    return bodies


def parse_heading(container: Tag, title_selector: str) -> str:
    """Text of the single heading matching ``title_selector``."""
    heading = take_one(container.select(title_selector), f"name ({title_selector})")
    return heading.get_text(strip=True)


@dataclass
class ParsedElement:
    """Raw reading of one field row, before type classification."""
    type_text: str
    name: str
    optional: bool
    description: Optional[Tag] = None


def parse_element(row: Tag) -> ParsedElement:
    """
    Read a field row.

    Args:
        row: ``tr`` whose direct children are the type, name and description cells

    Returns:
        ParsedElement with the whitespace-normalized type text

    Raises:
        ExtractionError: Fewer than two cells, or no name text in the name cell
    """
    cells = child_tags(row)
    if len(cells) < 2:
        raise ExtractionError(f"Field row has {len(cells)} cells (expected 2 or 3)")

    description = cells[2] if len(cells) == 3 else None
    type_text = " ".join(s.strip() for s in cells[0].strings if s.strip())

    name_cell = cells[1]
    optional = len(name_cell.select(OPTIONAL_MARKER)) == 1
    fragments = [s for s in name_cell.strings if s.strip()]
    position = 1 if optional else 0
    if len(fragments) <= position:
        raise ExtractionError("Invalid element structure: missing value name")

    return ParsedElement(
        type_text=type_text,
        name=fragments[position].strip(),
        optional=optional,
        description=description,
    )
