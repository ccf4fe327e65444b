"""
Extraction error types.

Every structural problem found while reading a documentation page is raised as
an ExtractionError carrying a readable reason. Callers decide whether a failure
skips one child or aborts the page.
"""


class ExtractionError(ValueError):
    """A documentation fragment could not be read into the schema."""


class UnsupportedTypeError(ExtractionError):
    """A free-text type description matched none of the known patterns."""

    def __init__(self, type_text: str):
        self.type_text = type_text
        super().__init__(f"Unsupported type description: {type_text!r}")


class InvalidNameError(ExtractionError):
    """A declared value name contains whitespace."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid value name: {name!r}")


class SectionKindError(ExtractionError):
    """A top-level section marker names an unknown section kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unsupported API section: {kind!r}")
