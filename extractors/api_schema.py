"""
Typed schema for one extension API namespace.

Closed alternatives (type shapes, property kinds, argument kinds) are
discriminated unions on a ``kind`` literal so they serialize cleanly and can be
matched on by downstream generators. All models are frozen once built.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from extractors.errors import InvalidNameError
from extractors.type_descriptor import classify_type


class SchemaModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# =========================
#  Fields and arguments
# =========================
class Element(SchemaModel):
    """A named, typed value: struct field or plain method argument."""
    name: str
    type_name: str
    is_array: bool = False

    @classmethod
    def from_declaration(cls, type_text: str, name: str) -> "Element":
        """Classify ``type_text`` and validate ``name``.

        Raises UnsupportedTypeError or InvalidNameError instead of guessing.
        """
        if any(ch.isspace() for ch in name):
            raise InvalidNameError(name)
        type_name, is_array = classify_type(type_text)
        return cls(name=name, type_name=type_name, is_array=is_array)


class ElementArgument(SchemaModel):
    kind: Literal["element"] = "element"
    element: Element
    optional: bool = False

    @property
    def name(self) -> str:
        return self.element.name


class CallbackArgument(SchemaModel):
    kind: Literal["callback"] = "callback"
    callback: Method
    optional: bool = False

    @property
    def name(self) -> str:
        return self.callback.name


Argument = Annotated[Union[ElementArgument, CallbackArgument], Field(discriminator="kind")]


class Method(SchemaModel):
    """A callable with an ordered, positional argument list."""
    name: str
    arguments: Tuple[Argument, ...] = ()

    def renamed(self, name: str) -> "Method":
        return self.model_copy(update={"name": name})


CallbackArgument.model_rebuild()
Method.model_rebuild()


class Event(SchemaModel):
    """An event and the signature of its listener registration call.

    Only lives inside the extractors; namespaces and struct types fold events
    into methods or object properties.
    """
    name: str
    method: Method

    def as_method(self) -> Method:
        return self.method.renamed(f"{self.name}.{self.method.name}")


# =========================
#  Types
# =========================
class EnumType(SchemaModel):
    kind: Literal["enum"] = "enum"
    name: str


class DataType(SchemaModel):
    kind: Literal["data"] = "data"
    name: str


class StructType(SchemaModel):
    kind: Literal["struct"] = "struct"
    name: str
    properties: Tuple[Element, ...] = ()
    optional_properties: Tuple[Element, ...] = ()
    methods: Tuple[Method, ...] = ()


Type = Annotated[Union[EnumType, DataType, StructType], Field(discriminator="kind")]


# =========================
#  Properties
# =========================
class ImmediateProperty(SchemaModel):
    kind: Literal["immediate"] = "immediate"
    name: str
    type_name: str


class ObjectProperty(SchemaModel):
    kind: Literal["object"] = "object"
    name: str
    methods: Tuple[Method, ...] = ()


Property = Annotated[Union[ImmediateProperty, ObjectProperty], Field(discriminator="kind")]


# =========================
#  Namespace
# =========================
class Namespace(SchemaModel):
    """Schema for one documentation page."""
    name: str
    types: Tuple[Type, ...] = ()
    properties: Tuple[Property, ...] = ()
    methods: Tuple[Method, ...] = ()

    @classmethod
    def from_sections(
        cls,
        name: str,
        types: List[Type],
        properties: List[Property],
        methods: List[Method],
        events: List[Event],
    ) -> "Namespace":
        """Assemble a namespace, turning each event into an object property
        whose only method is the listener registration."""
        folded = list(properties) + [
            ObjectProperty(name=event.name, methods=(event.method,)) for event in events
        ]
        return cls(name=name, types=tuple(types), properties=tuple(folded), methods=tuple(methods))

    def type_names(self) -> List[str]:
        return [t.name for t in self.types]
