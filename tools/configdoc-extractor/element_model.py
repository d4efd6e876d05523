"""
In-memory element tree consumed by the configuration key extractor.

The extractor never parses source code itself. It walks a tree of type and
field declarations handed to it by a host analysis environment, and reads
everything it needs through a small host capability object (`ElementHost`).

ELEMENT TREE
------------
Only two kinds of element matter to the walk:

    TypeElement   - a (possibly nested) type declaration with ordered members
    FieldElement  - a field declaration, optionally holding a constant value,
                    a ConfigDoc annotation and a raw documentation comment

Example:

    TypeElement("Config", package="com.example.app", members=[
        FieldElement("TIMEOUT", constant_value="app.timeout",
                     doc_comment="Request timeout in ms.\\n@since 2.0"),
        TypeElement("Retry", members=[
            FieldElement("RETRIES", constant_value="app.retries",
                         annotation=ConfigDoc(description="Retry count", default_value="3")),
        ]),
    ])

Constructing a TypeElement links each direct member back to it through
`enclosing`, which is how `qualified_name` of nested types and the `source`
of every record are derived.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)


class ConfigDocError(Exception):
    """Base exception for configuration key extraction errors."""
    pass


class HostEnvironmentError(ConfigDocError):
    """Raised when the host environment cannot answer a required read."""
    pass


class ElementKind(Enum):
    TYPE = "type"
    FIELD = "field"


@dataclass(frozen=True)
class ConfigDoc:
    """
    Structured documentation attached to a field.

    Blank strings are the annotation's defaults and mean "not provided";
    the resolvers normalise them to None.
    """
    description: str = ""
    default_value: str = ""
    since: str = ""
    exclude: bool = False


@dataclass(eq=False)
class FieldElement:
    name: str
    constant_value: object = None
    annotation: Optional[ConfigDoc] = None
    doc_comment: Optional[str] = None
    enclosing: Optional["TypeElement"] = field(default=None, repr=False)

    kind = ElementKind.FIELD


@dataclass(eq=False)
class TypeElement:
    name: str
    members: List[object] = field(default_factory=list)
    package: str = ""
    enclosing: Optional["TypeElement"] = field(default=None, repr=False)

    kind = ElementKind.TYPE

    def __post_init__(self):
        for member in self.members:
            self._link(member)

    def _link(self, member):
        if isinstance(member, (FieldElement, TypeElement)):
            member.enclosing = self

    def add_member(self, member):
        """
        Append a member after construction and link it back to this type.

        Appending to ``members`` directly leaves ``enclosing`` unset, and the
        host then cannot name the member's enclosing declaration.
        """
        self.members.append(member)
        self._link(member)
        return member

    @property
    def qualified_name(self) -> str:
        """Dotted name, e.g. ``com.example.app.Config.Retry`` for a nested type."""
        if self.enclosing is not None:
            return f"{self.enclosing.qualified_name}.{self.name}"
        if self.package:
            return f"{self.package}.{self.name}"
        return self.name


class ElementHost:
    """
    Read access to the element tree, as provided by the host environment.

    The default implementation reads the dataclasses above. A host backed by
    another element model subclasses this and overrides the read methods;
    failures should be reported as HostEnvironmentError. The walker wraps
    any exception raised here in TraversalError.
    """

    def kind_of(self, element) -> Optional[ElementKind]:
        return getattr(element, "kind", None)

    def constant_value_of(self, field_element):
        return field_element.constant_value

    def annotation_of(self, field_element) -> Optional[ConfigDoc]:
        return field_element.annotation

    def documentation_comment_of(self, field_element) -> Optional[str]:
        return field_element.doc_comment

    def enclosing_declaration_name_of(self, field_element) -> str:
        enclosing = field_element.enclosing
        if enclosing is None:
            raise HostEnvironmentError(
                f"Cannot resolve the enclosing declaration of field '{field_element.name}'"
            )
        return enclosing.qualified_name

    def nested_members_of(self, type_element) -> list:
        return list(type_element.members)
