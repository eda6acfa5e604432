"""Record models: one row of named property values plus style annotations."""

from typing import Any, ClassVar

from pydantic import BaseModel, Field

from dialog_sdk.clients.dialog.models.TypeNames import TypeNames


class Annotation(BaseModel):
    """
    A style hint attached to a record or a single property (colors, text style, image).
    """
    BOLD_TEXT: ClassVar[str] = "BOLD_TEXT"
    BACKGROUND_COLOR: ClassVar[str] = "BGND_COLOR"
    FOREGROUND_COLOR: ClassVar[str] = "FGND_COLOR"
    IMAGE_NAME: ClassVar[str] = "IMAGE_NAME"
    ITALIC_TEXT: ClassVar[str] = "ITALIC_TEXT"
    TIP_TEXT: ClassVar[str] = "TIP_TEXT"
    TRUE_VALUE: ClassVar[str] = "1"

    type: str | None = TypeNames.AnnotationTypeName
    name: str | None = None
    value: str | None = None


def _annotation_value(annotations: list[Annotation], name: str) -> str | None:
    for annotation in annotations or []:
        if annotation.name == name:
            return annotation.value
    return None


class CodeRef(BaseModel):
    type: str | None = TypeNames.CodeRefTypeName
    code: str | None = None
    description: str | None = None

    def __str__(self) -> str:
        return self.description or self.code or ""


class ObjectRef(BaseModel):
    type: str | None = TypeNames.ObjectRefTypeName
    objectId: str | None = None
    description: str | None = None

    def __str__(self) -> str:
        return self.description or self.objectId or ""


class Property(BaseModel):
    """
    A named value of a record. The value is a scalar or a decoded wire object (CodeRef, ObjectRef, ...).
    """
    type: str | None = TypeNames.PropertyTypeName
    name: str | None = None
    value: Any = None
    format: str | None = None
    annotations: list[Annotation] = Field(default_factory=list)

    @property
    def background_color(self) -> str | None:
        return _annotation_value(self.annotations, Annotation.BACKGROUND_COLOR)

    @property
    def foreground_color(self) -> str | None:
        return _annotation_value(self.annotations, Annotation.FOREGROUND_COLOR)


class Record(BaseModel):
    """
    A record as returned by the dialog service.

    Records are treated as immutable value objects once decoded: the query scroller
    shares them with its callers and never changes them.

    Attributes:
        id:          Opaque record id, used as the paging anchor.
        properties:  Ordered property values.
        annotations: Record-level style annotations.
    """
    type: str | None = TypeNames.RecordTypeName
    id: str | None = None
    properties: list[Property] = Field(default_factory=list)
    annotations: list[Annotation] = Field(default_factory=list)

    def prop_at_name(self, name: str) -> Property | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def value_at_name(self, name: str) -> Any:
        prop = self.prop_at_name(name)
        return prop.value if prop else None

    @property
    def prop_names(self) -> list[str]:
        return [p.name for p in self.properties]

    @property
    def background_color(self) -> str | None:
        return _annotation_value(self.annotations, Annotation.BACKGROUND_COLOR)

    @property
    def foreground_color(self) -> str | None:
        return _annotation_value(self.annotations, Annotation.FOREGROUND_COLOR)

    @property
    def is_bold_text(self) -> bool:
        return _annotation_value(self.annotations, Annotation.BOLD_TEXT) == Annotation.TRUE_VALUE

    def background_color_for(self, prop_name: str) -> str | None:
        prop = self.prop_at_name(prop_name)
        return prop.background_color if prop and prop.background_color else self.background_color


class NullRecord(Record):
    """A record without id or values."""
    type: str | None = None


class RecordSet(BaseModel):
    """
    One page of query results.

    Attributes:
        records:         The records of this page, in the order the server returned them.
        hasMore:         True if the server has more records in the requested direction.
        defaultActionId: Action to perform when a record is opened.
    """
    type: str | None = TypeNames.RecordSetTypeName
    records: list[Record] = Field(default_factory=list)
    hasMore: bool = False
    defaultActionId: str | None = None
