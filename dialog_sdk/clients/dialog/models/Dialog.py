"""Dialog and view definition models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from dialog_sdk.clients.dialog.models.Redirection import ReferringObject
from dialog_sdk.clients.dialog.models.TypeNames import TypeNames


class PropertyDef(BaseModel):
    """Describes one property of a record: name, data type and editing constraints."""
    type: str | None = TypeNames.PropertyDefTypeName
    propertyName: str | None = None
    propertyType: str | None = None
    format: str | None = None
    semanticType: str | None = None
    length: int | None = None
    scale: int | None = None
    displayLength: int | None = None
    writeEnabled: bool = False
    canCauseSideEffects: bool = False


class RecordDef(BaseModel):
    """Describes the structure of a record; the record holds the values."""
    type: str | None = TypeNames.RecordDefTypeName
    propertyDefs: list[PropertyDef] = Field(default_factory=list)

    @property
    def prop_count(self) -> int:
        return len(self.propertyDefs)

    @property
    def prop_names(self) -> list[str]:
        return [p.propertyName for p in self.propertyDefs]

    def prop_def_at_name(self, name: str) -> PropertyDef | None:
        for prop_def in self.propertyDefs:
            if prop_def.propertyName == name:
                return prop_def
        return None


class Menu(BaseModel):
    type: str | None = TypeNames.MenuTypeName
    id: str | None = None
    actionId: str | None = None
    label: str | None = None
    iconUrl: str | None = None
    directive: str | None = None
    visible: bool = True
    children: list[Menu] = Field(default_factory=list)

    def find_at_action_id(self, action_id: str) -> Menu | None:
        if self.actionId == action_id:
            return self
        for child in self.children:
            found = child.find_at_action_id(action_id)
            if found:
                return found
        return None


class ViewDescriptor(BaseModel):
    type: str | None = TypeNames.ViewDescriptorTypeName
    id: str | None = None
    name: str | None = None
    title: str | None = None


class View(BaseModel):
    type: str | None = None
    id: str | None = None
    name: str | None = None
    alias: str | None = None
    title: str | None = None
    menu: Menu | None = None


class Form(View):
    type: str | None = TypeNames.FormTypeName
    formLayout: str | None = None
    formStyle: str | None = None
    borderStyle: str | None = None


class Details(View):
    type: str | None = TypeNames.DetailsTypeName
    cancelButtonText: str | None = None
    commitButtonText: str | None = None
    editable: bool = False
    focusPropertyName: str | None = None
    rows: list[Any] = Field(default_factory=list)


class ListView(View):
    type: str | None = TypeNames.ListTypeName
    style: str | None = None
    columnStyle: str | None = None
    fixedColumnCount: int | None = None
    columns: list[Any] = Field(default_factory=list)


class MapView(View):
    type: str | None = TypeNames.MapTypeName
    cityPropertyName: str | None = None
    descriptionPropertyName: str | None = None
    latitudePropertyName: str | None = None
    longitudePropertyName: str | None = None


class Graph(View):
    type: str | None = TypeNames.GraphTypeName
    graphType: str | None = None
    xAxisLabel: str | None = None
    yAxisLabel: str | None = None
    dataPoints: list[Any] = Field(default_factory=list)


class Calendar(View):
    type: str | None = TypeNames.CalendarTypeName
    descriptionPropertyName: str | None = None
    startDatePropertyName: str | None = None
    endDatePropertyName: str | None = None
    occurDatePropertyName: str | None = None


class Dialog(BaseModel):
    """
    A server dialog (editor or query) with its current view.

    Attributes:
        id:               Dialog id, part of every dialog request path.
        type:             EditorDialog or QueryDialog type tag.
        dialogMode:       READ, UPDATE, CREATE, LIST, ...
        viewMode:         READ or WRITE.
        recordDef:        Structure of the records this dialog serves.
        view:             The current view definition.
        children:         Nested dialogs (e.g. the panes of a form).
        availableViews:   Alternative views the user may switch to.
        referringObject:  What opened this dialog.
    """
    type: str | None = None
    id: str | None = None
    dialogMode: str | None = None
    viewMode: str | None = None
    description: str | None = None
    businessClassName: str | None = None
    dialogClassName: str | None = None
    recordId: str | None = None
    selectedViewId: str | None = None
    sessionId: str | None = None
    tenantId: str | None = None
    recordDef: RecordDef | None = None
    view: View | None = None
    referringObject: ReferringObject | None = None
    children: list[Dialog] = Field(default_factory=list)
    availableViews: list[ViewDescriptor] = Field(default_factory=list)

    @property
    def is_query_dialog(self) -> bool:
        return self.type == TypeNames.QueryDialogTypeName

    @property
    def is_editor_dialog(self) -> bool:
        return self.type == TypeNames.EditorDialogTypeName
