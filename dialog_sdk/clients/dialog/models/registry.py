"""Default type registry of the dialog API."""

from typing import Any

from dialog_sdk.clients.dialog.models.Dialog import (
    Calendar,
    Details,
    Dialog,
    Form,
    Graph,
    ListView,
    MapView,
    Menu,
    PropertyDef,
    RecordDef,
    ViewDescriptor,
)
from dialog_sdk.clients.dialog.models.DialogException import DialogException, DialogMessage, UserMessage
from dialog_sdk.clients.dialog.models.QueryParameters import ActionParameters, QueryParameters
from dialog_sdk.clients.dialog.models.Record import Annotation, CodeRef, ObjectRef, Property, Record, RecordSet
from dialog_sdk.clients.dialog.models.Redirection import (
    DialogRedirection,
    NullRedirection,
    ReferringDialog,
    ReferringWorkbench,
    WebRedirection,
    WorkbenchRedirection,
)
from dialog_sdk.clients.dialog.models.Session import AppWindow, Session, Workbench, WorkbenchAction
from dialog_sdk.clients.dialog.models.TypeNames import TypeNames
from dialog_sdk.decoding.Result import Result
from dialog_sdk.decoding.TaggedDecoder import LIST_TYPE_KEY, TaggedDecoder, declared_type
from dialog_sdk.decoding.TypeRegistry import TypeRegistry

DIALOG_TYPES: tuple[str, ...] = (
    TypeNames.EditorDialogTypeName,
    TypeNames.QueryDialogTypeName,
    TypeNames.DialogTypeName,
)

VIEW_TYPES: tuple[str, ...] = (
    TypeNames.FormTypeName,
    TypeNames.DetailsTypeName,
    TypeNames.ListTypeName,
    TypeNames.MapTypeName,
    TypeNames.GraphTypeName,
    TypeNames.CalendarTypeName,
)

_MODEL_CLASSES: dict[str, type] = {
    TypeNames.ActionParametersTypeName: ActionParameters,
    TypeNames.AnnotationTypeName: Annotation,
    TypeNames.AppWindowTypeName: AppWindow,
    TypeNames.CalendarTypeName: Calendar,
    TypeNames.CodeRefTypeName: CodeRef,
    TypeNames.DetailsTypeName: Details,
    TypeNames.DialogTypeName: Dialog,
    TypeNames.EditorDialogTypeName: Dialog,
    TypeNames.QueryDialogTypeName: Dialog,
    TypeNames.DialogExceptionTypeName: DialogException,
    TypeNames.DialogMessageTypeName: DialogMessage,
    TypeNames.FormTypeName: Form,
    TypeNames.GraphTypeName: Graph,
    TypeNames.ListTypeName: ListView,
    TypeNames.MapTypeName: MapView,
    TypeNames.MenuTypeName: Menu,
    TypeNames.ObjectRefTypeName: ObjectRef,
    TypeNames.PropertyTypeName: Property,
    TypeNames.PropertyDefTypeName: PropertyDef,
    TypeNames.QueryParametersTypeName: QueryParameters,
    TypeNames.RecordDefTypeName: RecordDef,
    TypeNames.RecordSetTypeName: RecordSet,
    TypeNames.DialogRedirectionTypeName: DialogRedirection,
    TypeNames.NullRedirectionTypeName: NullRedirection,
    TypeNames.WebRedirectionTypeName: WebRedirection,
    TypeNames.WorkbenchRedirectionTypeName: WorkbenchRedirection,
    TypeNames.ReferringDialogTypeName: ReferringDialog,
    TypeNames.ReferringWorkbenchTypeName: ReferringWorkbench,
    TypeNames.SessionTypeName: Session,
    TypeNames.UserMessageTypeName: UserMessage,
    TypeNames.ViewDescriptorTypeName: ViewDescriptor,
    TypeNames.WorkbenchTypeName: Workbench,
    TypeNames.WorkbenchActionTypeName: WorkbenchAction,
}


def _tag_elements(values: Any, type_tag: str) -> Any:
    # records often carry untagged property and annotation entries
    if not isinstance(values, list):
        return values
    return [{**v, "type": type_tag} if isinstance(v, dict) and not declared_type(v) else v for v in values]


def _tag_properties(values: Any) -> Any:
    values = _tag_elements(values, TypeNames.PropertyTypeName)
    if not isinstance(values, list):
        return values
    return [
        {**v, "annotations": _tag_elements(v["annotations"], TypeNames.AnnotationTypeName)}
        if isinstance(v, dict) and isinstance(v.get("annotations"), list)
        else v
        for v in values
    ]


def record_from_wire(decoder: TaggedDecoder, type_tag: str, raw: dict) -> Result[Record]:
    """
    Builds a Record from its wire form. Property and annotation lists are decoded
    element-wise and the record id is normalised to a string.
    """
    raw_properties = raw.get("properties")
    raw_annotations = raw.get("annotations")
    properties = Result.success([])
    annotations = Result.success([])
    if raw_properties is not None:
        if not (isinstance(raw_properties, dict) and LIST_TYPE_KEY in raw_properties):
            raw_properties = _tag_properties(raw_properties)
        properties = decoder.extract_list(raw_properties, TypeNames.PropertyTypeName)
    if properties.is_failure:
        return Result.failure(properties.error)
    if raw_annotations is not None:
        if not (isinstance(raw_annotations, dict) and LIST_TYPE_KEY in raw_annotations):
            raw_annotations = _tag_elements(raw_annotations, TypeNames.AnnotationTypeName)
        annotations = decoder.extract_list(raw_annotations, TypeNames.AnnotationTypeName)
    if annotations.is_failure:
        return Result.failure(annotations.error)

    record_id = raw.get("id")
    return Result.success(
        Record(
            type=type_tag,
            id=str(record_id) if record_id is not None else None,
            properties=properties.value,
            annotations=annotations.value,
        )
    )


def build_default_registry() -> TypeRegistry:
    """Registers every wire model of the dialog API plus the Record factory and freezes the registry."""
    registry = TypeRegistry()
    for type_tag, cls in _MODEL_CLASSES.items():
        registry.register_class(type_tag, cls)
    registry.register_class(TypeNames.RecordTypeName, Record)
    registry.register_factory(TypeNames.RecordTypeName, record_from_wire)
    return registry.freeze()
