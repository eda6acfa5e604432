"""Wire type tags of the dialog service."""


class TypeNames:
    ActionParametersTypeName = "hxgn.api.dialog.ActionParameters"
    AnnotationTypeName = "hxgn.api.dialog.Annotation"
    AppWindowTypeName = "hxgn.api.dialog.AppWindow"
    CalendarTypeName = "hxgn.api.dialog.Calendar"
    CodeRefTypeName = "hxgn.api.dialog.CodeRef"
    DetailsTypeName = "hxgn.api.dialog.Details"
    DialogTypeName = "hxgn.api.dialog.Dialog"
    EditorDialogTypeName = "hxgn.api.dialog.EditorDialog"
    QueryDialogTypeName = "hxgn.api.dialog.QueryDialog"
    DialogExceptionTypeName = "hxgn.api.dialog.DialogException"
    DialogMessageTypeName = "hxgn.api.dialog.DialogMessage"
    FormTypeName = "hxgn.api.dialog.Form"
    GraphTypeName = "hxgn.api.dialog.Graph"
    ListTypeName = "hxgn.api.dialog.List"
    LoginTypeName = "hxgn.api.dialog.Login"
    MapTypeName = "hxgn.api.dialog.Map"
    MenuTypeName = "hxgn.api.dialog.Menu"
    ObjectRefTypeName = "hxgn.api.dialog.ObjectRef"
    PropertyTypeName = "hxgn.api.dialog.Property"
    PropertyDefTypeName = "hxgn.api.dialog.PropertyDef"
    QueryParametersTypeName = "hxgn.api.dialog.QueryParameters"
    RecordTypeName = "hxgn.api.dialog.Record"
    RecordDefTypeName = "hxgn.api.dialog.RecordDef"
    RecordSetTypeName = "hxgn.api.dialog.RecordSet"
    RedirectionTypeName = "hxgn.api.dialog.Redirection"
    DialogRedirectionTypeName = "hxgn.api.dialog.DialogRedirection"
    NullRedirectionTypeName = "hxgn.api.dialog.NullRedirection"
    WebRedirectionTypeName = "hxgn.api.dialog.WebRedirection"
    WorkbenchRedirectionTypeName = "hxgn.api.dialog.WorkbenchRedirection"
    ReferringDialogTypeName = "hxgn.api.dialog.ReferringDialog"
    ReferringWorkbenchTypeName = "hxgn.api.dialog.ReferringWorkbench"
    SessionTypeName = "hxgn.api.dialog.Session"
    UserMessageTypeName = "hxgn.api.dialog.UserMessage"
    ViewDescriptorTypeName = "hxgn.api.dialog.ViewDescriptor"
    WorkbenchTypeName = "hxgn.api.dialog.Workbench"
    WorkbenchActionTypeName = "hxgn.api.dialog.WorkbenchAction"


REDIRECTION_TYPES: frozenset[str] = frozenset(
    {
        TypeNames.DialogRedirectionTypeName,
        TypeNames.NullRedirectionTypeName,
        TypeNames.WebRedirectionTypeName,
        TypeNames.WorkbenchRedirectionTypeName,
    }
)
