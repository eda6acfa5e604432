from dialog_sdk.clients.dialog.models.Dialog import Menu, PropertyDef, RecordDef
from dialog_sdk.clients.dialog.models.Record import Annotation, CodeRef, ObjectRef, Property, Record
from dialog_sdk.clients.dialog.models.Redirection import DialogRedirection, ReferringDialog
from dialog_sdk.clients.dialog.models.Session import Workbench, WorkbenchAction
from dialog_sdk.clients.dialog.models.TypeNames import TypeNames


def test_record_decodes_untagged_properties_and_annotations(dialog_decoder):
    raw = {
        "type": TypeNames.RecordTypeName,
        "id": 7,
        "properties": [
            {"name": "status", "value": {"type": TypeNames.CodeRefTypeName, "code": "A", "description": "Active"}},
            {"name": "owner", "value": "jane", "annotations": [{"name": "FGND_COLOR", "value": "red"}]},
        ],
        "annotations": [{"name": "BOLD_TEXT", "value": "1"}, {"name": "BGND_COLOR", "value": "blue"}],
    }

    record = dialog_decoder.extract_value(raw, TypeNames.RecordTypeName).unwrap()

    assert record.id == "7"
    assert record.prop_names == ["status", "owner"]
    assert isinstance(record.value_at_name("status"), CodeRef)
    assert str(record.value_at_name("status")) == "Active"
    assert record.prop_at_name("owner").foreground_color == "red"
    assert record.is_bold_text
    assert record.background_color == "blue"


def test_property_background_overrides_record():
    record = Record(
        id="1",
        properties=[
            Property(name="a", annotations=[Annotation(name=Annotation.BACKGROUND_COLOR, value="green")]),
            Property(name="b"),
        ],
        annotations=[Annotation(name=Annotation.BACKGROUND_COLOR, value="grey")],
    )

    assert record.background_color_for("a") == "green"
    assert record.background_color_for("b") == "grey"
    assert record.value_at_name("missing") is None


def test_reference_strings_fall_back_to_ids():
    assert str(CodeRef(code="X")) == "X"
    assert str(ObjectRef(objectId="42")) == "42"
    assert str(ObjectRef(objectId="42", description="Order 42")) == "Order 42"


def test_redirection_flags():
    redirection = DialogRedirection(
        dialogProperties={"destroyed": "TRUE", "localRefresh": "false"},
        referringObject=ReferringDialog(dialogId="d1"),
    )

    assert redirection.is_destroyed
    assert not redirection.is_refresh_needed
    assert redirection.referringObject.is_dialog_referrer()


def test_menu_search_is_recursive():
    menu = Menu(actionId="root", children=[Menu(actionId="edit", children=[Menu(actionId="delete")])])

    assert menu.find_at_action_id("delete").actionId == "delete"
    assert menu.find_at_action_id("print") is None


def test_record_def_lookup():
    record_def = RecordDef(propertyDefs=[PropertyDef(propertyName="name"), PropertyDef(propertyName="age")])

    assert record_def.prop_count == 2
    assert record_def.prop_names == ["name", "age"]
    assert record_def.prop_def_at_name("age").propertyName == "age"
    assert record_def.prop_def_at_name("size") is None


def test_workbench_action_lookup():
    workbench = Workbench(actions=[WorkbenchAction(id="a1", actionId="open"), WorkbenchAction(id="a2")])

    assert workbench.action_at_id("open").id == "a1"
    assert workbench.action_at_id("a2").id == "a2"
    assert workbench.action_at_id("nope") is None
