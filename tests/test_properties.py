import pytest

from onlineconfig.properties import (
    AdditionalInformation,
    AdditionalInformationType,
    EditorType,
    IntegerLimits,
    Property,
    PropertyEditorInfo,
)
from onlineconfig.variant import Variant


def test_integer_limits_defaults_and_type():
    limits = IntegerLimits()
    assert limits.minimum == 0
    assert limits.maximum == 100
    assert limits.type is AdditionalInformationType.INT_LIMITS


def test_integer_limits_values():
    limits = IntegerLimits(0, 10)
    assert (limits.minimum, limits.maximum) == (0, 10)
    assert isinstance(limits, AdditionalInformation)


def test_additional_information_type():
    info = AdditionalInformation(AdditionalInformationType.NONE)
    assert info.type is AdditionalInformationType.NONE


def test_editor_info_defaults():
    info = PropertyEditorInfo()
    assert info.editor_type is EditorType.UNKNOWN
    assert info.additional_information is None


def test_property_defaults():
    prop = Property("name")
    assert prop.data.is_empty()
    assert prop.display_name == ""
    assert prop.editor_info == PropertyEditorInfo()


def test_empty_name_rejected():
    with pytest.raises(ValueError):
        Property("", "Display")


def test_raw_data_wrapped():
    prop = Property("voltage220low", "", 180)
    assert prop.data == Variant(180)


def test_equality_ignores_display_and_editor():
    a = Property("password", "one", "x", PropertyEditorInfo(EditorType.PASSWORD_LINE_EDIT))
    b = Property("password", "two", "x", PropertyEditorInfo(EditorType.LINE_EDIT))
    assert a == b
    assert not a == Property("password", "one", "y")
    assert not a == Property("other", "one", "x")


def test_assign_replaces_data_only():
    editor = PropertyEditorInfo(EditorType.INTEGER, IntegerLimits(0, 10))
    prop = Property("triesCount", "Tries", 3, editor)
    result = prop.assign(Variant(7))
    assert result is prop
    assert prop.data == Variant(7)
    assert prop.display_name == "Tries"
    assert prop.editor_info is editor


def test_assign_raw_value():
    prop = Property("mainAddress", "", "a")
    prop.assign("b")
    assert prop.data.to_string() == "b"