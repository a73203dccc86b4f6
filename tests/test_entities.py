import gc
import uuid

import pytest

from onlineconfig.entities import (
    ConnectionInformation,
    Entity,
    EntityFactory,
    EntityPool,
    ErrorProcessing,
    Project,
    VoltageLimits,
    entity_factory,
    entity_pool,
    parse_id,
)
from onlineconfig.properties import EditorType, IntegerLimits
from onlineconfig.variant import Variant


def test_parse_id_round_trip():
    original = uuid.uuid4()
    parsed = parse_id(str(original))
    assert parsed == original
    assert str(parsed) == str(original).lower()


def test_parse_id_accepts_upper_case():
    original = uuid.uuid4()
    assert parse_id(str(original).upper()) == original


@pytest.mark.parametrize("text", ["", "not-an-id", "{" + str(uuid.UUID(int=1)) + "}"])
def test_parse_id_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_id(text)


def test_entity_registers_in_pool():
    entity = Entity("thing")
    assert entity_pool().find(entity.id) is entity
    assert entity_pool().find(str(entity.id)) is entity


def test_entity_leaves_pool_when_collected():
    entity = Entity("thing")
    entity_id = entity.id
    del entity
    gc.collect()
    assert entity_pool().find(entity_id) is None


def test_find_with_invalid_text_returns_none():
    assert entity_pool().find("zzzz") is None


def test_duplicate_id_is_rejected():
    entity = Entity("first")
    with pytest.raises(ValueError):
        Entity("second", entity_id=entity.id)
    assert entity_pool().find(entity.id) is entity


def test_explicit_id_is_kept():
    wanted = uuid.uuid4()
    entity = Entity("thing", entity_id=str(wanted))
    assert entity.id == wanted
    assert entity.type == "thing"


def test_pool_add_remove():
    pool = EntityPool()
    entity = Entity("thing")
    pool.add(entity)
    assert pool.find(entity.id) is entity
    pool.remove(entity)
    assert pool.find(entity.id) is None
    with pytest.raises(KeyError):
        pool.remove(entity)


def test_disabled_pool_ignores_changes():
    pool = EntityPool()
    pool.disable()
    entity = Entity("thing")
    pool.add(entity)
    pool.remove(entity)
    assert pool.find(entity.id) is None


def test_find_concrete():
    info = ConnectionInformation()
    assert entity_pool().find_concrete(info.id, ConnectionInformation) is info
    assert entity_pool().find_concrete(info.id, Project) is None


def test_connection_information_defaults():
    info = ConnectionInformation()
    assert info.type == "connectionInformation"
    assert info.property_names() == ["mainAddress", "additionalAddress", "password"]
    assert info.property_value("mainAddress") == Variant("192.168.3.")
    assert info.property_value("additionalAddress").to_string() == ""
    assert not info.property_value("additionalAddress").is_empty()
    assert info.property("password").editor_info.editor_type is EditorType.PASSWORD_LINE_EDIT
    assert info.property("mainAddress").editor_info.editor_type is EditorType.LINE_EDIT
    assert info.sub_entity_names() == []


def test_error_processing_limits():
    errors = ErrorProcessing()
    assert errors.property_names() == [
        "triesCount",
        "channelPause",
        "restorePause",
        "currentTimeout",
        "contactFixTimeout",
    ]
    assert errors.property_value("contactFixTimeout").to_int() == 100
    limits = errors.property("contactFixTimeout").editor_info.additional_information
    assert limits == IntegerLimits(minimum=0, maximum=1000)
    restore = errors.property("restorePause").editor_info.additional_information
    assert restore == IntegerLimits(minimum=0, maximum=100)


def test_voltage_limits_values():
    limits = VoltageLimits()
    assert [limits.property_value(n).to_int() for n in limits.property_names()] == [
        180,
        260,
        21,
        26,
    ]
    assert limits.property("voltage220low").editor_info.editor_type is EditorType.UNKNOWN
    assert limits.property("voltage220low").display_name == ""


def test_project_sub_entities():
    project = Project()
    assert project.sub_entity_names() == [
        "connectionInformation",
        "errorProcessing",
        "voltageLimits",
    ]
    for name in project.sub_entity_names():
        assert project.has_sub_entity(name)
        sub = project.sub_entity(name)
        assert sub.type == name
        assert entity_pool().find(sub.id) is sub
    assert isinstance(project.sub_entity("voltageLimits"), VoltageLimits)


def test_project_without_sub_entities():
    project = Project(False)
    assert project.sub_entity_names() == []
    assert not project.has_sub_entity("voltageLimits")
    assert project.property_names() == ["name"]


def test_missing_property_and_sub_entity_raise():
    project = Project(False)
    assert not project.has_property("missing")
    with pytest.raises(KeyError):
        project.property("missing")
    with pytest.raises(KeyError):
        project.property_value("missing")
    with pytest.raises(KeyError):
        project.sub_entity("connectionInformation")


def test_property_assignment_changes_entity():
    info = ConnectionInformation()
    info.property("mainAddress").assign("10.0.0.1")
    assert info.property_value("mainAddress").to_string() == "10.0.0.1"


def test_add_sub_entity_keeps_existing():
    project = Project()
    first = project.sub_entity("voltageLimits")
    project.add_sub_entity("voltageLimits", VoltageLimits)
    assert project.sub_entity("voltageLimits") is first


def test_factory_creates_registered_types():
    factory = entity_factory()
    for entity_type, cls in [
        ("project", Project),
        ("connectionInformation", ConnectionInformation),
        ("voltageLimits", VoltageLimits),
        ("errorProcessing", ErrorProcessing),
    ]:
        wanted = uuid.uuid4()
        entity = factory.create_entity(entity_type, False, wanted)
        assert isinstance(entity, cls)
        assert entity.type == entity_type
        assert entity.id == wanted
        assert entity.sub_entity_names() == []


def test_factory_project_with_sub_entities():
    project = entity_factory().create_entity("project", True, uuid.uuid4())
    assert len(project.sub_entity_names()) == 3


def test_factory_unknown_type_raises():
    with pytest.raises(KeyError):
        entity_factory().create_entity("unknown", False, uuid.uuid4())


def test_factory_duplicate_registration_raises():
    factory = EntityFactory()
    with pytest.raises(ValueError):
        factory.register("project", Project)


def test_factory_custom_registration():
    factory = EntityFactory()
    factory.register("custom", lambda with_subs, entity_id: Entity("custom", with_subs, entity_id))
    wanted = uuid.uuid4()
    entity = factory.create_entity("custom", True, str(wanted))
    assert entity.type == "custom"
    assert entity.id == wanted


def test_shared_pool_sees_new_entities():
    pool = entity_pool()
    entity = Entity("thing")
    assert pool.find(entity.id) is entity


def test_shared_factory_keeps_registrations():
    entity_type = "shared-" + uuid.uuid4().hex
    entity_factory().register(
        entity_type, lambda with_subs, entity_id: Entity(entity_type, with_subs, entity_id)
    )
    wanted = uuid.uuid4()
    entity = entity_factory().create_entity(entity_type, False, wanted)
    assert entity.type == entity_type
    assert entity.id == wanted