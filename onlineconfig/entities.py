"""Configuration entities: identifiers, the entity pool, the concrete entities
and the factory that builds them by type name."""

from __future__ import annotations

import re
import uuid
import weakref
from collections.abc import Callable
from typing import TypeVar

from onlineconfig.properties import (
    EditorType,
    IntegerLimits,
    Property,
    PropertyEditorInfo,
)
from onlineconfig.variant import Value, Variant

_UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

EntityT = TypeVar("EntityT", bound="Entity")
EntityCreator = Callable[[bool, uuid.UUID], "Entity"]


def parse_id(text: str) -> uuid.UUID:
    """Parse a canonical 36-character identifier such as ``xxxxxxxx-xxxx-...``."""
    if not isinstance(text, str) or not _UUID_PATTERN.match(text):
        raise ValueError(f"not a valid identifier: {text!r}")
    return uuid.UUID(text)


def _coerce_id(entity_id: uuid.UUID | str) -> uuid.UUID:
    if isinstance(entity_id, uuid.UUID):
        return entity_id
    if isinstance(entity_id, str):
        return parse_id(entity_id)
    raise TypeError(f"identifier must be a UUID or a string, not {type(entity_id).__name__}")


class Entity:
    """A typed object with an ordered list of properties and named sub-entities.

    Every entity registers itself in the shared pool when created and leaves it
    when it is garbage collected.
    """

    def __init__(
        self,
        entity_type: str,
        with_sub_entities: bool = True,
        entity_id: uuid.UUID | str | None = None,
    ) -> None:
        self._type = entity_type
        self._with_sub_entities = with_sub_entities
        self._id = uuid.uuid4() if entity_id is None else _coerce_id(entity_id)
        self._properties: list[Property] = []
        self._sub_entities: dict[str, Entity] = {}
        entity_pool().add(self)

    @property
    def type(self) -> str:
        return self._type

    @property
    def id(self) -> uuid.UUID:
        return self._id

    def property_names(self) -> list[str]:
        return [prop.name for prop in self._properties]

    def has_property(self, name: str) -> bool:
        return any(prop.name == name for prop in self._properties)

    def property(self, name: str) -> Property:
        """Return the property with this name; raise KeyError if there is none."""
        for prop in self._properties:
            if prop.name == name:
                return prop
        raise KeyError(f"{self._type} has no property {name!r}")

    def property_value(self, name: str) -> Variant:
        return self.property(name).data

    def sub_entity_names(self) -> list[str]:
        """Names of the sub-entities in sorted order."""
        return sorted(self._sub_entities)

    def has_sub_entity(self, name: str) -> bool:
        return name in self._sub_entities

    def sub_entity(self, name: str) -> Entity:
        try:
            return self._sub_entities[name]
        except KeyError:
            raise KeyError(f"{self._type} has no sub-entity {name!r}") from None

    def add_property(
        self,
        name: str,
        display_name: str,
        data: Variant | Value | None = None,
        editor_info: PropertyEditorInfo | None = None,
    ) -> None:
        variant = data if isinstance(data, Variant) else Variant(data)
        self._properties.append(
            Property(
                name,
                display_name,
                variant,
                editor_info if editor_info is not None else PropertyEditorInfo(),
            )
        )

    def add_sub_entity(self, name: str, entity_class: type[Entity]) -> None:
        """Create a sub-entity of the given class, unless this entity is built
        without sub-entities or the name is already taken."""
        if self._with_sub_entities and name not in self._sub_entities:
            self._sub_entities[name] = entity_class(True)

    def _attach_sub_entity(self, name: str, entity: Entity) -> None:
        self._sub_entities.setdefault(name, entity)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self._type!r}, id={str(self._id)!r})"


class EntityPool:
    """Look-up of live entities by identifier."""

    def __init__(self) -> None:
        self._entities: weakref.WeakValueDictionary[uuid.UUID, Entity] = (
            weakref.WeakValueDictionary()
        )
        self._disabled = False

    def add(self, entity: Entity) -> None:
        if self._disabled:
            return
        if entity.id in self._entities:
            raise ValueError(f"an entity with id {entity.id} is already registered")
        self._entities[entity.id] = entity

    def remove(self, entity: Entity) -> None:
        if self._disabled:
            return
        if entity.id not in self._entities:
            raise KeyError(f"no entity with id {entity.id} is registered")
        del self._entities[entity.id]

    def find(self, entity_id: uuid.UUID | str) -> Entity | None:
        """Return the entity with this identifier, or None."""
        try:
            key = _coerce_id(entity_id)
        except (ValueError, TypeError):
            return None
        return self._entities.get(key)

    def find_concrete(
        self, entity_id: uuid.UUID | str, entity_class: type[EntityT]
    ) -> EntityT | None:
        entity = self.find(entity_id)
        return entity if isinstance(entity, entity_class) else None

    def disable(self) -> None:
        """Stop registering and removing entities from now on."""
        self._disabled = True


_POOL = EntityPool()


def entity_pool() -> EntityPool:
    """The pool shared by every entity."""
    return _POOL


def _line_edit() -> PropertyEditorInfo:
    return PropertyEditorInfo(EditorType.LINE_EDIT, None)


def _integer(minimum: int, maximum: int) -> PropertyEditorInfo:
    return PropertyEditorInfo(
        EditorType.INTEGER, IntegerLimits(minimum=minimum, maximum=maximum)
    )


class ConnectionInformation(Entity):
    def __init__(
        self, with_sub_entities: bool = True, entity_id: uuid.UUID | str | None = None
    ) -> None:
        super().__init__("connectionInformation", with_sub_entities, entity_id)
        self.add_property("mainAddress", "Основной адрес", "192.168.3.", _line_edit())
        self.add_property(
            "additionalAddress", "Дополнительный адрес", "", _line_edit()
        )
        self.add_property(
            "password",
            "Пароль",
            "",
            PropertyEditorInfo(EditorType.PASSWORD_LINE_EDIT, None),
        )


class VoltageLimits(Entity):
    def __init__(
        self, with_sub_entities: bool = True, entity_id: uuid.UUID | str | None = None
    ) -> None:
        super().__init__("voltageLimits", with_sub_entities, entity_id)
        self.add_property("voltage220low", "", 180)
        self.add_property("voltage220high", "", 260)
        self.add_property("voltage24low", "", 21)
        self.add_property("voltage23high", "", 26)


class ErrorProcessing(Entity):
    def __init__(
        self, with_sub_entities: bool = True, entity_id: uuid.UUID | str | None = None
    ) -> None:
        super().__init__("errorProcessing", with_sub_entities, entity_id)
        self.add_property(
            "triesCount",
            "Число попыток восстановления работоспособности",
            3,
            _integer(0, 10),
        )
        self.add_property(
            "channelPause",
            "Паузы при восстановлении работоспособности каналов (сек)",
            5,
            _integer(0, 10),
        )
        self.add_property(
            "restorePause",
            "Паузы при восстановлении режима (мин)",
            10,
            _integer(0, 100),
        )
        self.add_property(
            "currentTimeout", "Задержка замера токов (сек)", 2, _integer(0, 10)
        )
        self.add_property(
            "contactFixTimeout",
            "Время подавления дребезга контактов кнопок (мс)",
            100,
            _integer(0, 1000),
        )


class Project(Entity):
    def __init__(
        self, with_sub_entities: bool = True, entity_id: uuid.UUID | str | None = None
    ) -> None:
        super().__init__("project", with_sub_entities, entity_id)
        self.add_property("name", "Имя контроллера", "", _line_edit())
        self.add_sub_entity("connectionInformation", ConnectionInformation)
        self.add_sub_entity("voltageLimits", VoltageLimits)
        self.add_sub_entity("errorProcessing", ErrorProcessing)


class EntityFactory:
    """Creates entities by their type name."""

    def __init__(self) -> None:
        self._creators: dict[str, EntityCreator] = {}
        self.register("connectionInformation", ConnectionInformation)
        self.register("project", Project)
        self.register("voltageLimits", VoltageLimits)
        self.register("errorProcessing", ErrorProcessing)

    def register(self, entity_type: str, creator: EntityCreator) -> None:
        if entity_type in self._creators:
            raise ValueError(f"entity type {entity_type!r} is already registered")
        self._creators[entity_type] = creator

    def create_entity(
        self,
        entity_type: str,
        with_sub_entities: bool,
        entity_id: uuid.UUID | str,
    ) -> Entity:
        try:
            creator = self._creators[entity_type]
        except KeyError:
            raise KeyError(f"unknown entity type {entity_type!r}") from None
        return creator(with_sub_entities, _coerce_id(entity_id))


_FACTORY = EntityFactory()


def entity_factory() -> EntityFactory:
    """The shared entity factory."""
    return _FACTORY