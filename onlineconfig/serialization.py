"""Conversion of entities to and from JSON-ready dicts."""

from __future__ import annotations

import abc
from typing import Any

from onlineconfig.entities import Entity, entity_factory
from onlineconfig.variant import variant_from_json, variant_to_json


class Serializer(abc.ABC):
    """Turns an entity into a JSON-ready dict and back."""

    @abc.abstractmethod
    def to_json(self, entity: Entity, with_sub_entities: bool) -> dict[str, Any]:
        """Encode an entity, with its sub-entities if asked for."""

    @abc.abstractmethod
    def to_entity(self, json_object: dict[str, Any]) -> Entity:
        """Build an entity from the dict produced by :meth:`to_json`."""


class EntitySerializer(Serializer):
    """The general serializer that works for every entity type."""

    def to_json(self, entity: Entity, with_sub_entities: bool) -> dict[str, Any]:
        properties = [
            {"name": prop.name, "data": variant_to_json(prop.data)}
            for prop in (entity.property(name) for name in entity.property_names())
        ]
        sub_entities: list[dict[str, Any]] = []
        if with_sub_entities:
            factory = serializer_factory()
            for name in entity.sub_entity_names():
                sub_entity = entity.sub_entity(name)
                serializer = factory.get_serializer(sub_entity.type)
                sub_entities.append(
                    {
                        "name": name,
                        "entity": serializer.to_json(sub_entity, with_sub_entities),
                    }
                )
        return {
            "withSubEntities": with_sub_entities,
            "type": entity.type,
            "id": str(entity.id),
            "properties": properties,
            "subEntities": sub_entities,
        }

    def to_entity(self, json_object: dict[str, Any]) -> Entity:
        with_sub_entities = bool(json_object["withSubEntities"])
        entity = entity_factory().create_entity(
            json_object["type"], False, json_object["id"]
        )
        for json_property in json_object["properties"]:
            name = json_property.get("name", "")
            entity.property(name).assign(variant_from_json(json_property["data"]))
        if with_sub_entities:
            factory = serializer_factory()
            for json_sub_entity in json_object["subEntities"]:
                name = json_sub_entity["name"]
                json_data = json_sub_entity.get("entity", json_sub_entity.get("data"))
                if json_data is None:
                    raise KeyError(f"sub-entity {name!r} carries no entity data")
                serializer = factory.get_serializer(json_data["type"])
                entity._attach_sub_entity(name, serializer.to_entity(json_data))
        return entity


class SerializerFactory:
    """Chooses the serializer for an entity type.

    Types without a registered serializer get a general :class:`EntitySerializer`.
    """

    def __init__(self) -> None:
        self._serializers: dict[str, Serializer] = {}

    def register(self, entity_type: str, serializer: Serializer) -> None:
        if entity_type in self._serializers:
            raise ValueError(f"a serializer for {entity_type!r} is already registered")
        self._serializers[entity_type] = serializer

    def get_serializer(self, entity_type: str) -> Serializer:
        return self._serializers.get(entity_type) or EntitySerializer()


_FACTORY = SerializerFactory()


def serializer_factory() -> SerializerFactory:
    """The shared serializer factory."""
    return _FACTORY