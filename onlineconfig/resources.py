"""HTTP resources exposing a project's entities and their properties."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any
from urllib.parse import unquote

from onlineconfig.entities import Entity, Project, entity_pool
from onlineconfig.serialization import serializer_factory
from onlineconfig.variant import variant_from_json, variant_to_json

_log = logging.getLogger(__name__)

_PARAMETER = re.compile(r"^\{\s*(\w+)\s*:\s*(.*)\}$")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
ID_PATTERN = "[0-9a-zA-Z-]{36}"

Handler = Callable[[Mapping[str, str], Mapping[str, str], bytes], "Response"]


@dataclass
class Response:
    """What a resource answers with."""

    status: HTTPStatus
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)


def _dump(value: Any) -> str:
    return json.dumps(value, indent=4, sort_keys=True, ensure_ascii=False)


def _split(path: str) -> list[str]:
    return path.strip("/").split("/")


def _compile_segment(segment: str) -> tuple[str | None, re.Pattern[str]]:
    parameter = _PARAMETER.match(segment)
    if parameter:
        return parameter.group(1), re.compile(parameter.group(2))
    return None, re.compile(re.escape(segment))


def _lower_keys(headers: Mapping[str, str] | None) -> dict[str, str]:
    return {str(key).lower(): value for key, value in (headers or {}).items()}


def _as_bytes(body: bytes | str | None) -> bytes:
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    return bytes(body)


def body_json(headers: Mapping[str, str] | None, body: bytes | str | None) -> Any:
    """Parse the request body as JSON.

    The body is read only as far as the Content-Length header says. Returns
    None when the header is missing or malformed, the length is not positive,
    the body is empty or it is not valid JSON.
    """
    length_text = _lower_keys(headers).get("content-length")
    if length_text is None:
        return None
    number = _LEADING_INT.match(str(length_text))
    if number is None:
        return None
    length = int(number.group(1))
    if length <= 0:
        return None
    payload = _as_bytes(body)[:length]
    if not payload:
        return None
    try:
        return json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (dict, list)) and not value)


def _find_entity(params: Mapping[str, str]) -> Entity | None:
    entity_id = params.get("id")
    if entity_id is None:
        return None
    return entity_pool().find(entity_id)


class Resource:
    """A path pattern with handlers for the HTTP methods it accepts.

    Path segments written as ``{name: regex}`` become parameters; each one
    must match a whole segment.
    """

    def __init__(self, project: Project, path: str, methods: set[str] | frozenset[str]) -> None:
        self.project = project
        self.path = path
        self.methods = frozenset(method.upper() for method in methods)
        self._segments = [_compile_segment(segment) for segment in _split(path)]

    def match(self, path: str) -> dict[str, str] | None:
        """Return the path parameters if the path fits this resource, else None."""
        segments = _split(path)
        if len(segments) != len(self._segments):
            return None
        params: dict[str, str] = {}
        for segment, (name, pattern) in zip(segments, self._segments):
            value = unquote(segment)
            if not pattern.fullmatch(value):
                return None
            if name is not None:
                params[name] = value
        return params

    def handle(
        self,
        method: str,
        params: Mapping[str, str],
        headers: Mapping[str, str] | None,
        body: bytes | str | None,
    ) -> Response:
        """Answer a request already matched to this resource."""
        method = method.upper()
        handlers: dict[str, Handler] = {
            "GET": self._get,
            "POST": self._post,
            "PUT": self._put,
            "DELETE": self._delete,
        }
        handler = handlers.get(method)
        if handler is None or method not in self.methods:
            return Response(HTTPStatus.METHOD_NOT_ALLOWED)
        return handler(params, _lower_keys(headers), _as_bytes(body))

    def _get(self, params: Mapping[str, str], headers: Mapping[str, str], body: bytes) -> Response:
        return Response(HTTPStatus.METHOD_NOT_ALLOWED)

    def _post(self, params: Mapping[str, str], headers: Mapping[str, str], body: bytes) -> Response:
        return Response(HTTPStatus.METHOD_NOT_ALLOWED)

    def _put(self, params: Mapping[str, str], headers: Mapping[str, str], body: bytes) -> Response:
        return Response(HTTPStatus.METHOD_NOT_ALLOWED)

    def _delete(self, params: Mapping[str, str], headers: Mapping[str, str], body: bytes) -> Response:
        return Response(HTTPStatus.METHOD_NOT_ALLOWED)


class ProjectResource(Resource):
    """``GET project``: the identifier of the project."""

    def __init__(self, project: Project) -> None:
        super().__init__(project, "project", {"GET"})

    def _get(self, params, headers, body):
        _log.info("ProjectResource GET: %s", self.path)
        text = _dump({"id": str(self.project.id)})
        _log.info("ProjectResource GET: %s", text)
        return Response(HTTPStatus.OK, text)


class EntityResource(Resource):
    """``GET entity/{id}``: an entity without its sub-entities."""

    def __init__(self, project: Project) -> None:
        super().__init__(project, f"entity/{{id: {ID_PATTERN}}}", {"GET"})

    def _get(self, params, headers, body):
        _log.info("EntityResource GET: %s", params.get("id"))
        entity = _find_entity(params)
        if entity is None:
            return Response(HTTPStatus.BAD_REQUEST)
        serializer = serializer_factory().get_serializer(entity.type)
        text = _dump(serializer.to_json(entity, False))
        _log.info("EntityResource GET: %s", text)
        return Response(HTTPStatus.OK, text)


class SubEntitiesResource(Resource):
    """``GET subEntities/{id}``: names and identifiers of an entity's sub-entities."""

    def __init__(self, project: Project) -> None:
        super().__init__(project, f"subEntities/{{id: {ID_PATTERN}}}", {"GET"})

    def _get(self, params, headers, body):
        _log.info("SubEntitiesResource GET: %s", params.get("id"))
        entity = _find_entity(params)
        if entity is None:
            return Response(HTTPStatus.BAD_REQUEST)
        listing = [
            {"name": name, "id": str(entity.sub_entity(name).id)}
            for name in entity.sub_entity_names()
        ]
        text = _dump(listing)
        _log.info("SubEntitiesResource GET: %s", text)
        return Response(HTTPStatus.OK, text)


class PropertyResource(Resource):
    """``GET``/``PUT property/{id}/{propertyName}``: read or replace one value."""

    def __init__(self, project: Project) -> None:
        super().__init__(
            project,
            f"property/{{id: {ID_PATTERN}}}/{{propertyName: .*}}",
            {"GET", "PUT"},
        )

    @staticmethod
    def _target(params: Mapping[str, str]) -> tuple[Entity, str] | None:
        name = params.get("propertyName")
        entity = _find_entity(params)
        if name is None or entity is None or not entity.has_property(name):
            return None
        return entity, name

    def _get(self, params, headers, body):
        _log.info("PropertyResource GET: %s/%s", params.get("id"), params.get("propertyName"))
        target = self._target(params)
        if target is None:
            return Response(HTTPStatus.BAD_REQUEST)
        entity, name = target
        text = _dump(variant_to_json(entity.property(name).data))
        _log.info("PropertyResource GET: %s", text)
        return Response(HTTPStatus.OK, text)

    def _put(self, params, headers, body):
        _log.info("PropertyResource PUT: %s/%s", params.get("id"), params.get("propertyName"))
        target = self._target(params)
        if target is None:
            return Response(HTTPStatus.BAD_REQUEST)
        json_object = body_json(headers, body)
        if _is_empty(json_object):
            return Response(HTTPStatus.BAD_REQUEST)
        try:
            data = variant_from_json(json_object)
        except (TypeError, ValueError):
            return Response(HTTPStatus.BAD_REQUEST)
        entity, name = target
        entity.property(name).assign(data)
        _log.info("PropertyResource PUT: done")
        return Response(HTTPStatus.OK)


class Router:
    """Sends each request to the first published resource whose path fits."""

    def __init__(self) -> None:
        self._resources: list[Resource] = []

    def publish(self, resource: Resource) -> None:
        self._resources.append(resource)

    def dispatch(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | None = None,
    ) -> Response:
        path = path.split("?", 1)[0]
        for resource in self._resources:
            params = resource.match(path)
            if params is not None:
                return resource.handle(method, params, headers, body)
        return Response(HTTPStatus.NOT_FOUND)