# onlineconfig

`onlineconfig` models the configuration of a controller as a tree of
entities. Each entity has typed properties and may have named sub-entities.
The package turns entities into JSON and back, and serves them over a small
HTTP back end.

It also holds a few independent utilities:

- building and comparing binary trees,
- filtering and converting the values of a mapping,
- a JSON round trip for a simple connection record.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Configuration model

- `onlineconfig.variant`
  - `Variant` holds one of `bool`, `int`, `float` or `str`, or nothing at all.
    `to_bool`, `to_int`, `to_float` and `to_string` return the held value, or
    a zero value when the variant is empty; asking for the wrong type raises
    `TypeError`.
  - `variant_to_json` gives `{"empty": "empty"}` for an empty variant and
    `{"type": <index>, "value": <value>}` otherwise (index 0 bool, 1 int,
    2 float, 3 string). `variant_from_json` reads that form back.
- `onlineconfig.properties`
  - `Property` pairs a name and a display name with a `Variant`. Two
    properties are equal when their names and data are equal. `assign`
    replaces the data.
  - `PropertyEditorInfo` describes how a property is edited, with an
    `EditorType` and optional `IntegerLimits`.
- `onlineconfig.entities`
  - `Entity` is the base class. The concrete entities are `Project`,
    `ConnectionInformation`, `VoltageLimits` and `ErrorProcessing`. A
    `Project` holds the other three as sub-entities.
  - Every entity registers itself in the shared pool returned by
    `entity_pool()`, where `find` looks it up by id.
  - `entity_factory()` creates entities by their type name.
  - `parse_id` turns a 36-character textual UUID into a `uuid.UUID`.
- `onlineconfig.serialization`
  - `serializer_factory()` hands out a serializer for an entity type; types
    without a registered one get an `EntitySerializer`.
  - `to_json(entity, with_sub_entities)` produces the JSON form and
    `to_entity(json_object)` rebuilds an entity from it.

```python
from onlineconfig.entities import Project
from onlineconfig.serialization import serializer_factory

project = Project()
serializer = serializer_factory().get_serializer(project.type)
document = serializer.to_json(project, True)
print(document["type"], [p["name"] for p in document["properties"]])
```

## HTTP back end

`onlineconfig.resources` defines the resources and a `Router` that dispatches
requests to them; `onlineconfig.server` wires them to a `Project`.

| Method | Path | Response |
| --- | --- | --- |
| `GET` | `/project` | the project's id |
| `GET` | `/entity/<id>` | the entity's JSON form, without sub-entities |
| `GET` | `/subEntities/<id>` | the names and ids of the entity's sub-entities |
| `GET` | `/property/<id>/<name>` | the JSON form of one property's value |
| `PUT` | `/property/<id>/<name>` | replaces that value with the JSON variant in the body |

An unknown id or property name, or a `PUT` without a usable JSON body, gives
`400 Bad Request`. A method a resource does not accept gives
`405 Method Not Allowed`, and a path no resource matches gives `404 Not Found`.

Start the server, giving the TCP number to listen on as the only argument:

```
onlineconfig-server 8080
```

It prints the full JSON form of a new project, then serves requests on all
interfaces until interrupted. Without an argument it exits with status -1.

`onlineconfig.urls.UrlBuilder` builds the matching URLs on `127.0.0.1` for a
client of that server.

## What the package does not include

There is no browser user interface for editing a configuration; clients talk
to the HTTP resources directly. Configurations are kept in memory only and are
not saved anywhere.

## Tree utilities

`onlineconfig.trees` generates binary trees:

- `generate_tree(values)` builds a tree level by level; the root holds 0.
- `generate_random_tree(count, rng)` builds one from random values.

and compares them with `is_same_tree_agz(p, q)` or
`is_same_tree_leetcode(p, q)`, both `True` only for trees of the same shape
and values.

```python
from onlineconfig.trees import generate_tree, is_same_tree_agz

a = generate_tree([1, 2, 3, 4])
b = generate_tree([1, 2, 3, 4])
print(is_same_tree_agz(a, b))  # True
```

To time both comparison functions on random trees (5,000,000 values unless
`--size` says otherwise):

```
onlineconfig-trees --size 100000
```

## Mapping values

`onlineconfig.mapvalues.get_values` returns a mapping's values in its
iteration order, keeping those whose key passes an optional filter and
passing each through an optional converter:

```python
from onlineconfig.mapvalues import get_values

print(get_values({1: 1, 2: 2}, lambda key: key > 1, lambda value: value * 2))  # [4]
```

## Connection info

`onlineconfig.connection_info.ConnectionInfo` holds a main address, an
additional address and a password. `to_json` writes it as JSON indented by
four spaces and `from_json` reads it back.

This command prints a sample record as JSON, then `true` if parsing it again
gives an equal record:

```
onlineconfig-connection-info
```