"""
Declarative resource schemas.

Resources are plain dataclasses. Field metadata carries the wire name of a
field (``name``) and whether the field is local-only (``internal``): internal
fields are never sent and never read from a response. Back-references to the
owning client and parent identity keys are internal fields filled in by the
dispatcher through :func:`wire`.
"""

import types
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, ClassVar, TypeVar, Union, get_args, get_origin, get_type_hints
from urllib.parse import quote

from .models import ValidationError

T = TypeVar("T")


def api_field(name: str | None = None, internal: bool = False, **kwargs: Any) -> Any:
    """
    Declare a dataclass field with wire metadata.

    Args:
        name: JSON key when it differs from the attribute name
        internal: Keep the field out of request bodies and response decoding
        **kwargs: Passed through to dataclasses.field

    Returns:
        A dataclasses.Field
    """
    metadata: dict[str, Any] = {}
    if name:
        metadata["name"] = name
    if internal:
        metadata["internal"] = True
    return field(metadata=metadata, **kwargs)


@dataclass
class RawJSON:
    """A caller-supplied JSON value sent exactly as given."""

    value: Any = None


def from_dict(cls: type[T], data: Any) -> T:
    """
    Build a dataclass instance from a decoded JSON object.

    Unknown keys are ignored and missing keys keep the field default.

    Raises:
        TypeError: If the payload shape does not match the dataclass
    """
    if not isinstance(data, dict):
        raise TypeError(f"expected an object for {cls.__name__}, got {type(data).__name__}")

    hints = get_type_hints(cls)
    kwargs = {}
    for f in fields(cls):
        if not f.init or f.metadata.get("internal"):
            continue
        key = f.metadata.get("name", f.name)
        if key in data:
            kwargs[f.name] = _decode(hints[f.name], data[key])
    return cls(**kwargs)


def _decode(tp: Any, value: Any) -> Any:
    if value is None or tp is Any:
        return value

    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return _decode(args[0], value)
        # Open unions are left as decoded JSON
        return value

    if origin is list:
        (item_type,) = get_args(tp) or (Any,)
        if not isinstance(value, list):
            raise TypeError(f"expected a list, got {type(value).__name__}")
        return [_decode(item_type, v) for v in value]

    if origin is dict:
        args = get_args(tp)
        value_type = args[1] if args else Any
        if not isinstance(value, dict):
            raise TypeError(f"expected an object, got {type(value).__name__}")
        return {k: _decode(value_type, v) for k, v in value.items()}

    if isinstance(tp, type) and is_dataclass(tp):
        if tp is RawJSON:
            return RawJSON(value)
        return from_dict(tp, value)

    if tp is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if tp is str and not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")

    return value


def to_dict(obj: Any) -> Any:
    """
    Convert a value into JSON-ready data.

    Dataclasses become objects keyed by wire name. ``None`` fields and
    internal fields are omitted.
    """
    if isinstance(obj, RawJSON):
        return obj.value

    if is_dataclass(obj) and not isinstance(obj, type):
        result = {}
        for f in fields(obj):
            if f.metadata.get("internal"):
                continue
            value = getattr(obj, f.name)
            if value is None:
                continue
            result[f.metadata.get("name", f.name)] = to_dict(value)
        return result

    if isinstance(obj, (list, tuple)):
        return [to_dict(v) for v in obj]
    if isinstance(obj, dict):
        return {k: to_dict(v) for k, v in obj.items()}
    return obj


def resource_path(template: str, **ids: Any) -> str:
    """
    Substitute identity keys into a path template.

    Args:
        template: Path such as "/campaigns/{campaign_id}"
        **ids: Values for the placeholders, percent-encoded as one segment each

    Returns:
        The concrete path
    """
    return template.format(**{key: quote(str(value), safe="") for key, value in ids.items()})


def require_id(kind: str, **keys: Any) -> None:
    """
    Fail fast when any identity key is empty.

    Raises:
        ValidationError: Naming every missing key
    """
    missing = [name for name, value in keys.items() if not value]
    if missing:
        raise ValidationError(f"No {', '.join(missing)} provided on {kind}")


@dataclass
class Link:
    """HATEOAS link attached to most responses."""

    rel: str = ""
    href: str = ""
    method: str = ""
    target_schema: str = api_field(name="targetSchema", default="")
    schema: str = ""


@dataclass
class Resource:
    """Base for every decoded entity."""

    links: list[Link] = api_field(name="_links", default_factory=list)
    _api: Any = api_field(internal=True, default=None, init=False, repr=False, compare=False)

    def attach(self, api: Any, **parents: Any) -> "Resource":
        """Set the back-reference to the client and any parent identity keys."""
        self._api = api
        for key, value in parents.items():
            setattr(self, key, value)
        return self

    @property
    def api(self) -> Any:
        """The client this entity was fetched with."""
        if self._api is None:
            raise ValidationError(
                f"{type(self).__name__} is not bound to a client; fetch it through the client first"
            )
        return self._api


@dataclass
class ListEnvelope(Resource):
    """Response envelope: total count, links and a sequence of entities."""

    total_items: int = 0

    items_field: ClassVar[str] = ""

    @property
    def items(self) -> list:
        if not self.items_field:
            return []
        return getattr(self, self.items_field)


def wire(value: Any, api: Any, parents: dict[str, Any] | None = None) -> Any:
    """
    Attach the client (and parent keys) to a decoded value.

    Single entities get both. Envelopes get the client, and every element of
    the envelope gets the client and the parent keys.
    """
    parents = parents or {}
    if isinstance(value, ListEnvelope):
        value.attach(api)
        for item in value.items:
            if isinstance(item, Resource):
                item.attach(api, **parents)
    elif isinstance(value, Resource):
        value.attach(api, **parents)
    return value
