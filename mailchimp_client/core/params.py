"""
Query parameter sources.

Every source exposes a single operation, ``params()``, returning its
contribution to the query string as a string-keyed map. Richer sources hold
a simpler one and overlay their own keys on top of its map with
:func:`compose`. Values left empty are dropped by :func:`build_query`, which
is how optional filters are omitted.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class QueryParams(Protocol):
    """Anything able to produce its query string contribution."""

    def params(self) -> dict[str, str]:
        ...


def render(value: Any) -> str:
    """Render one parameter value as a query string value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def compose(base: Mapping[str, str], overlay: Mapping[str, Any]) -> dict[str, str]:
    """
    Overlay one parameter map on another.

    Keys present in both take the overlay's value, even when that value is
    empty.
    """
    result = dict(base)
    for key, value in overlay.items():
        result[key] = render(value)
    return result


def build_query(source: QueryParams | Mapping[str, Any] | None) -> dict[str, str]:
    """
    Produce the final query map for a request.

    Args:
        source: A parameter source, a plain mapping, or None

    Returns:
        Map of parameter name to non-empty string value
    """
    if source is None:
        return {}
    if isinstance(source, Mapping):
        raw = compose({}, source)
    else:
        raw = source.params()
    return {key: value for key, value in raw.items() if value != ""}


@dataclass
class BasicQueryParams:
    status: str = ""
    sort_field: str = ""
    sort_dir: str = ""
    fields: list[str] = field(default_factory=list)
    exclude_fields: list[str] = field(default_factory=list)

    def params(self) -> dict[str, str]:
        return compose({}, {
            "status": self.status,
            "sort_field": self.sort_field,
            "sort_dir": self.sort_dir,
            "fields": self.fields,
            "exclude_fields": self.exclude_fields,
        })


@dataclass
class ExtendedQueryParams:
    """Basic parameters plus paging (``count``/``offset``)."""

    basic: BasicQueryParams = field(default_factory=BasicQueryParams)
    count: int | None = None
    offset: int | None = None

    def params(self) -> dict[str, str]:
        return compose(self.basic.params(), {
            "count": self.count,
            "offset": self.offset,
        })


@dataclass
class ListQueryParams:
    """Filters for the lists collection."""

    extended: ExtendedQueryParams = field(default_factory=ExtendedQueryParams)
    before_date_created: str = ""
    since_date_created: str = ""
    before_campaign_last_sent: str = ""
    since_campaign_last_sent: str = ""
    email: str = ""

    def params(self) -> dict[str, str]:
        return compose(self.extended.params(), {
            "before_date_created": self.before_date_created,
            "since_date_created": self.since_date_created,
            "before_campaign_last_sent": self.before_campaign_last_sent,
            "since_campaign_last_sent": self.since_campaign_last_sent,
            "email": self.email,
        })


@dataclass
class CampaignQueryParams:
    """Filters for the campaigns collection.

    ``status``, ``sort_field`` and ``sort_dir`` overlay the same keys of the
    embedded basic parameters.
    """

    extended: ExtendedQueryParams = field(default_factory=ExtendedQueryParams)
    type: str = ""
    status: str = ""
    before_send_time: str = ""
    since_send_time: str = ""
    before_create_time: str = ""
    since_create_time: str = ""
    list_id: str = ""
    folder_id: str = ""
    sort_field: str = ""
    sort_dir: str = ""

    def params(self) -> dict[str, str]:
        return compose(self.extended.params(), {
            "type": self.type,
            "status": self.status,
            "before_send_time": self.before_send_time,
            "since_send_time": self.since_send_time,
            "before_create_time": self.before_create_time,
            "since_create_time": self.since_create_time,
            "list_id": self.list_id,
            "folder_id": self.folder_id,
            "sort_field": self.sort_field,
            "sort_dir": self.sort_dir,
        })


@dataclass
class CampaignFolderQueryParams:
    extended: ExtendedQueryParams = field(default_factory=ExtendedQueryParams)

    def params(self) -> dict[str, str]:
        return self.extended.params()


@dataclass
class SearchMembersQueryParams:
    """Member search. ``list_id`` is filled in by the list the search runs on."""

    basic: BasicQueryParams = field(default_factory=BasicQueryParams)
    query: str = ""
    list_id: str = ""

    def params(self) -> dict[str, str]:
        return compose(self.basic.params(), {
            "query": self.query,
            "list_id": self.list_id,
        })
