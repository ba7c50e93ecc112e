"""Audience lists, their webhooks, and member search."""

from dataclasses import dataclass, field, replace
from typing import Any

from ..core.context import RequestContext
from ..core.params import BasicQueryParams, ListQueryParams, SearchMembersQueryParams
from ..core.schema import ListEnvelope, Resource, require_id, resource_path

LISTS_PATH = "/lists"
SINGLE_LIST_PATH = LISTS_PATH + "/{list_id}"

WEBHOOKS_PATH = SINGLE_LIST_PATH + "/webhooks"
SINGLE_WEBHOOK_PATH = WEBHOOKS_PATH + "/{webhook_id}"

SEARCH_MEMBERS_PATH = "/search-members"


# =============================================================================
# Lists
# =============================================================================


@dataclass
class ListContact:
    company: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    phone: str = ""


@dataclass
class CampaignDefaults:
    from_name: str = ""
    from_email: str = ""
    subject: str = ""
    language: str = ""


@dataclass
class ListStats:
    member_count: int = 0
    unsubscribe_count: int = 0
    cleaned_count: int = 0
    campaign_count: int = 0
    campaign_last_sent: str = ""
    merge_field_count: int = 0
    avg_sub_rate: float = 0.0
    avg_unsub_rate: float = 0.0
    open_rate: float = 0.0
    click_rate: float = 0.0
    last_sub_date: str = ""
    last_unsub_date: str = ""


@dataclass
class Member(Resource):
    id: str = ""
    email_address: str = ""
    unique_email_id: str = ""
    email_type: str = ""
    status: str = ""
    merge_fields: dict[str, Any] = field(default_factory=dict)
    interests: dict[str, bool] = field(default_factory=dict)
    ip_signup: str = ""
    timestamp_signup: str = ""
    language: str = ""
    vip: bool = False
    last_changed: str = ""
    list_id: str = ""


@dataclass
class Matches:
    members: list[Member] = field(default_factory=list)
    total_items: int = 0


@dataclass
class SearchMembersResponse(Resource):
    exact_matches: Matches = field(default_factory=Matches)
    full_search: Matches = field(default_factory=Matches)


# =============================================================================
# Webhooks
# =============================================================================


@dataclass
class HookEvents:
    subscribe: bool = False
    unsubscribe: bool = False
    profile: bool = False
    cleaned: bool = False
    upemail: bool = False
    campaign: bool = False


@dataclass
class HookSources:
    user: bool = False
    admin: bool = False
    api: bool = False


@dataclass
class WebHookRequest:
    url: str = ""
    events: HookEvents = field(default_factory=HookEvents)
    sources: HookSources = field(default_factory=HookSources)


@dataclass
class WebHook(Resource):
    """A webhook registered on a list."""

    id: str = ""
    list_id: str = ""
    url: str = ""
    events: HookEvents = field(default_factory=HookEvents)
    sources: HookSources = field(default_factory=HookSources)

    def can_make_request(self) -> None:
        require_id("webhook", list_id=self.list_id, id=self.id)

    def update(self, body: WebHookRequest, context: RequestContext | None = None) -> "WebHook":
        self.can_make_request()
        return self.api.update_webhook(self.list_id, self.id, body, context=context)

    def delete(self, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.delete_webhook(self.list_id, self.id, context=context)


@dataclass
class ListOfWebHooks(ListEnvelope):
    list_id: str = ""
    webhooks: list[WebHook] = field(default_factory=list)

    items_field = "webhooks"


@dataclass
class ListResponse(Resource):
    """An audience list."""

    id: str = ""
    web_id: int = 0
    name: str = ""
    contact: ListContact = field(default_factory=ListContact)
    permission_reminder: str = ""
    use_archive_bar: bool = False
    campaign_defaults: CampaignDefaults = field(default_factory=CampaignDefaults)
    email_type_option: bool = False
    date_created: str = ""
    list_rating: int = 0
    subscribe_url_short: str = ""
    subscribe_url_long: str = ""
    visibility: str = ""
    double_optin: bool = False
    stats: ListStats = field(default_factory=ListStats)

    def can_make_request(self) -> None:
        require_id("list", id=self.id)

    def search_members(
        self,
        params: SearchMembersQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> SearchMembersResponse:
        """Search members of this list."""
        self.can_make_request()
        params = replace(params or SearchMembersQueryParams(), list_id=self.id)
        return self.api.search_members(params, context=context)

    def create_webhook(self, body: WebHookRequest, context: RequestContext | None = None) -> WebHook:
        self.can_make_request()
        return self.api.create_webhook(self.id, body, context=context)

    def update_webhook(
        self,
        webhook_id: str,
        body: WebHookRequest,
        context: RequestContext | None = None,
    ) -> WebHook:
        self.can_make_request()
        return self.api.update_webhook(self.id, webhook_id, body, context=context)

    def get_webhooks(self, context: RequestContext | None = None) -> ListOfWebHooks:
        self.can_make_request()
        return self.api.get_webhooks(self.id, context=context)

    def get_webhook(self, webhook_id: str, context: RequestContext | None = None) -> WebHook:
        self.can_make_request()
        return self.api.get_webhook(self.id, webhook_id, context=context)

    def delete_webhook(self, webhook_id: str, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.delete_webhook(self.id, webhook_id, context=context)


@dataclass
class ListOfLists(ListEnvelope):
    lists: list[ListResponse] = field(default_factory=list)

    items_field = "lists"


class ListsMixin:
    """List, webhook and member search endpoints."""

    def get_lists(
        self,
        params: ListQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> ListOfLists:
        return self.request("GET", LISTS_PATH, params=params, response_type=ListOfLists, context=context)

    def get_list(
        self,
        list_id: str,
        params: BasicQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> ListResponse:
        require_id("list", list_id=list_id)
        path = resource_path(SINGLE_LIST_PATH, list_id=list_id)
        return self.request("GET", path, params=params, response_type=ListResponse, context=context)

    def search_members(
        self,
        params: SearchMembersQueryParams,
        context: RequestContext | None = None,
    ) -> SearchMembersResponse:
        """Search members across all lists, or one list when ``params.list_id`` is set."""
        return self.request(
            "GET", SEARCH_MEMBERS_PATH,
            params=params, response_type=SearchMembersResponse, context=context,
        )

    # =========================================================================
    # Webhooks
    # =========================================================================

    def create_webhook(
        self,
        list_id: str,
        body: WebHookRequest,
        context: RequestContext | None = None,
    ) -> WebHook:
        require_id("list", list_id=list_id)
        return self.request(
            "POST", resource_path(WEBHOOKS_PATH, list_id=list_id),
            body=body, response_type=WebHook, parents={"list_id": list_id}, context=context,
        )

    def update_webhook(
        self,
        list_id: str,
        webhook_id: str,
        body: WebHookRequest,
        context: RequestContext | None = None,
    ) -> WebHook:
        require_id("webhook", list_id=list_id, webhook_id=webhook_id)
        return self.request(
            "PATCH", resource_path(SINGLE_WEBHOOK_PATH, list_id=list_id, webhook_id=webhook_id),
            body=body, response_type=WebHook, parents={"list_id": list_id}, context=context,
        )

    def get_webhooks(self, list_id: str, context: RequestContext | None = None) -> ListOfWebHooks:
        require_id("list", list_id=list_id)
        return self.request(
            "GET", resource_path(WEBHOOKS_PATH, list_id=list_id),
            response_type=ListOfWebHooks, parents={"list_id": list_id}, context=context,
        )

    def get_webhook(self, list_id: str, webhook_id: str, context: RequestContext | None = None) -> WebHook:
        require_id("webhook", list_id=list_id, webhook_id=webhook_id)
        return self.request(
            "GET", resource_path(SINGLE_WEBHOOK_PATH, list_id=list_id, webhook_id=webhook_id),
            response_type=WebHook, parents={"list_id": list_id}, context=context,
        )

    def delete_webhook(self, list_id: str, webhook_id: str, context: RequestContext | None = None) -> bool:
        require_id("webhook", list_id=list_id, webhook_id=webhook_id)
        path = resource_path(SINGLE_WEBHOOK_PATH, list_id=list_id, webhook_id=webhook_id)
        self.request("DELETE", path, context=context)
        return True
