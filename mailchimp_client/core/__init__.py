"""Core components: dispatch, classification, parameters and schemas."""

from .models import (
    MailchimpError,
    ValidationError,
    TransportError,
    APIError,
    StructuredAPIError,
    RawHTTPError,
    DecodeError,
    ConfigError,
)
from .context import RequestContext
from .params import (
    QueryParams,
    compose,
    build_query,
    BasicQueryParams,
    ExtendedQueryParams,
    ListQueryParams,
    CampaignQueryParams,
    CampaignFolderQueryParams,
    SearchMembersQueryParams,
)
from .classifier import Classification, ProblemDetail, Outcome, classify
from .schema import (
    Link,
    RawJSON,
    Resource,
    ListEnvelope,
    api_field,
    from_dict,
    to_dict,
)
from .dispatcher import Dispatcher, endpoint_for_key
from .config_store import (
    ClientSettings,
    get_base_dir,
    save_profile,
    load_profile,
    load_settings,
)

__all__ = [
    "MailchimpError",
    "ValidationError",
    "TransportError",
    "APIError",
    "StructuredAPIError",
    "RawHTTPError",
    "DecodeError",
    "ConfigError",
    "RequestContext",
    "QueryParams",
    "compose",
    "build_query",
    "BasicQueryParams",
    "ExtendedQueryParams",
    "ListQueryParams",
    "CampaignQueryParams",
    "CampaignFolderQueryParams",
    "SearchMembersQueryParams",
    "Classification",
    "ProblemDetail",
    "Outcome",
    "classify",
    "Link",
    "RawJSON",
    "Resource",
    "ListEnvelope",
    "api_field",
    "from_dict",
    "to_dict",
    "Dispatcher",
    "endpoint_for_key",
    "ClientSettings",
    "get_base_dir",
    "save_profile",
    "load_profile",
    "load_settings",
]
