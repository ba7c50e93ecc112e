"""Campaigns: schemas, actions and content."""

from dataclasses import dataclass, field

from ..core.context import RequestContext
from ..core.params import BasicQueryParams, CampaignQueryParams
from ..core.schema import (
    ListEnvelope,
    RawJSON,
    Resource,
    api_field,
    require_id,
    resource_path,
)

CAMPAIGNS_PATH = "/campaigns"
SINGLE_CAMPAIGN_PATH = CAMPAIGNS_PATH + "/{campaign_id}"
CAMPAIGN_CONTENT_PATH = SINGLE_CAMPAIGN_PATH + "/content"
SEND_TEST_PATH = SINGLE_CAMPAIGN_PATH + "/actions/test"
SEND_PATH = SINGLE_CAMPAIGN_PATH + "/actions/send"

CAMPAIGN_TYPE_REGULAR = "regular"
CAMPAIGN_TYPE_PLAINTEXT = "plaintext"
CAMPAIGN_TYPE_ABSPLIT = "absplit"  # deprecated by the service
CAMPAIGN_TYPE_RSS = "rss"
CAMPAIGN_TYPE_VARIATE = "variate"

CAMPAIGN_SEND_TYPE_HTML = "html"
CAMPAIGN_SEND_TYPE_PLAINTEXT = "plaintext"

CONDITION_MATCH_ANY = "any"
CONDITION_MATCH_ALL = "all"

CONDITION_TYPE_INTERESTS = "Interests"
CONDITION_OP_CONTAINS = "interestcontains"


# =============================================================================
# Creation payloads
# =============================================================================


@dataclass
class InterestsCondition:
    """Segment condition on interest group membership."""
    field: str = ""
    op: str = CONDITION_OP_CONTAINS
    value: list[str] = api_field(default_factory=list)
    condition_type: str = CONDITION_TYPE_INTERESTS


@dataclass
class CampaignCreationSegmentOptions:
    """
    Segment options for a new campaign.

    ``conditions`` is either a list of :class:`InterestsCondition` or, for the
    other condition shapes the service accepts, a :class:`RawJSON` holding the
    conditions exactly as they should be sent.
    """
    saved_segment_id: int | None = None
    match: str | None = None
    conditions: list[InterestsCondition] | RawJSON | None = None


@dataclass
class CampaignCreationRecipients:
    list_id: str = ""
    segment_opts: CampaignCreationSegmentOptions | None = None


@dataclass
class CampaignCreationSettings:
    subject_line: str | None = None
    preview_text: str | None = None
    title: str | None = None
    from_name: str | None = None
    reply_to: str | None = None
    use_conversation: bool | None = None
    to_name: str | None = None
    folder_id: str | None = None
    authenticate: bool | None = None
    auto_footer: bool | None = None
    inline_css: bool | None = None
    auto_tweet: bool | None = None
    fb_comments: bool | None = None
    template_id: int | None = None


@dataclass
class CampaignTracking:
    opens: bool = False
    html_clicks: bool = False
    text_clicks: bool = False
    goal_tracking: bool = False
    ecomm360: bool = False
    google_analytics: str = ""
    clicktale: str = ""


@dataclass
class CampaignCreationRequest:
    """Body for creating or updating a campaign. ``type`` is one of CAMPAIGN_TYPE_*."""
    type: str = CAMPAIGN_TYPE_REGULAR
    recipients: CampaignCreationRecipients | None = None
    settings: CampaignCreationSettings | None = None
    tracking: CampaignTracking | None = None


@dataclass
class CampaignTestEmailRequest:
    test_emails: list[str] = field(default_factory=list)
    send_type: str = CAMPAIGN_SEND_TYPE_HTML


@dataclass
class CampaignContentTemplateRequest:
    id: int | None = None
    sections: dict[str, str] | None = None


@dataclass
class CampaignContentUpdateRequest:
    plain_text: str | None = None
    html: str | None = None
    url: str | None = None
    template: CampaignContentTemplateRequest | None = None


# =============================================================================
# Responses
# =============================================================================


@dataclass
class CampaignResponseRecipients:
    list_id: str = ""
    list_name: str = ""
    segment_text: str = ""
    recipient_count: int = 0


@dataclass
class CampaignResponseSettings:
    subject_line: str = ""
    preview_text: str = ""
    title: str = ""
    from_name: str = ""
    reply_to: str = ""
    use_conversation: bool = False
    to_name: str = ""
    folder_id: str = ""
    authenticate: bool = False
    auto_footer: bool = False
    inline_css: bool = False
    auto_tweet: bool = False
    fb_comments: bool = False
    timewarp: bool = False
    template_id: int = 0
    drag_and_drop: bool = False


@dataclass
class CampaignEcommerce:
    total_orders: int = 0
    total_spent: float = 0.0
    total_revenue: float = 0.0


@dataclass
class CampaignReportSummary:
    opens: int = 0
    unique_opens: int = 0
    open_rate: float = 0.0
    clicks: int = 0
    subscriber_clicks: int = 0
    click_rate: float = 0.0
    ecommerce: CampaignEcommerce = field(default_factory=CampaignEcommerce)


@dataclass
class CampaignDeliveryStatus:
    enabled: bool = False


@dataclass
class CampaignContent(Resource):
    plain_text: str = ""
    html: str = ""
    archive_html: str = ""


@dataclass
class Campaign(Resource):
    """A campaign as returned by the service."""

    id: str = ""
    web_id: int = 0
    type: str = ""
    create_time: str = ""
    archive_url: str = ""
    long_archive_url: str = ""
    status: str = ""
    emails_sent: int = 0
    send_time: str = ""
    content_type: str = ""
    needs_block_refresh: bool = False
    recipients: CampaignResponseRecipients = field(default_factory=CampaignResponseRecipients)
    settings: CampaignResponseSettings = field(default_factory=CampaignResponseSettings)
    tracking: CampaignTracking = field(default_factory=CampaignTracking)
    report_summary: CampaignReportSummary = field(default_factory=CampaignReportSummary)
    delivery_status: CampaignDeliveryStatus = field(default_factory=CampaignDeliveryStatus)

    def can_make_request(self) -> None:
        require_id("campaign", id=self.id)

    def send(self, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.send_campaign(self.id, context=context)

    def send_test_email(self, body: CampaignTestEmailRequest, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.send_test_email(self.id, body, context=context)

    def get_content(self, context: RequestContext | None = None) -> CampaignContent:
        self.can_make_request()
        return self.api.get_campaign_content(self.id, context=context)

    def update_content(
        self,
        body: CampaignContentUpdateRequest,
        context: RequestContext | None = None,
    ) -> CampaignContent:
        self.can_make_request()
        return self.api.update_campaign_content(self.id, body, context=context)

    def delete(self, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.delete_campaign(self.id, context=context)


@dataclass
class ListOfCampaigns(ListEnvelope):
    campaigns: list[Campaign] = field(default_factory=list)

    items_field = "campaigns"


class CampaignsMixin:
    """Campaign endpoints. Mixed into the client alongside the dispatcher."""

    def get_campaigns(
        self,
        params: CampaignQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> ListOfCampaigns:
        return self.request(
            "GET", CAMPAIGNS_PATH,
            params=params, response_type=ListOfCampaigns, context=context,
        )

    def get_campaign(
        self,
        campaign_id: str,
        params: BasicQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> Campaign:
        require_id("campaign", campaign_id=campaign_id)
        path = resource_path(SINGLE_CAMPAIGN_PATH, campaign_id=campaign_id)
        return self.request("GET", path, params=params, response_type=Campaign, context=context)

    def create_campaign(
        self,
        body: CampaignCreationRequest,
        context: RequestContext | None = None,
    ) -> Campaign:
        return self.request("POST", CAMPAIGNS_PATH, body=body, response_type=Campaign, context=context)

    def update_campaign(
        self,
        campaign_id: str,
        body: CampaignCreationRequest,
        context: RequestContext | None = None,
    ) -> Campaign:
        require_id("campaign", campaign_id=campaign_id)
        path = resource_path(SINGLE_CAMPAIGN_PATH, campaign_id=campaign_id)
        return self.request("PATCH", path, body=body, response_type=Campaign, context=context)

    def delete_campaign(self, campaign_id: str, context: RequestContext | None = None) -> bool:
        require_id("campaign", campaign_id=campaign_id)
        path = resource_path(SINGLE_CAMPAIGN_PATH, campaign_id=campaign_id)
        self.request("DELETE", path, context=context)
        return True

    def send_test_email(
        self,
        campaign_id: str,
        body: CampaignTestEmailRequest,
        context: RequestContext | None = None,
    ) -> bool:
        require_id("campaign", campaign_id=campaign_id)
        path = resource_path(SEND_TEST_PATH, campaign_id=campaign_id)
        self.request("POST", path, body=body, context=context)
        return True

    def send_campaign(self, campaign_id: str, context: RequestContext | None = None) -> bool:
        require_id("campaign", campaign_id=campaign_id)
        path = resource_path(SEND_PATH, campaign_id=campaign_id)
        self.request("POST", path, context=context)
        return True

    def get_campaign_content(
        self,
        campaign_id: str,
        params: BasicQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> CampaignContent:
        require_id("campaign", campaign_id=campaign_id)
        path = resource_path(CAMPAIGN_CONTENT_PATH, campaign_id=campaign_id)
        return self.request("GET", path, params=params, response_type=CampaignContent, context=context)

    def update_campaign_content(
        self,
        campaign_id: str,
        body: CampaignContentUpdateRequest,
        context: RequestContext | None = None,
    ) -> CampaignContent:
        require_id("campaign", campaign_id=campaign_id)
        path = resource_path(CAMPAIGN_CONTENT_PATH, campaign_id=campaign_id)
        return self.request("PUT", path, body=body, response_type=CampaignContent, context=context)
