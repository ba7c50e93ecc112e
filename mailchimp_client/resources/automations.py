"""
Automations (classic workflows).

An automation owns emails, and each email owns a queue of subscribers
waiting to receive it. Emails are nested resources: their operations need
both the workflow (automation) id and their own id.
"""

from dataclasses import dataclass, field
from typing import Any

from ..core.context import RequestContext
from ..core.params import BasicQueryParams
from ..core.schema import ListEnvelope, Resource, api_field, require_id, resource_path

AUTOMATIONS_PATH = "/automations"
SINGLE_AUTOMATION_PATH = AUTOMATIONS_PATH + "/{workflow_id}"
PAUSE_ALL_EMAILS_PATH = SINGLE_AUTOMATION_PATH + "/actions/pause-all-emails"
START_ALL_EMAILS_PATH = SINGLE_AUTOMATION_PATH + "/actions/start-all-emails"

AUTOMATION_EMAILS_PATH = SINGLE_AUTOMATION_PATH + "/emails"
SINGLE_AUTOMATION_EMAIL_PATH = AUTOMATION_EMAILS_PATH + "/{email_id}"

PAUSE_SINGLE_EMAIL_PATH = SINGLE_AUTOMATION_EMAIL_PATH + "/actions/pause"
START_SINGLE_EMAIL_PATH = SINGLE_AUTOMATION_EMAIL_PATH + "/actions/start"

AUTOMATION_QUEUES_PATH = SINGLE_AUTOMATION_EMAIL_PATH + "/queue"
SINGLE_AUTOMATION_QUEUE_PATH = AUTOMATION_QUEUES_PATH + "/{subscriber_hash}"

REMOVED_SUBSCRIBERS_PATH = SINGLE_AUTOMATION_PATH + "/removed-subscribers"


@dataclass
class AutomationOptions:
    saved_segment_id: int = 0
    match: str = ""
    conditions: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class AutomationRecipient:
    list_id: str = ""
    segment_options: AutomationOptions = field(default_factory=AutomationOptions)


@dataclass
class AutomationSettingsShort:
    use_conversation: bool = False
    to_name: str = ""
    title: str = ""
    from_name: str = ""
    reply_to: str = ""
    authenticate: bool = False
    auto_footer: bool = False
    inline_css: bool = False


@dataclass
class AutomationSettingsLong:
    title: str = ""
    from_name: str = ""
    reply_to: str = ""
    authenticate: bool = False
    auto_footer: bool = False
    inline_css: bool = False
    subject_line: str = ""
    auto_tweet: bool = False
    auto_fb_post: list[str] = field(default_factory=list)
    fb_comments: bool = False
    template_id: int = 0
    drag_and_drop: bool = False


@dataclass
class Salesforce:
    campaign: bool = False
    notes: bool = False


@dataclass
class Highrise:
    campaign: bool = False
    notes: bool = False


@dataclass
class Capsule:
    notes: bool = False


@dataclass
class AutomationTracking:
    opens: bool = False
    html_clicks: bool = False
    text_clicks: bool = False
    goal_tracking: bool = False
    ecomm360: bool = False
    google_analytics: str = ""
    clicktale: str = ""
    salesforce: Salesforce = field(default_factory=Salesforce)
    highrise: Highrise = field(default_factory=Highrise)
    capsule: Capsule = field(default_factory=Capsule)


@dataclass
class ReportSummary:
    opens: int = 0
    unique_opens: int = 0
    open_rate: float = 0.0
    clicks: int = 0
    subscriber_clicks: int = 0
    click_rate: float = 0.0


@dataclass
class AutomationDelay:
    amount: int = 0
    type: str = ""
    direction: str = ""
    action: str = ""


@dataclass
class SocialCard:
    image_url: str = ""
    description: str = ""
    title: str = ""


@dataclass
class AutomationQueueRequest:
    email_address: str = ""


@dataclass
class RemovedSubscriberRequest:
    email_address: str = ""


@dataclass
class AutomationQueue(Resource):
    """A subscriber queued for an automation email."""
    id: str = ""
    workflow_id: str = ""
    email_id: str = ""
    list_id: str = ""
    email_address: str = ""
    next_send: str = ""


@dataclass
class ListOfAutomationQueues(ListEnvelope):
    workflow_id: str = ""
    email_id: str = ""
    queues: list[AutomationQueue] = api_field(name="queue", default_factory=list)

    items_field = "queues"


@dataclass
class RemovedSubscriber(Resource):
    id: str = ""
    workflow_id: str = ""
    list_id: str = ""
    email_address: str = ""


@dataclass
class ListOfRemovedSubscribers(ListEnvelope):
    workflow_id: str = ""
    subscribers: list[RemovedSubscriber] = field(default_factory=list)

    items_field = "subscribers"


@dataclass
class AutomationEmail(Resource):
    """One email of an automation workflow."""

    id: str = ""
    workflow_id: str = ""
    position: int = 0
    delay: AutomationDelay = field(default_factory=AutomationDelay)
    create_time: str = ""
    start_time: str = ""
    archive_url: str = ""
    status: str = ""
    emails_sent: int = 0
    send_time: str = ""
    content_type: str = ""
    recipients: AutomationRecipient = field(default_factory=AutomationRecipient)
    settings: AutomationSettingsLong = field(default_factory=AutomationSettingsLong)
    tracking: AutomationTracking = field(default_factory=AutomationTracking)
    social_card: SocialCard = field(default_factory=SocialCard)
    trigger_settings: dict[str, Any] = field(default_factory=dict)
    report_summary: ReportSummary = field(default_factory=ReportSummary)

    def can_make_request(self) -> None:
        require_id("automation email", workflow_id=self.workflow_id, id=self.id)

    def pause_sending(self, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.pause_sending(self.workflow_id, self.id, context=context)

    def start_sending(self, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.start_sending(self.workflow_id, self.id, context=context)

    def get_queues(self, context: RequestContext | None = None) -> ListOfAutomationQueues:
        self.can_make_request()
        return self.api.get_automation_queues(self.workflow_id, self.id, context=context)

    def get_queue(self, subscriber_hash: str, context: RequestContext | None = None) -> AutomationQueue:
        self.can_make_request()
        return self.api.get_automation_queue(self.workflow_id, self.id, subscriber_hash, context=context)

    def create_queue(self, email_address: str, context: RequestContext | None = None) -> AutomationQueue:
        self.can_make_request()
        return self.api.create_automation_email_queue(
            self.workflow_id, self.id, email_address, context=context,
        )


@dataclass
class ListOfEmails(ListEnvelope):
    emails: list[AutomationEmail] = field(default_factory=list)

    items_field = "emails"


@dataclass
class Automation(Resource):
    """An automation workflow."""

    id: str = ""
    create_time: str = ""
    start_time: str = ""
    status: str = ""
    emails_sent: int = 0
    recipients: AutomationRecipient = field(default_factory=AutomationRecipient)
    settings: AutomationSettingsShort = field(default_factory=AutomationSettingsShort)
    tracking: AutomationTracking = field(default_factory=AutomationTracking)
    trigger_settings: dict[str, Any] = field(default_factory=dict)
    report_summary: ReportSummary = field(default_factory=ReportSummary)

    def can_make_request(self) -> None:
        require_id("automation", id=self.id)

    def pause_sending_all(self, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.pause_sending_all(self.id, context=context)

    def start_sending_all(self, context: RequestContext | None = None) -> bool:
        self.can_make_request()
        return self.api.start_sending_all(self.id, context=context)

    def get_emails(self, context: RequestContext | None = None) -> ListOfEmails:
        self.can_make_request()
        return self.api.get_automation_emails(self.id, context=context)

    def get_email(self, email_id: str, context: RequestContext | None = None) -> AutomationEmail:
        self.can_make_request()
        return self.api.get_automation_email(self.id, email_id, context=context)

    def get_removed_subscribers(self, context: RequestContext | None = None) -> ListOfRemovedSubscribers:
        self.can_make_request()
        return self.api.get_automation_removed_subscribers(self.id, context=context)

    def create_removed_subscriber(
        self,
        email_address: str,
        context: RequestContext | None = None,
    ) -> RemovedSubscriber:
        self.can_make_request()
        return self.api.create_automation_removed_subscriber(self.id, email_address, context=context)


@dataclass
class ListOfAutomations(ListEnvelope):
    automations: list[Automation] = field(default_factory=list)

    items_field = "automations"


class AutomationsMixin:
    """Automation, automation email, queue and removed-subscriber endpoints."""

    def get_automations(
        self,
        params: BasicQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> ListOfAutomations:
        return self.request(
            "GET", AUTOMATIONS_PATH,
            params=params, response_type=ListOfAutomations, context=context,
        )

    def get_automation(
        self,
        workflow_id: str,
        params: BasicQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> Automation:
        require_id("automation", workflow_id=workflow_id)
        path = resource_path(SINGLE_AUTOMATION_PATH, workflow_id=workflow_id)
        return self.request("GET", path, params=params, response_type=Automation, context=context)

    # =========================================================================
    # Sending actions
    # =========================================================================

    def pause_sending_all(self, workflow_id: str, context: RequestContext | None = None) -> bool:
        require_id("automation", workflow_id=workflow_id)
        self.request("POST", resource_path(PAUSE_ALL_EMAILS_PATH, workflow_id=workflow_id), context=context)
        return True

    def start_sending_all(self, workflow_id: str, context: RequestContext | None = None) -> bool:
        require_id("automation", workflow_id=workflow_id)
        self.request("POST", resource_path(START_ALL_EMAILS_PATH, workflow_id=workflow_id), context=context)
        return True

    def pause_sending(self, workflow_id: str, email_id: str, context: RequestContext | None = None) -> bool:
        require_id("automation email", workflow_id=workflow_id, email_id=email_id)
        path = resource_path(PAUSE_SINGLE_EMAIL_PATH, workflow_id=workflow_id, email_id=email_id)
        self.request("POST", path, context=context)
        return True

    def start_sending(self, workflow_id: str, email_id: str, context: RequestContext | None = None) -> bool:
        require_id("automation email", workflow_id=workflow_id, email_id=email_id)
        path = resource_path(START_SINGLE_EMAIL_PATH, workflow_id=workflow_id, email_id=email_id)
        self.request("POST", path, context=context)
        return True

    # =========================================================================
    # Emails
    # =========================================================================

    def get_automation_emails(self, workflow_id: str, context: RequestContext | None = None) -> ListOfEmails:
        require_id("automation", workflow_id=workflow_id)
        path = resource_path(AUTOMATION_EMAILS_PATH, workflow_id=workflow_id)
        return self.request(
            "GET", path,
            response_type=ListOfEmails,
            parents={"workflow_id": workflow_id},
            context=context,
        )

    def get_automation_email(
        self,
        workflow_id: str,
        email_id: str,
        context: RequestContext | None = None,
    ) -> AutomationEmail:
        require_id("automation email", workflow_id=workflow_id, email_id=email_id)
        path = resource_path(SINGLE_AUTOMATION_EMAIL_PATH, workflow_id=workflow_id, email_id=email_id)
        return self.request(
            "GET", path,
            response_type=AutomationEmail,
            parents={"workflow_id": workflow_id},
            context=context,
        )

    # =========================================================================
    # Queues
    # =========================================================================

    def get_automation_queues(
        self,
        workflow_id: str,
        email_id: str,
        context: RequestContext | None = None,
    ) -> ListOfAutomationQueues:
        require_id("automation email", workflow_id=workflow_id, email_id=email_id)
        path = resource_path(AUTOMATION_QUEUES_PATH, workflow_id=workflow_id, email_id=email_id)
        return self.request("GET", path, response_type=ListOfAutomationQueues, context=context)

    def get_automation_queue(
        self,
        workflow_id: str,
        email_id: str,
        subscriber_hash: str,
        context: RequestContext | None = None,
    ) -> AutomationQueue:
        require_id(
            "automation queue",
            workflow_id=workflow_id, email_id=email_id, subscriber_hash=subscriber_hash,
        )
        path = resource_path(
            SINGLE_AUTOMATION_QUEUE_PATH,
            workflow_id=workflow_id, email_id=email_id, subscriber_hash=subscriber_hash,
        )
        return self.request("GET", path, response_type=AutomationQueue, context=context)

    def create_automation_email_queue(
        self,
        workflow_id: str,
        email_id: str,
        email_address: str,
        context: RequestContext | None = None,
    ) -> AutomationQueue:
        require_id("automation email", workflow_id=workflow_id, email_id=email_id)
        path = resource_path(AUTOMATION_QUEUES_PATH, workflow_id=workflow_id, email_id=email_id)
        return self.request(
            "POST", path,
            body=AutomationQueueRequest(email_address=email_address),
            response_type=AutomationQueue,
            context=context,
        )

    # =========================================================================
    # Removed subscribers
    # =========================================================================

    def get_automation_removed_subscribers(
        self,
        workflow_id: str,
        context: RequestContext | None = None,
    ) -> ListOfRemovedSubscribers:
        require_id("automation", workflow_id=workflow_id)
        path = resource_path(REMOVED_SUBSCRIBERS_PATH, workflow_id=workflow_id)
        return self.request("GET", path, response_type=ListOfRemovedSubscribers, context=context)

    def create_automation_removed_subscriber(
        self,
        workflow_id: str,
        email_address: str,
        context: RequestContext | None = None,
    ) -> RemovedSubscriber:
        require_id("automation", workflow_id=workflow_id)
        path = resource_path(REMOVED_SUBSCRIBERS_PATH, workflow_id=workflow_id)
        return self.request(
            "POST", path,
            body=RemovedSubscriberRequest(email_address=email_address),
            response_type=RemovedSubscriber,
            context=context,
        )
