"""
Resource wrappers.

Each module defines the schemas for one area of the API and a mixin with
its endpoints. The mixins are combined with the dispatcher in
:class:`mailchimp_client.client.MailchimpClient`.
"""

from .campaigns import (
    Campaign,
    CampaignContent,
    CampaignContentUpdateRequest,
    CampaignCreationRequest,
    CampaignCreationRecipients,
    CampaignCreationSegmentOptions,
    CampaignCreationSettings,
    CampaignTestEmailRequest,
    CampaignsMixin,
    InterestsCondition,
    ListOfCampaigns,
)
from .campaign_folders import (
    CampaignFolder,
    CampaignFolderCreationRequest,
    CampaignFoldersMixin,
    ListOfCampaignFolders,
)
from .automations import (
    Automation,
    AutomationEmail,
    AutomationQueue,
    AutomationsMixin,
    ListOfAutomations,
    ListOfEmails,
)
from .batches import (
    BatchOperation,
    BatchOperationCreationRequest,
    BatchOperationResponse,
    BatchesMixin,
    ListOfBatchOperations,
)
from .authorized_apps import (
    AuthorizedApp,
    AuthorizedAppRequest,
    AuthorizedAppsMixin,
    ListOfAuthorizedApps,
)
from .lists import (
    ListOfLists,
    ListResponse,
    ListsMixin,
    SearchMembersResponse,
    WebHook,
    WebHookRequest,
)
from .ecommerce import (
    Cart,
    Customer,
    EcommerceMixin,
    Order,
    Product,
    Store,
    StoreList,
    Variant,
)

__all__ = [
    "Campaign",
    "CampaignContent",
    "CampaignContentUpdateRequest",
    "CampaignCreationRequest",
    "CampaignCreationRecipients",
    "CampaignCreationSegmentOptions",
    "CampaignCreationSettings",
    "CampaignTestEmailRequest",
    "CampaignsMixin",
    "InterestsCondition",
    "ListOfCampaigns",
    "CampaignFolder",
    "CampaignFolderCreationRequest",
    "CampaignFoldersMixin",
    "ListOfCampaignFolders",
    "Automation",
    "AutomationEmail",
    "AutomationQueue",
    "AutomationsMixin",
    "ListOfAutomations",
    "ListOfEmails",
    "BatchOperation",
    "BatchOperationCreationRequest",
    "BatchOperationResponse",
    "BatchesMixin",
    "ListOfBatchOperations",
    "AuthorizedApp",
    "AuthorizedAppRequest",
    "AuthorizedAppsMixin",
    "ListOfAuthorizedApps",
    "ListOfLists",
    "ListResponse",
    "ListsMixin",
    "SearchMembersResponse",
    "WebHook",
    "WebHookRequest",
    "Cart",
    "Customer",
    "EcommerceMixin",
    "Order",
    "Product",
    "Store",
    "StoreList",
    "Variant",
]
