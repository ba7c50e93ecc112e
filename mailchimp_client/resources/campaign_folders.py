"""Campaign folders."""

from dataclasses import dataclass, field

from ..core.context import RequestContext
from ..core.params import CampaignFolderQueryParams
from ..core.schema import ListEnvelope, Resource

CAMPAIGN_FOLDERS_PATH = "/campaign-folders"


@dataclass
class CampaignFolderCreationRequest:
    name: str = ""


@dataclass
class CampaignFolder(Resource):
    name: str = ""
    id: str = ""
    count: int = 0


@dataclass
class ListOfCampaignFolders(ListEnvelope):
    folders: list[CampaignFolder] = field(default_factory=list)

    items_field = "folders"


class CampaignFoldersMixin:
    """Campaign folder endpoints."""

    def get_campaign_folders(
        self,
        params: CampaignFolderQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> ListOfCampaignFolders:
        return self.request(
            "GET", CAMPAIGN_FOLDERS_PATH,
            params=params, response_type=ListOfCampaignFolders, context=context,
        )

    def create_campaign_folder(
        self,
        body: CampaignFolderCreationRequest,
        context: RequestContext | None = None,
    ) -> CampaignFolder:
        return self.request(
            "POST", CAMPAIGN_FOLDERS_PATH,
            body=body, response_type=CampaignFolder, context=context,
        )
