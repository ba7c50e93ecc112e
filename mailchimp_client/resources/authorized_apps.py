"""Authorized applications."""

from dataclasses import dataclass, field

from ..core.context import RequestContext
from ..core.params import BasicQueryParams, ExtendedQueryParams
from ..core.schema import ListEnvelope, Resource, require_id, resource_path

AUTHORIZED_APPS_PATH = "/authorized-apps"
SINGLE_AUTHORIZED_APP_PATH = AUTHORIZED_APPS_PATH + "/{app_id}"


@dataclass
class AuthorizedAppRequest:
    client_id: str = ""
    client_secret: str = ""


@dataclass
class AuthorizedAppCreateResponse:
    access_token: str = ""
    viewer_token: str = ""


@dataclass
class AuthorizedApp(Resource):
    id: int = 0
    name: str = ""
    description: str = ""
    users: list[str] = field(default_factory=list)


@dataclass
class ListOfAuthorizedApps(ListEnvelope):
    apps: list[AuthorizedApp] = field(default_factory=list)

    items_field = "apps"


class AuthorizedAppsMixin:
    """Authorized application endpoints."""

    def get_authorized_apps(
        self,
        params: ExtendedQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> ListOfAuthorizedApps:
        return self.request(
            "GET", AUTHORIZED_APPS_PATH,
            params=params, response_type=ListOfAuthorizedApps, context=context,
        )

    def create_authorized_app(
        self,
        body: AuthorizedAppRequest,
        context: RequestContext | None = None,
    ) -> AuthorizedAppCreateResponse:
        return self.request(
            "POST", AUTHORIZED_APPS_PATH,
            body=body, response_type=AuthorizedAppCreateResponse, context=context,
        )

    def get_authorized_app(
        self,
        app_id: str,
        params: BasicQueryParams | None = None,
        context: RequestContext | None = None,
    ) -> AuthorizedApp:
        require_id("authorized app", app_id=app_id)
        path = resource_path(SINGLE_AUTHORIZED_APP_PATH, app_id=app_id)
        return self.request("GET", path, params=params, response_type=AuthorizedApp, context=context)
