"""Main CLI entry point for the Mailchimp client."""

import argparse
import json
import logging
import sys

from mailchimp_client.client import build_client
from mailchimp_client.core import (
    CampaignQueryParams,
    ClientSettings,
    ConfigError,
    ExtendedQueryParams,
    ListQueryParams,
    MailchimpError,
    SearchMembersQueryParams,
    ValidationError,
    load_profile,
    save_profile,
    to_dict,
)
from mailchimp_client.core.schema import require_id, resource_path
from mailchimp_client.resources.automations import PAUSE_ALL_EMAILS_PATH, START_ALL_EMAILS_PATH
from mailchimp_client.resources.campaigns import SINGLE_CAMPAIGN_PATH

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _print_json(value):
    print(json.dumps(to_dict(value), indent=2))


def _fail(message: str):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _client(args):
    return build_client(debug=True if args.verbose else None)


def _paging(args) -> ExtendedQueryParams:
    return ExtendedQueryParams(count=args.count, offset=args.offset)


def cmd_configure(args):
    """Handle the configure command - save the API key and endpoint."""
    try:
        profile = load_profile()
        api_key = args.api_key or profile.get("api_key")
        if not api_key:
            _fail("No API key given. Use --api-key.")

        settings = ClientSettings(
            api_key=api_key,
            endpoint=args.endpoint or profile.get("endpoint"),
        )
        if args.timeout is not None:
            settings.timeout_seconds = args.timeout
        elif "timeout_seconds" in profile:
            settings.timeout_seconds = float(profile["timeout_seconds"])

        path = save_profile(settings)
        print(f"Profile saved to: {path}")

    except ConfigError as e:
        _fail(str(e))


def cmd_campaigns(args):
    """Handle the campaigns command."""
    params = CampaignQueryParams(
        extended=_paging(args),
        type=args.type or "",
        status=args.status or "",
        list_id=args.list_id or "",
    )
    try:
        with _client(args) as client:
            result = client.get_campaigns(params)
    except MailchimpError as e:
        _fail(str(e))
    _print_json(result)


def cmd_campaign(args):
    """Handle the campaign command."""
    try:
        with _client(args) as client:
            result = client.get_campaign(args.id)
    except MailchimpError as e:
        _fail(str(e))
    _print_json(result)


def _run_action(args, method: str, path: str, done: str):
    try:
        with _client(args) as client:
            ok, error = client.request_ok(method, path)
    except MailchimpError as e:
        _fail(str(e))
    if not ok:
        _fail(str(error))
    print(done)


def cmd_delete_campaign(args):
    """Handle the delete-campaign command."""
    try:
        require_id("campaign", campaign_id=args.id)
    except ValidationError as e:
        _fail(str(e))
    path = resource_path(SINGLE_CAMPAIGN_PATH, campaign_id=args.id)
    _run_action(args, "DELETE", path, f"Deleted campaign {args.id}")


def cmd_automations(args):
    """Handle the automations command."""
    try:
        with _client(args) as client:
            result = client.get_automations()
    except MailchimpError as e:
        _fail(str(e))
    _print_json(result)


def cmd_pause_automation(args):
    """Handle the pause-automation command."""
    try:
        require_id("automation", workflow_id=args.id)
    except ValidationError as e:
        _fail(str(e))
    path = resource_path(PAUSE_ALL_EMAILS_PATH, workflow_id=args.id)
    _run_action(args, "POST", path, f"Paused all emails of automation {args.id}")


def cmd_start_automation(args):
    """Handle the start-automation command."""
    try:
        require_id("automation", workflow_id=args.id)
    except ValidationError as e:
        _fail(str(e))
    path = resource_path(START_ALL_EMAILS_PATH, workflow_id=args.id)
    _run_action(args, "POST", path, f"Started all emails of automation {args.id}")


def cmd_stores(args):
    """Handle the stores command."""
    try:
        with _client(args) as client:
            result = client.get_stores(_paging(args))
    except MailchimpError as e:
        _fail(str(e))
    _print_json(result)


def cmd_lists(args):
    """Handle the lists command."""
    params = ListQueryParams(extended=_paging(args), email=args.email or "")
    try:
        with _client(args) as client:
            result = client.get_lists(params)
    except MailchimpError as e:
        _fail(str(e))
    _print_json(result)


def cmd_search_members(args):
    """Handle the search-members command."""
    params = SearchMembersQueryParams(query=args.query, list_id=args.list_id or "")
    try:
        with _client(args) as client:
            result = client.search_members(params)
    except MailchimpError as e:
        _fail(str(e))
    _print_json(result)


def _add_paging(parser):
    parser.add_argument("--count", type=int, help="Number of records to return")
    parser.add_argument("--offset", type=int, help="Number of records to skip")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mailchimp-client",
        description="Mailchimp Marketing API client",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Configure command
    configure_parser = subparsers.add_parser("configure", help="Save the API key and endpoint")
    configure_parser.add_argument("--api-key", help="Mailchimp API key (e.g., '0123abcd-us6')")
    configure_parser.add_argument("--endpoint", help="API base URL (derived from the key if omitted)")
    configure_parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    configure_parser.set_defaults(func=cmd_configure)

    # Campaign commands
    campaigns_parser = subparsers.add_parser("campaigns", help="List campaigns")
    _add_paging(campaigns_parser)
    campaigns_parser.add_argument("--type", help="Campaign type (e.g., 'regular')")
    campaigns_parser.add_argument("--status", help="Campaign status (e.g., 'sent')")
    campaigns_parser.add_argument("--list-id", help="Only campaigns sent to this list")
    campaigns_parser.set_defaults(func=cmd_campaigns)

    campaign_parser = subparsers.add_parser("campaign", help="Show one campaign")
    campaign_parser.add_argument("--id", required=True, help="Campaign ID")
    campaign_parser.set_defaults(func=cmd_campaign)

    delete_parser = subparsers.add_parser("delete-campaign", help="Delete a campaign")
    delete_parser.add_argument("--id", required=True, help="Campaign ID")
    delete_parser.set_defaults(func=cmd_delete_campaign)

    # Automation commands
    automations_parser = subparsers.add_parser("automations", help="List automations")
    automations_parser.set_defaults(func=cmd_automations)

    pause_parser = subparsers.add_parser("pause-automation", help="Pause all emails of an automation")
    pause_parser.add_argument("--id", required=True, help="Automation workflow ID")
    pause_parser.set_defaults(func=cmd_pause_automation)

    start_parser = subparsers.add_parser("start-automation", help="Start all emails of an automation")
    start_parser.add_argument("--id", required=True, help="Automation workflow ID")
    start_parser.set_defaults(func=cmd_start_automation)

    # Ecommerce
    stores_parser = subparsers.add_parser("stores", help="List ecommerce stores")
    _add_paging(stores_parser)
    stores_parser.set_defaults(func=cmd_stores)

    # Lists and members
    lists_parser = subparsers.add_parser("lists", help="List audience lists")
    _add_paging(lists_parser)
    lists_parser.add_argument("--email", help="Only lists this address is subscribed to")
    lists_parser.set_defaults(func=cmd_lists)

    search_parser = subparsers.add_parser("search-members", help="Search list members")
    search_parser.add_argument("--query", required=True, help="Search query (name or email)")
    search_parser.add_argument("--list-id", help="Restrict the search to one list")
    search_parser.set_defaults(func=cmd_search_members)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
