#!/usr/bin/env python3
"""
Terminal admin console for insurance clients and policies.

Examples:
  python scripts/run_console.py policies list --page 0 --size 10 --sort premiumAmount --direction desc
  python scripts/run_console.py clients show 3
  python scripts/run_console.py policies create --set policy_number=POL-1 --set start_date=2030-01-01 ...
  python scripts/run_console.py policies update 7 --set status=CANCELLED
  python scripts/run_console.py policies delete 7 --yes

Set INSURANCE_API_BASE_URL to point at a backend, or INTEGRATIONS_MODE=mock
(or --mock) to run against the in-process mock backend with demo data.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, List

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from src.console.controllers import CreateFormController, DetailController, EditFormController, ListController
from src.console.dependencies import build_api_client
from src.console.navigation import Navigator, owner_from_query
from src.console.presentation import render_alert, render_detail, render_form_errors, render_list
from src.console.schemas import CLIENT_VIEW, POLICY_VIEW, VIEWS
from src.integrations.contracts.interfaces import SortDirection
from src.utils.config_loader import load_api_settings


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def parse_assignments(pairs: List[str]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise SystemExit(f"--set expects key=value, got {pair!r}")
        key, value = pair.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def ask(prompt: str) -> bool:
    return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


async def run(args: argparse.Namespace) -> int:
    settings = load_api_settings(args.config, base_url_override=args.base_url)
    api = build_api_client(settings, mock=True if args.mock else None)
    view = VIEWS[args.entity]
    resource = api.policies if view is POLICY_VIEW else api.clients
    navigator = Navigator(view.list_path())

    if args.command == "list":
        ctrl = ListController(view, resource, paginated=not args.all, defaults=settings.pagination)
        ctrl.state.page = args.page if args.page is not None else ctrl.state.page
        ctrl.state.size = args.size or ctrl.state.size
        if args.sort:
            ctrl.state.sort_field = args.sort
        if args.direction:
            ctrl.state.sort_direction = SortDirection(args.direction)
        await ctrl.mount()
        print(render_list(view, ctrl.state))
        return 1 if ctrl.state.error else 0

    if args.command == "show":
        owned = api.policies if view is CLIENT_VIEW else None
        ctrl = DetailController(
            view, resource, args.id, navigator=navigator, owned=owned, owned_view=POLICY_VIEW if owned else None
        )
        await ctrl.mount()
        print(render_detail(view, ctrl.state, POLICY_VIEW if owned else None))
        if ctrl.state.entity is not None and owned is not None:
            print(f"\nAdd a policy: run_console.py policies create --location '{ctrl.create_related_path()}' --set ...")
        return 0 if ctrl.state.entity is not None else 1

    if args.command == "delete":
        ctrl = DetailController(view, resource, args.id, navigator=navigator)
        await ctrl.mount()
        if ctrl.state.entity is None:
            print(render_alert("error", ctrl.state.error or "Not found."))
            return 1
        deleted = await ctrl.delete(lambda prompt: True if args.yes else ask(prompt))
        if ctrl.state.error:
            print(render_alert("error", ctrl.state.error))
            return 1
        print(render_alert("success", f"Deleted {view.singular} {args.id}." if deleted else "Cancelled."))
        return 0

    values = parse_assignments(args.set)
    owner_resource = api.clients if view is POLICY_VIEW else None
    if args.command == "create":
        owner_id = args.client_id if args.client_id is not None else owner_from_query(args.location or "")
        ctrl = CreateFormController(
            view, resource, owner_id=owner_id, navigator=navigator, owner_resource=owner_resource
        )
        await ctrl.mount()
        new_id = await ctrl.submit(values)
        if new_id is None:
            print(render_form_errors(ctrl.state))
            return 1
        print(render_alert("success", f"Created {view.singular} {new_id} -> {navigator.current}"))
        return 0

    if args.command == "update":
        ctrl = EditFormController(view, resource, args.id, navigator=navigator, owner_resource=owner_resource)
        await ctrl.mount()
        if ctrl.entity is None:
            print(render_alert("error", ctrl.state.error or "Not found."))
            return 1
        if not await ctrl.submit(values):
            print(render_form_errors(ctrl.state))
            return 1
        print(render_alert("success", f"Updated {view.singular} {args.id} -> {navigator.current}"))
        return 0

    return 2


def main() -> int:
    parser = argparse.ArgumentParser(description="Insurance clients/policies admin console")
    parser.add_argument("--config", type=Path, default=None, help="Path to console_config.yml")
    parser.add_argument("--base-url", default=None, help="Override the backend base URL")
    parser.add_argument("--mock", action="store_true", help="Use the in-process mock backend with demo data")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests and responses")
    parser.add_argument("entity", choices=sorted(VIEWS), help="Which collection to work with")

    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List one page")
    p_list.add_argument("--page", type=int, default=None, help="Zero-based page index")
    p_list.add_argument("--size", type=int, default=None, help="Page size")
    p_list.add_argument("--sort", default=None, help="Sort field (wire name, e.g. policyNumber)")
    p_list.add_argument("--direction", choices=["asc", "desc"], default=None)
    p_list.add_argument("--all", action="store_true", help="Fetch the whole collection without paging")

    p_show = sub.add_parser("show", help="Show one entity")
    p_show.add_argument("id", type=int)

    p_delete = sub.add_parser("delete", help="Delete one entity")
    p_delete.add_argument("id", type=int)
    p_delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    p_create = sub.add_parser("create", help="Create an entity from --set key=value pairs")
    p_create.add_argument("--set", action="append", default=[], metavar="FIELD=VALUE")
    p_create.add_argument("--client-id", type=int, default=None, help="Pre-select the owning client (policies)")
    p_create.add_argument("--location", default=None, help="Create-form location, e.g. /policies/create?clientId=3")

    p_update = sub.add_parser("update", help="Update an entity with --set key=value pairs")
    p_update.add_argument("id", type=int)
    p_update.add_argument("--set", action="append", default=[], metavar="FIELD=VALUE")

    args = parser.parse_args()
    setup_logging(args.verbose)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
