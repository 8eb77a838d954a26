"""Create (provision) a static site."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import typer
from rich.console import Console

from sitesetup import constants
from sitesetup.audit import audit
from sitesetup.config import SiteSetupConfig, get_config
from sitesetup.errors import InvalidOption, MissingDomain
from sitesetup.models import ProvisioningPlan
from sitesetup.services import detect, preflight
from sitesetup.services.effects import DryRunEffects, Effects, SystemEffects
from sitesetup.services.interaction import Interaction, TerminalInteraction
from sitesetup.services.provisioner import Provisioner
from sitesetup.services.ssl import resolve_ssl
from sitesetup.services.validation import (
    validate_domain,
    validate_requested_server_type,
    validate_server_type,
)

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)

SERVER_QUESTION = "Web server [auto/apache/nginx] (default: auto)"

# ctx.meta key holding server selectors in the order they were given
SERVER_SELECTIONS = "sitesetup.server_selections"


def _record_server_selection(ctx: typer.Context, param: typer.CallbackParam, value: Any) -> Any:
    """Append a server selector to ``ctx.meta`` as Click processes it.

    Click runs parameter callbacks in command-line order, so the list ends
    with the selector given last. Unused options arrive as None or False.
    """
    if param.name == "server":
        selected = value if isinstance(value, str) else None
    else:
        selected = param.name if value is True else None
    if selected is not None:
        ctx.meta.setdefault(SERVER_SELECTIONS, []).append(selected)
    return value


def resolve_options(
    *,
    domain: Optional[str],
    server_selections: Sequence[str] = (),
    ssl: Optional[bool] = None,
    certbot_email: Optional[str] = None,
    certbot_staging: bool = False,
    yes: bool = False,
    dry_run: bool = False,
    default_server: str = constants.SERVER_UNSET,
) -> ProvisioningPlan:
    """Turn parsed flags into the initial plan.

    ``server_selections`` lists the server selectors in command-line order
    and the last one wins. ``default_server`` is the server type implied by
    the entry point; any explicit selector replaces it.
    """
    if not domain:
        raise MissingDomain("You must provide -d|--domain.")

    server_type = server_selections[-1] if server_selections else default_server

    if ssl is None:
        ssl_mode = constants.SSL_ASK
    else:
        ssl_mode = constants.SSL_YES if ssl else constants.SSL_NO

    return ProvisioningPlan(
        domain=domain,
        server_type=server_type.lower(),
        ssl_mode=ssl_mode,
        certbot_email=certbot_email or None,
        certbot_staging=certbot_staging,
        dry_run=dry_run,
        assume_yes=yes,
    )


def _prompt_for_server_type(plan: ProvisioningPlan, interaction: Interaction) -> ProvisioningPlan:
    if plan.server_type:
        return plan

    if interaction.is_interactive():
        selection = interaction.ask(SERVER_QUESTION, default="").strip().lower()
        server_type = selection or constants.SERVER_AUTO
    else:
        server_type = constants.SERVER_AUTO

    validate_requested_server_type(server_type)
    return plan.model_copy(update={"server_type": server_type})


def _resolve_auto_server_type(plan: ProvisioningPlan, cfg: SiteSetupConfig) -> ProvisioningPlan:
    if plan.server_type != constants.SERVER_AUTO:
        return plan

    detection = detect.detect_server_type(cfg)
    console.print(f"Auto-selected server: {detection.server_type}")
    return plan.model_copy(update={"server_type": detection.server_type})


def resolve_plan(
    plan: ProvisioningPlan,
    cfg: SiteSetupConfig,
    interaction: Interaction,
) -> ProvisioningPlan:
    """Validate, settle the server type, then settle SSL."""
    validate_domain(plan.domain)
    validate_requested_server_type(plan.server_type)
    plan = _prompt_for_server_type(plan, interaction)
    plan = _resolve_auto_server_type(plan, cfg)
    validate_server_type(plan.server_type)
    return resolve_ssl(plan, interaction)


def _print_summary(plan: ProvisioningPlan) -> None:
    console.print(f"Domain: {plan.domain}")
    console.print(f"Server: {plan.server_type}")
    console.print(f"SSL: {str(plan.should_run_ssl).lower()}")
    if plan.certbot_email:
        console.print(f"Certbot email: {plan.certbot_email}", markup=False)
    if plan.dry_run:
        console.print("Dry run mode enabled.")


def create(
    ctx: typer.Context,
    domain: Optional[str] = typer.Option(None, "--domain", "-d", help="Domain name to configure."),
    server: Optional[str] = typer.Option(
        None, "--server", "-s", help="Web server: apache, nginx, or auto.", callback=_record_server_selection
    ),
    auto: bool = typer.Option(
        False, "--auto", help="Shortcut for --server auto.", callback=_record_server_selection
    ),
    apache: bool = typer.Option(
        False, "--apache", help="Shortcut for --server apache.", callback=_record_server_selection
    ),
    nginx: bool = typer.Option(
        False, "--nginx", help="Shortcut for --server nginx.", callback=_record_server_selection
    ),
    ssl: Optional[bool] = typer.Option(
        None, "--ssl/--no-ssl", help="Always request, or skip, a Certbot certificate.", show_default=False
    ),
    certbot_email: Optional[str] = typer.Option(None, "--certbot-email", help="Email address for Certbot."),
    certbot_staging: bool = typer.Option(False, "--certbot-staging", help="Use Certbot staging endpoint."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Auto-confirm SSL prompt when applicable."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print planned actions without making changes."),
) -> None:
    """Create a static site for Apache or Nginx and optionally request a certificate.

    Server shortcuts: create-apache-site and create-nginx-site take the same
    options with the server type pre-selected.
    """
    if ctx.args:
        raise InvalidOption(f"Invalid option: {ctx.args[0]}")

    obj = ctx.obj or {}
    interaction: Interaction = obj.get("interaction") or TerminalInteraction()
    cfg = get_config()

    plan = resolve_options(
        domain=domain,
        server_selections=ctx.meta.get(SERVER_SELECTIONS, []),
        ssl=ssl,
        certbot_email=certbot_email,
        certbot_staging=certbot_staging,
        yes=yes,
        dry_run=dry_run,
        default_server=obj.get("default_server", constants.SERVER_UNSET),
    )
    plan = resolve_plan(plan, cfg, interaction)

    preflight.check_required_commands(plan, cfg)
    if not plan.dry_run and not preflight.running_as_root():
        err_console.print("Warning: running without root; writes may fail for system paths.")

    _print_summary(plan)

    effects: Effects = DryRunEffects(console) if plan.dry_run else SystemEffects()
    audit_path = None if plan.dry_run else cfg.audit_log_path

    with audit(
        "site.create",
        target=plan.domain,
        path=audit_path,
        server=plan.server_type,
        ssl=plan.should_run_ssl,
        staging=plan.certbot_staging,
    ):
        Provisioner(plan, cfg, effects, console).provision()

    console.print(f"[green bold]Setup complete[/green bold] for {plan.domain} ({plan.server_type})")
