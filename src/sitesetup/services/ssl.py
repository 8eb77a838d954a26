"""Decide whether to request a certificate, and with which identity."""

from __future__ import annotations

import re

from sitesetup import constants
from sitesetup.errors import InternalStateError
from sitesetup.models import ProvisioningPlan
from sitesetup.services.interaction import Interaction

_AFFIRMATIVE_RE = re.compile(r"^[Yy]([Ee][Ss])?$")

SSL_QUESTION = "Request SSL certificate from Certbot now? [y/N]"
EMAIL_QUESTION = "Certbot email (leave blank to skip)"


def ask_yes_no(interaction: Interaction, question: str) -> bool:
    return bool(_AFFIRMATIVE_RE.match(interaction.ask(question, default="")))


def decide_ssl(plan: ProvisioningPlan, interaction: Interaction) -> bool:
    if plan.ssl_mode == constants.SSL_YES:
        return True
    if plan.ssl_mode == constants.SSL_NO:
        return False
    if plan.ssl_mode == constants.SSL_ASK:
        if plan.assume_yes:
            return True
        if interaction.is_interactive():
            return ask_yes_no(interaction, SSL_QUESTION)
        return False
    raise InternalStateError(f"Unexpected SSL mode '{plan.ssl_mode}'.")


def resolve_certbot_email(plan: ProvisioningPlan, interaction: Interaction) -> str | None:
    """Prompt for an email only when it can be asked and will be used.

    A blank answer means registering without an email.
    """
    if not plan.should_run_ssl or plan.certbot_email:
        return plan.certbot_email
    if plan.assume_yes or not interaction.is_interactive():
        return plan.certbot_email
    return interaction.ask(EMAIL_QUESTION, default="").strip() or None


def resolve_ssl(plan: ProvisioningPlan, interaction: Interaction) -> ProvisioningPlan:
    plan = plan.model_copy(update={"should_run_ssl": decide_ssl(plan, interaction)})
    return plan.model_copy(update={"certbot_email": resolve_certbot_email(plan, interaction)})
