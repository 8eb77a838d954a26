"""Preflight checks run once the plan is fully resolved."""

from __future__ import annotations

import os
import shutil

from sitesetup import constants
from sitesetup.config import SiteSetupConfig
from sitesetup.errors import MissingDependency
from sitesetup.models import ProvisioningPlan


def required_commands(plan: ProvisioningPlan, cfg: SiteSetupConfig) -> list[str]:
    needed = ["cp", "mkdir", "sed"]
    if plan.server_type == constants.SERVER_APACHE:
        needed += [cfg.a2ensite_bin, cfg.systemctl_bin]
    else:
        needed += ["ln", cfg.systemctl_bin]
    if plan.should_run_ssl:
        needed.append(cfg.certbot_bin)
    return needed


def check_required_commands(plan: ProvisioningPlan, cfg: SiteSetupConfig) -> None:
    """Raise MissingDependency for the first command not found on PATH."""
    for cmd in required_commands(plan, cfg):
        if shutil.which(cmd) is None:
            raise MissingDependency(f"Missing required command: {cmd}")


def running_as_root() -> bool:
    return os.geteuid() == 0
