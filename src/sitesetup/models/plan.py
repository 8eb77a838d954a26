"""Provisioning plan model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from sitesetup import constants


class ProvisioningPlan(BaseModel):
    """Everything a single run needs to know; resolved stage by stage, then read-only."""

    model_config = ConfigDict(frozen=True)

    domain: str
    server_type: str = constants.SERVER_UNSET
    ssl_mode: str = constants.SSL_ASK
    should_run_ssl: bool = False
    certbot_email: str | None = None
    certbot_staging: bool = False
    dry_run: bool = False
    assume_yes: bool = False

    @property
    def config_filename(self) -> str:
        return f"{self.domain}.conf"
