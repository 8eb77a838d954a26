"""Central configuration — SiteSetupConfig resolved once at startup."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field

from sitesetup import constants


def _env_path(name: str, default: Path) -> Path:
    env = os.environ.get(name)
    return Path(env) if env else default


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name) or default


def _env_optional_path(name: str) -> Path | None:
    env = os.environ.get(name)
    return Path(env) if env else None


class SiteSetupConfig(BaseModel):
    """Filesystem locations and external command names used by a run."""

    web_root: Path = Field(default_factory=lambda: _env_path("WEB_SITE_ROOT", constants.WEB_ROOT))
    apache_available_dir: Path = Field(
        default_factory=lambda: _env_path("WEB_SITE_APACHE_AVAILABLE_DIR", constants.APACHE_AVAILABLE_DIR)
    )
    nginx_available_dir: Path = Field(
        default_factory=lambda: _env_path("WEB_SITE_NGINX_AVAILABLE_DIR", constants.NGINX_AVAILABLE_DIR)
    )
    nginx_enabled_dir: Path = Field(
        default_factory=lambda: _env_path("WEB_SITE_NGINX_ENABLED_DIR", constants.NGINX_ENABLED_DIR)
    )
    apache_install_dir: Path = Field(
        default_factory=lambda: _env_path("WEB_SITE_APACHE_DIR", constants.APACHE_INSTALL_DIR)
    )
    nginx_install_dir: Path = Field(
        default_factory=lambda: _env_path("WEB_SITE_NGINX_DIR", constants.NGINX_INSTALL_DIR)
    )
    systemctl_bin: str = Field(default_factory=lambda: _env_str("WEB_SITE_SYSTEMCTL_BIN", constants.SYSTEMCTL_BIN))
    a2ensite_bin: str = Field(default_factory=lambda: _env_str("WEB_SITE_A2ENSITE_BIN", constants.A2ENSITE_BIN))
    certbot_bin: str = Field(default_factory=lambda: _env_str("WEB_SITE_CERTBOT_BIN", constants.CERTBOT_BIN))
    nginx_bin: str = Field(default_factory=lambda: _env_str("WEB_SITE_NGINX_BIN", constants.NGINX_BIN))
    static_dir: Path = Field(default_factory=lambda: _env_path("WEB_SITE_STATIC_DIR", constants.STATIC_DIR))
    template_dir: Path = Field(default_factory=lambda: _env_path("WEB_SITE_TEMPLATE_DIR", constants.TEMPLATE_DIR))
    audit_log_path: Path | None = Field(default_factory=lambda: _env_optional_path("WEB_SITE_AUDIT_LOG"))

    def site_dir(self, domain: str) -> Path:
        return self.web_root / domain / "public_html"

    def available_dir(self, server_type: str) -> Path:
        if server_type == constants.SERVER_APACHE:
            return self.apache_available_dir
        return self.nginx_available_dir

    def template_path(self, server_type: str) -> Path:
        if server_type == constants.SERVER_APACHE:
            return self.template_dir / constants.APACHE_TEMPLATE
        return self.template_dir / constants.NGINX_TEMPLATE


@lru_cache(maxsize=1)
def get_config() -> SiteSetupConfig:
    """Return the global SiteSetupConfig (resolved once, cached)."""
    return SiteSetupConfig()
