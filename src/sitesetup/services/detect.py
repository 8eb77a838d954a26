"""Score-based detection of the installed web server."""

from __future__ import annotations

import shutil

from pydantic import BaseModel

from sitesetup import constants
from sitesetup.config import SiteSetupConfig
from sitesetup.errors import AutoDetectionFailed


class Detection(BaseModel):
    apache_score: int
    nginx_score: int
    server_type: str


def apache_score(cfg: SiteSetupConfig) -> int:
    score = 0
    if cfg.apache_available_dir.is_dir():
        score += 2
    if shutil.which(cfg.a2ensite_bin):
        score += 2
    if cfg.apache_install_dir.is_dir():
        score += 1
    return score


def nginx_score(cfg: SiteSetupConfig) -> int:
    score = 0
    if cfg.nginx_available_dir.is_dir():
        score += 2
    if cfg.nginx_enabled_dir.is_dir():
        score += 1
    if shutil.which(cfg.nginx_bin):
        score += 1
    if cfg.nginx_install_dir.is_dir():
        score += 1
    return score


def detect_server_type(cfg: SiteSetupConfig) -> Detection:
    """Pick apache or nginx from what is present on this host.

    Ties go to nginx. Raises AutoDetectionFailed when neither scores.
    """
    apache = apache_score(cfg)
    nginx = nginx_score(cfg)

    if apache == 0 and nginx == 0:
        raise AutoDetectionFailed(
            "Auto-detection could not find Apache or Nginx. "
            "Use --server apache or --server nginx."
        )

    server_type = constants.SERVER_NGINX if nginx >= apache else constants.SERVER_APACHE
    return Detection(apache_score=apache, nginx_score=nginx, server_type=server_type)
