"""Shared test fixtures."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from sitesetup.config import SiteSetupConfig, get_config

_MOCK_COMMANDS = ("systemctl", "a2ensite", "certbot")


class Sandbox:
    """A throwaway host layout with mock service commands on PATH."""

    def __init__(self, root: Path):
        self.root = root
        self.bin_dir = root / "mock-bin"
        self.log = root / "mock.log"

    @property
    def config(self) -> SiteSetupConfig:
        return get_config()

    def log_lines(self) -> list[str]:
        if not self.log.exists():
            return []
        return self.log.read_text().splitlines()


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    monkeypatch.setenv("WEB_SITE_ACTOR", "tester")
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def tmp_config(tmp_path: Path) -> SiteSetupConfig:
    """Return a SiteSetupConfig pointing at temp directories."""
    return SiteSetupConfig(
        web_root=tmp_path / "www",
        apache_available_dir=tmp_path / "apache" / "sites-available",
        nginx_available_dir=tmp_path / "nginx" / "sites-available",
        nginx_enabled_dir=tmp_path / "nginx" / "sites-enabled",
        apache_install_dir=tmp_path / "etc-apache2",
        nginx_install_dir=tmp_path / "etc-nginx",
        nginx_bin="missing-nginx-binary",
        a2ensite_bin="missing-a2ensite-binary",
        audit_log_path=None,
    )


@pytest.fixture
def sandbox(tmp_path: Path, monkeypatch) -> Sandbox:
    """Point every configured location at tmp_path and log mock command calls."""
    box = Sandbox(tmp_path)
    box.bin_dir.mkdir()
    for name in _MOCK_COMMANDS:
        script = box.bin_dir / name
        script.write_text(f'#!/bin/sh\necho "{name} $*" >> "$MOCK_LOG"\n')
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    monkeypatch.setenv("PATH", box.bin_dir.as_posix() + os.pathsep + os.environ["PATH"])
    monkeypatch.setenv("MOCK_LOG", str(box.log))
    monkeypatch.setenv("WEB_SITE_ROOT", str(tmp_path / "www"))
    monkeypatch.setenv("WEB_SITE_APACHE_AVAILABLE_DIR", str(tmp_path / "apache" / "sites-available"))
    monkeypatch.setenv("WEB_SITE_NGINX_AVAILABLE_DIR", str(tmp_path / "nginx" / "sites-available"))
    monkeypatch.setenv("WEB_SITE_NGINX_ENABLED_DIR", str(tmp_path / "nginx" / "sites-enabled"))
    monkeypatch.setenv("WEB_SITE_APACHE_DIR", str(tmp_path / "etc-apache2"))
    monkeypatch.setenv("WEB_SITE_NGINX_DIR", str(tmp_path / "etc-nginx"))
    monkeypatch.setenv("WEB_SITE_NGINX_BIN", "missing-nginx-binary")
    monkeypatch.setenv("WEB_SITE_SYSTEMCTL_BIN", "systemctl")
    monkeypatch.setenv("WEB_SITE_A2ENSITE_BIN", "a2ensite")
    monkeypatch.setenv("WEB_SITE_CERTBOT_BIN", "certbot")
    monkeypatch.delenv("WEB_SITE_AUDIT_LOG", raising=False)
    monkeypatch.delenv("WEB_SITE_STATIC_DIR", raising=False)
    monkeypatch.delenv("WEB_SITE_TEMPLATE_DIR", raising=False)
    return box
