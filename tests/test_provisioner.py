"""Tests for the provisioning steps."""

from __future__ import annotations

from pathlib import Path

import pytest
from rich.console import Console

from sitesetup.config import SiteSetupConfig
from sitesetup.errors import MissingTemplate
from sitesetup.models import ProvisioningPlan
from sitesetup.services.effects import SystemEffects
from sitesetup.services.provisioner import Provisioner, certbot_command


def _provisioner(plan: ProvisioningPlan, cfg: SiteSetupConfig) -> Provisioner:
    return Provisioner(plan, cfg, SystemEffects(), Console(soft_wrap=True, highlight=False))


class TestCertbotCommand:
    def test_with_email(self, tmp_config: SiteSetupConfig):
        plan = ProvisioningPlan(domain="example.net", server_type="nginx", certbot_email="admin@example.net")
        assert " ".join(certbot_command(plan, tmp_config)) == (
            "certbot --nginx -d example.net -d www.example.net --redirect "
            "--non-interactive --agree-tos --email admin@example.net"
        )

    def test_without_email(self, tmp_config: SiteSetupConfig):
        plan = ProvisioningPlan(domain="example.com", server_type="apache")
        assert certbot_command(plan, tmp_config)[1:] == [
            "--apache",
            "-d", "example.com",
            "-d", "www.example.com",
            "--redirect",
            "--non-interactive",
            "--agree-tos",
            "--register-unsafely-without-email",
        ]

    def test_staging_comes_last(self, tmp_config: SiteSetupConfig):
        plan = ProvisioningPlan(
            domain="example.com", server_type="nginx", certbot_email="a@example.com", certbot_staging=True
        )
        cmd = certbot_command(plan, tmp_config)
        assert cmd[-3:] == ["--email", "a@example.com", "--staging"]


class TestSiteDirectory:
    def test_renders_index(self, sandbox):
        cfg = sandbox.config
        plan = ProvisioningPlan(domain="example.com", server_type="nginx")

        _provisioner(plan, cfg).create_site_directory()

        site = cfg.web_root / "example.com" / "public_html"
        index = (site / "index.html").read_text()
        assert "<title>example.com</title>" in index
        assert f"{cfg.web_root}/example.com/public_html" in index
        assert "{{" not in index
        assert (site / "style.css").exists()

    def test_rerun_overwrites(self, sandbox):
        cfg = sandbox.config
        plan = ProvisioningPlan(domain="example.com", server_type="nginx")
        index = cfg.web_root / "example.com" / "public_html" / "index.html"

        _provisioner(plan, cfg).create_site_directory()
        index.write_text("custom")
        _provisioner(plan, cfg).create_site_directory()

        assert "example.com" in index.read_text()


class TestServerConfig:
    def test_apache_config(self, sandbox):
        cfg = sandbox.config
        plan = ProvisioningPlan(domain="example.com", server_type="apache")

        _provisioner(plan, cfg).create_server_config()

        conf = (cfg.apache_available_dir / "example.com.conf").read_text()
        assert "ServerName example.com" in conf
        assert f"DocumentRoot {cfg.web_root}/example.com/public_html" in conf

    def test_nginx_config(self, sandbox):
        cfg = sandbox.config
        plan = ProvisioningPlan(domain="example.net", server_type="nginx")

        _provisioner(plan, cfg).create_server_config()

        conf = (cfg.nginx_available_dir / "example.net.conf").read_text()
        assert "server_name example.net www.example.net;" in conf
        assert f"root {cfg.web_root}/example.net/public_html;" in conf

    def test_missing_template(self, sandbox, tmp_path: Path):
        cfg = sandbox.config.model_copy(update={"template_dir": tmp_path / "no-templates"})
        plan = ProvisioningPlan(domain="example.com", server_type="nginx")

        with pytest.raises(MissingTemplate, match="nginx.template.conf"):
            _provisioner(plan, cfg).create_server_config()


class TestEnableSite:
    def test_apache_order(self, sandbox):
        plan = ProvisioningPlan(domain="example.com", server_type="apache")

        _provisioner(plan, sandbox.config).enable_apache_site()

        assert sandbox.log_lines() == [
            "a2ensite example.com.conf",
            "systemctl reload apache2",
            "systemctl restart apache2",
        ]

    def test_nginx_symlink_is_idempotent(self, sandbox, capsys):
        cfg = sandbox.config
        plan = ProvisioningPlan(domain="example.net", server_type="nginx")
        link = cfg.nginx_enabled_dir / "example.net.conf"

        _provisioner(plan, cfg).create_server_config()
        _provisioner(plan, cfg).enable_nginx_site()
        _provisioner(plan, cfg).enable_nginx_site()

        assert link.is_symlink()
        assert link.resolve() == (cfg.nginx_available_dir / "example.net.conf").resolve()
        assert list(cfg.nginx_enabled_dir.iterdir()) == [link]
        assert f"Nginx symlink already exists: {link}" in capsys.readouterr().out
        assert sandbox.log_lines() == [
            "systemctl reload nginx",
            "systemctl restart nginx",
            "systemctl reload nginx",
            "systemctl restart nginx",
        ]

    def test_dangling_symlink_left_alone(self, sandbox):
        cfg = sandbox.config
        cfg.nginx_enabled_dir.mkdir(parents=True)
        link = cfg.nginx_enabled_dir / "example.net.conf"
        link.symlink_to(cfg.nginx_available_dir / "gone.conf")
        plan = ProvisioningPlan(domain="example.net", server_type="nginx")

        _provisioner(plan, cfg).enable_nginx_site()

        assert link.is_symlink()
        assert Path(link.readlink()).name == "gone.conf"


class TestProvision:
    def test_certbot_runs_last(self, sandbox):
        plan = ProvisioningPlan(
            domain="example.com", server_type="apache", should_run_ssl=True, certbot_email="ops@example.com"
        )

        _provisioner(plan, sandbox.config).provision()

        assert sandbox.log_lines()[-1] == (
            "certbot --apache -d example.com -d www.example.com --redirect "
            "--non-interactive --agree-tos --email ops@example.com"
        )

    def test_no_certbot_without_ssl(self, sandbox):
        plan = ProvisioningPlan(domain="example.com", server_type="nginx")

        _provisioner(plan, sandbox.config).provision()

        assert not any(line.startswith("certbot") for line in sandbox.log_lines())
