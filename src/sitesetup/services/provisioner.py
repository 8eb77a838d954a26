"""Create the site directory, render the server config, enable it, request a certificate."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from sitesetup import constants
from sitesetup.config import SiteSetupConfig
from sitesetup.errors import MissingTemplate
from sitesetup.models import ProvisioningPlan
from sitesetup.services.effects import Effects


def certbot_command(plan: ProvisioningPlan, cfg: SiteSetupConfig) -> list[str]:
    """Build the certbot invocation; argument order is part of its contract."""
    cmd = [
        cfg.certbot_bin,
        f"--{plan.server_type}",
        "-d", plan.domain,
        "-d", f"www.{plan.domain}",
        "--redirect",
        "--non-interactive",
        "--agree-tos",
    ]
    if plan.certbot_email:
        cmd.extend(["--email", plan.certbot_email])
    else:
        cmd.append("--register-unsafely-without-email")
    if plan.certbot_staging:
        cmd.append("--staging")
    return cmd


class Provisioner:
    """Runs the provisioning steps in order; nothing is rolled back on failure."""

    def __init__(
        self,
        plan: ProvisioningPlan,
        cfg: SiteSetupConfig,
        effects: Effects,
        console: Console,
    ):
        self.plan = plan
        self.cfg = cfg
        self.effects = effects
        self.console = console

    @property
    def placeholders(self) -> dict[str, str]:
        return {
            constants.DOMAIN_PLACEHOLDER: self.plan.domain,
            constants.WEB_ROOT_PLACEHOLDER: str(self.cfg.web_root),
        }

    @property
    def available_config_path(self) -> Path:
        return self.cfg.available_dir(self.plan.server_type) / self.plan.config_filename

    @property
    def enabled_link_path(self) -> Path:
        return self.cfg.nginx_enabled_dir / self.plan.config_filename

    def provision(self) -> None:
        plan = self.plan
        total = 4 if plan.should_run_ssl else 3

        self.console.print(f"[bold][1/{total}][/bold] Creating site directory")
        self.create_site_directory()

        self.console.print(f"[bold][2/{total}][/bold] Rendering {plan.server_type} config")
        self.create_server_config()

        self.console.print(f"[bold][3/{total}][/bold] Enabling site")
        if plan.server_type == constants.SERVER_APACHE:
            self.enable_apache_site()
        else:
            self.enable_nginx_site()

        if plan.should_run_ssl:
            self.console.print(f"[bold][4/{total}][/bold] Requesting certificate")
            self.run_certbot()

    def create_site_directory(self) -> None:
        site_path = self.cfg.site_dir(self.plan.domain)
        self.effects.make_dirs(site_path)
        self.effects.copy_tree(self.cfg.static_dir, site_path)
        self.effects.replace_placeholders(site_path / "index.html", self.placeholders)
        self.console.print(f"Created site files in {escape(str(site_path))}")

    def create_server_config(self) -> None:
        server_type = self.plan.server_type
        template_path = self.cfg.template_path(server_type)
        config_path = self.available_config_path

        self.effects.make_dirs(config_path.parent)
        if not template_path.is_file():
            raise MissingTemplate(f"Missing template file: {template_path}")

        self.effects.copy_file(template_path, config_path)
        self.effects.replace_placeholders(config_path, self.placeholders)
        self.console.print(f"Created {server_type} config: {escape(str(config_path))}")

    def enable_apache_site(self) -> None:
        systemctl = self.cfg.systemctl_bin
        self.effects.run([self.cfg.a2ensite_bin, self.plan.config_filename])
        self.effects.run([systemctl, "reload", constants.APACHE_SERVICE])
        self.effects.run([systemctl, "restart", constants.APACHE_SERVICE])
        self.console.print(f"Enabled Apache site {self.plan.domain}")

    def enable_nginx_site(self) -> None:
        systemctl = self.cfg.systemctl_bin
        link_path = self.enabled_link_path

        self.effects.make_dirs(self.cfg.nginx_enabled_dir)
        # is_symlink() also catches dangling links, which exists() misses
        if link_path.exists() or link_path.is_symlink():
            self.console.print(f"Nginx symlink already exists: {escape(str(link_path))}")
        else:
            self.effects.symlink(self.available_config_path, link_path)
            self.console.print(f"Created Nginx symlink: {escape(str(link_path))}")

        self.effects.run([systemctl, "reload", constants.NGINX_SERVICE])
        self.effects.run([systemctl, "restart", constants.NGINX_SERVICE])
        self.console.print(f"Enabled Nginx site {self.plan.domain}")

    def run_certbot(self) -> None:
        self.effects.run(certbot_command(self.plan, self.cfg))
        self.console.print(f"Requested SSL certificate via Certbot for {self.plan.domain}")
