"""Shared constants for site provisioning."""

from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent

# Bundled assets
STATIC_DIR = PACKAGE_DIR / "static"
TEMPLATE_DIR = PACKAGE_DIR / "templates"
APACHE_TEMPLATE = "apache.template.conf"
NGINX_TEMPLATE = "nginx.template.conf"

# Default locations (overridable via SiteSetupConfig / env vars)
WEB_ROOT = Path("/var/www")
APACHE_AVAILABLE_DIR = Path("/etc/apache2/sites-available")
NGINX_AVAILABLE_DIR = Path("/etc/nginx/sites-available")
NGINX_ENABLED_DIR = Path("/etc/nginx/sites-enabled")

# Install directories checked by auto-detection
APACHE_INSTALL_DIR = Path("/etc/apache2")
NGINX_INSTALL_DIR = Path("/etc/nginx")

# External commands
SYSTEMCTL_BIN = "systemctl"
A2ENSITE_BIN = "a2ensite"
CERTBOT_BIN = "certbot"
NGINX_BIN = "nginx"

# Service units
APACHE_SERVICE = "apache2"
NGINX_SERVICE = "nginx"

# Template placeholders
DOMAIN_PLACEHOLDER = "{{DOMAIN_NAME}}"
WEB_ROOT_PLACEHOLDER = "{{WEB_ROOT}}"

# Server types
SERVER_UNSET = ""
SERVER_AUTO = "auto"
SERVER_APACHE = "apache"
SERVER_NGINX = "nginx"

# SSL modes
SSL_ASK = "ask"
SSL_YES = "yes"
SSL_NO = "no"
