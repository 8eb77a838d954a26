"""sitesetup — provision a static Apache or Nginx site, optionally with a Certbot certificate."""

__version__ = "0.1.0"
