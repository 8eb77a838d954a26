"""Root Typer application and console entry points."""

from __future__ import annotations

import importlib
import sys
from types import ModuleType
from typing import Optional, Sequence

import typer

from sitesetup import constants
from sitesetup.commands import create
from sitesetup.errors import FilesystemError, InvalidOption, MissingArgument, SiteSetupError
from sitesetup.services.interaction import Interaction


def _click_exceptions() -> ModuleType:
    """Return the exceptions module of the Click that Typer runs on.

    Recent Typer releases bundle their own copy of Click, so the standalone
    ``click`` package may not be the one raising usage errors.
    """
    base = next(cls for cls in typer.Context.__mro__[1:] if cls.__name__ == "Context")
    package = base.__module__.rpartition(".")[0]
    return importlib.import_module(f"{package}.exceptions")


click_exceptions = _click_exceptions()

app = typer.Typer(
    name="create-web-site",
    help="Provision a static Apache or Nginx site, optionally with a Certbot certificate.",
    add_completion=False,
)

app.command(
    name="create",
    context_settings={"allow_extra_args": True, "help_option_names": ["-h", "--help"]},
)(create.create)


def _fail(exc: SiteSetupError) -> int:
    typer.echo(f"Error: {exc}", err=True)
    return exc.exit_code


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    prog_name: str = "create-web-site",
    default_server: str = constants.SERVER_UNSET,
    interaction: Optional[Interaction] = None,
) -> int:
    """Run the command and map every failure to one ``Error:`` line.

    Returns the process exit status instead of exiting, so the shortcut
    entry points and tests share one code path.
    """
    command = typer.main.get_command(app)
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        rv = command.main(
            args=args,
            prog_name=prog_name,
            standalone_mode=False,
            obj={"default_server": default_server, "interaction": interaction},
        )
    except click_exceptions.NoSuchOption as exc:
        return _fail(InvalidOption(f"Invalid option: {exc.option_name}"))
    except click_exceptions.BadOptionUsage as exc:
        if "requires an argument" in exc.message:
            return _fail(MissingArgument(f"Missing value for {exc.option_name}"))
        return _fail(InvalidOption(exc.format_message()))
    except click_exceptions.UsageError as exc:
        return _fail(InvalidOption(exc.format_message()))
    except click_exceptions.Abort:
        return _fail(SiteSetupError("Aborted."))
    except SiteSetupError as exc:
        return _fail(exc)
    except OSError as exc:
        return _fail(FilesystemError(str(exc)))
    return rv if isinstance(rv, int) else 0


def run() -> None:
    sys.exit(main())


def run_apache() -> None:
    sys.exit(main(prog_name="create-apache-site", default_server=constants.SERVER_APACHE))


def run_nginx() -> None:
    sys.exit(main(prog_name="create-nginx-site", default_server=constants.SERVER_NGINX))


if __name__ == "__main__":
    run()
