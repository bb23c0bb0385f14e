"""
terraform-hybrid Command Line Interface.

Usage: terraform-hybrid [OPTIONS] COMMAND [ARGS]...
Help: terraform-hybrid --help

Commands:
    generate-backend  Generate backend.tf files for a config and provider folder
    workspace         Manage Terraform workspaces
    version           Show terraform-hybrid and Terraform versions
"""

import click

from . import __version__
from .config.settings import Settings
from .core.backend_manager import BackendManager
from .core.process_runner import SubprocessRunner
from .core.workspace_manager import WorkspaceManager
from .errors import TerraformHybridError
from .utils import setup_logging
from .utils.validators import validate_terraform_installed


@click.group()
@click.option("--log-level", default="INFO", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Console log level.")
@click.option("--log-file", is_flag=True, help="Also write a DEBUG log file.")
@click.pass_context
def cli(ctx, log_level, log_file):
    """ Generate Terraform backend files and manage workspaces. """
    setup_logging(log_level=log_level, log_file=log_file)
    ctx.obj = Settings.from_env()


@cli.command(name="generate-backend")
@click.option("--config", "config_path", required=True,
              type=click.Path(dir_okay=False, resolve_path=True),
              help="Path to the YAML config file.")
@click.option("--provider-folder", required=True,
              type=click.Path(file_okay=False, resolve_path=True),
              help="Path to the provider folder.")
@click.option("--provider", default=None,
              help="Provider folder name. Defaults to the config file name without extension.")
@click.option("--provider-anchor", default=None,
              help="Path segment after which state keys are derived (default: deploy/provider).")
@click.pass_obj
def generate_backend(settings, config_path, provider_folder, provider, provider_anchor):
    """ Generate backend.tf files for a given config and provider folder. """
    if provider_anchor:
        settings = settings.with_overrides({"provider_anchor": provider_anchor})

    manager = BackendManager(settings=settings)
    try:
        written = manager.generate_backends(config_path, provider_folder, provider=provider)
    except TerraformHybridError as e:
        raise click.ClickException(f"error generating backends: {e}")

    click.echo(f"Backend generation completed successfully ({len(written)} files written).")


@cli.command(name="workspace")
@click.option("--list", "list_", is_flag=True, help="List all available workspaces.")
@click.option("--current", is_flag=True, help="Show the current active workspace.")
@click.option("--new", metavar="NAME", default=None, help="Create a new workspace.")
@click.option("--select", metavar="NAME", default=None, help="Select an existing workspace.")
@click.option("--delete", metavar="NAME", default=None, help="Delete a workspace.")
@click.option("--select-or-create", is_flag=True,
              help="Select the workspace named after the current directory, or create it.")
@click.option("--force", is_flag=True, help="With --delete, delete even if resources remain.")
@click.pass_obj
def workspace(settings, list_, current, new, select, delete, select_or_create, force):
    """ Manage Terraform workspaces (create, select, list, delete). """
    chosen = [flag for flag, value in (
        ("--list", list_),
        ("--current", current),
        ("--new", new),
        ("--select", select),
        ("--delete", delete),
        ("--select-or-create", select_or_create),
    ) if value]

    if len(chosen) > 1:
        raise click.UsageError(f"options {', '.join(chosen)} are mutually exclusive")
    if not chosen:
        raise click.ClickException("no workspace operation provided, use --help for options")

    manager = WorkspaceManager(
        runner=SubprocessRunner(timeout=settings.command_timeout),
        terraform_binary=settings.terraform_binary,
        provider_anchor=settings.provider_anchor,
    )

    try:
        if list_:
            result = manager.list_workspaces()
        elif current:
            result = manager.current_workspace()
        elif new:
            result = manager.create_workspace(new)
        elif select:
            result = manager.select_workspace(select)
        elif delete:
            result = manager.delete_workspace(delete, force=force)
        else:
            result = manager.select_or_create_workspace()
    except TerraformHybridError as e:
        raise click.ClickException(str(e))

    click.echo(result.output.rstrip("\n"))


@cli.command(name="version")
@click.pass_obj
def version(settings):
    """ Show terraform-hybrid and Terraform versions. """
    click.echo(f"terraform-hybrid {__version__}")
    installed, terraform_version = validate_terraform_installed(settings.terraform_binary)
    if installed:
        click.echo(terraform_version)
    else:
        click.echo(f"{settings.terraform_binary}: not found")


def main():
    """ Command line interface of terraform-hybrid. """
    cli(prog_name="terraform-hybrid")


if __name__ == "__main__":
    main()
