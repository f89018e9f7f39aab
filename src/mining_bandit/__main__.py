import click

from .cli.inspect_commands import inspect
from .cli.run_commands import run
from .cli.vis_commands import vis


@click.group()
def cli():
    """Mining bandit CLI."""
    pass


cli.add_command(run)
cli.add_command(inspect)
cli.add_command(vis)


if __name__ == "__main__":
    cli()
