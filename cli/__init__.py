import click

from cli.minipool_withdraw import withdraw


@click.group()
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx):
    pass


@cli.group()
def minipool():
    """Manage the node's minipools"""
    pass


# Withdraw node deposits from minipools
minipool.add_command(withdraw, "withdraw")
