"""
depsight CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import dashboard, explain, insights, status
from .utils import setup_logging


@click.group()
@click.version_option(package_name="depsight")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """depsight: Graph insights for issue dependency trackers.

    Ranks issues by bottleneck, keystone, hub and authority scores,
    finds dependency cycles, and explains every score from the
    underlying dependency graph.

    \b
    Quick Start:
      depsight insights
      depsight explain ISSUE-12 --panel keystones
      depsight dashboard
    """
    setup_logging(verbose)


# Register commands
main.add_command(insights.insights)
main.add_command(explain.explain)
main.add_command(status.status)
main.add_command(dashboard.dashboard)

if __name__ == "__main__":
    main()
