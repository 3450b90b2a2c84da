"""
Command-line interface for the classroom grader.

Opens GitHub Classroom assignment repositories in the browser, one
student or the whole class, and optionally posts feedback issues.
"""

import logging
import sys
from contextlib import ExitStack
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from classroom_grader import __version__
from classroom_grader.exceptions import ConfigurationError, DirectoryAccessError, GraderError
from classroom_grader.feedback import AuditLog, FeedbackCollector
from classroom_grader.flows import FlowController, build_run_mode
from classroom_grader.github import GitHubClient
from classroom_grader.roster import RosterIndex
from classroom_grader.session import SessionHandler
from classroom_grader.settings import GraderSettings

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Setup rich logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@click.command()
@click.version_option(version=__version__)
@click.option(
    "--prefix",
    "-p",
    required=True,
    help="Assignment prefix of the repository names, ie 'assignment-2-'",
)
@click.option(
    "--name",
    "-n",
    default=None,
    help="The student's full name, as saved in the roster",
)
@click.option(
    "--username",
    "-u",
    default=None,
    help="The student's GitHub username",
)
@click.option(
    "--feedback",
    "-f",
    is_flag=True,
    help="Prompt for feedback and post it as an issue",
)
@click.option(
    "--all",
    "-a",
    "all_students",
    is_flag=True,
    help="Handle all students, as opposed to a single student",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=".env",
    show_default=True,
    help="File with environment settings",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def cli(
    prefix: str,
    name: Optional[str],
    username: Optional[str],
    feedback: bool,
    all_students: bool,
    env_file: str,
    verbose: bool,
):
    """
    Review GitHub Classroom assignment repositories.

    Examples:

        # Open one student's repository by GitHub username
        classroom-grader -p assignment-2- -u brighton1101

        # Look the student up by name and post feedback
        classroom-grader -p assignment-2- -n "Brighton Balfrey" -f

        # Step through the whole class
        classroom-grader -p assignment-2- -a
    """
    setup_logging(verbose)

    try:
        run(prefix, name, username, feedback, all_students, env_file)
    except DirectoryAccessError as e:
        if e.repositories:
            console.print(
                f"[yellow]Fetched {len(e.repositories)} repositories before the failure.[/yellow]"
            )
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except GraderError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)


def run(
    prefix: str,
    name: Optional[str],
    username: Optional[str],
    feedback: bool,
    all_students: bool,
    env_file: Optional[str] = ".env",
) -> None:
    """
    Validate input, wire up the services and run one grading flow.

    Raises:
        GraderError: On any failure
    """
    logger = logging.getLogger(__name__)

    # Checked before settings and network access
    mode = build_run_mode(name, username, all_students)
    if not prefix:
        raise ConfigurationError("Did not provide prefix. Cannot proceed without -p flag.")

    settings = GraderSettings.load(env_file)
    logger.debug(f"Loaded {settings!r}")

    with ExitStack() as stack:
        audit_log = stack.enter_context(
            AuditLog.open(settings.grading_logging_dest, prefix)
        )
        roster = RosterIndex.from_file(settings.github_username_map)
        client = stack.enter_context(
            GitHubClient(token=settings.get_token(), base_url=settings.github_api_url)
        )

        session = SessionHandler(
            client=client,
            organization=settings.github_classroom_org,
            collector=FeedbackCollector(console),
            audit_log=audit_log,
            feedback_enabled=feedback,
        )
        controller = FlowController(
            client=client,
            roster=roster,
            prefix=prefix,
            organization=settings.github_classroom_org,
            session=session,
        )

        results = controller.run(mode)

    posted = sum(1 for r in results if r.feedback_posted)
    if feedback:
        console.print(
            f"[green]Done: {len(results)} repositories, {posted} feedback issue(s) posted.[/green]"
        )
    else:
        console.print(f"[green]Done: {len(results)} repositories.[/green]")


if __name__ == "__main__":
    cli()
