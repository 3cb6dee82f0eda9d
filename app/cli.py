"""CLI utilities."""

import asyncio
from datetime import timedelta
from pathlib import Path

import click

from app.api.auth import create_access_token
from app.core.email import send_newsletter
from app.core.errors import AppError
from app.core.newsletter import get_subscription_store
from app.core.report_store import get_report_store
from app.core.reporting import generate_weekly_report
from app.logging_config import configure_logging


@click.group()
def cli():
    """Builder Vancouver automation CLI."""
    configure_logging()


@cli.command()
@click.option("--queue", is_flag=True, help="Queue on the Celery worker instead of running now")
def generate_report(queue: bool):
    """Generate the weekly PR report."""
    if queue:
        from app.worker.tasks import generate_weekly_report_task

        generate_weekly_report_task.delay()
        click.echo("Report generation queued. Check worker logs for progress.")
        return

    try:
        filename, report = generate_weekly_report(get_report_store())
    except AppError as e:
        raise click.ClickException(str(e))
    click.echo(f"Saved {filename} ({report.total} PRs)")


@cli.command()
def list_reports():
    """List saved reports, newest first."""
    for filename in get_report_store().list():
        click.echo(filename)


@cli.command()
@click.argument("filename")
def show_report(filename: str):
    """Print a report's Markdown."""
    try:
        _, markdown = get_report_store().read(filename)
    except AppError as e:
        raise click.ClickException(str(e))
    click.echo(markdown)


@cli.command()
def subscribers():
    """List active newsletter subscribers."""
    active = get_subscription_store().active_subscriptions()
    for subscription in active:
        click.echo(f"{subscription.email}\t{subscription.subscribed_at.isoformat()}\t{subscription.source or ''}")
    click.echo(f"{len(active)} active subscribers")


@cli.command("send-newsletter")
@click.option("--subject", required=True)
@click.option("--html-file", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--text-file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def send_newsletter_command(subject: str, html_file: Path, text_file: Path):
    """Send a newsletter to all active subscribers."""
    recipients = [s.email for s in get_subscription_store().active_subscriptions()]
    if not recipients:
        click.echo("No active subscribers")
        return

    body_text = text_file.read_text(encoding="utf-8") if text_file else ""
    result = asyncio.run(send_newsletter(subject, html_file.read_text(encoding="utf-8"), body_text, recipients))
    click.echo(f"Sent: {result['success']}, failed: {result['failed']}")


@cli.command()
@click.option("--subject", required=True, help="Token subject (user id or name)")
@click.option("--role", default="admin", type=click.Choice(["admin", "super_admin", "member"]))
@click.option("--days", default=1, show_default=True, help="Validity in days")
def issue_token(subject: str, role: str, days: int):
    """Issue an API access token."""
    click.echo(create_access_token({"sub": subject, "role": role}, expires_delta=timedelta(days=days)))


if __name__ == "__main__":
    cli()
