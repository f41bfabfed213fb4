"""
cli.py — Click CLI for operator maintenance tasks.

Usage:
    akwaaba-admin create-admin ops@akwaaba.homes --full-name "Ops Team"
    akwaaba-admin list-admins
    akwaaba-admin scan-placeholders
    akwaaba-admin archive-placeholders --yes
    akwaaba-admin pending
"""

from __future__ import annotations

from datetime import datetime, timezone

import click
import structlog
from postgrest.exceptions import APIError
from supabase import AuthApiError

from akwaaba_shared.config import settings
from akwaaba_shared.constants import (
    PROFILES_TABLE,
    PROPERTIES_TABLE,
    ApprovalStatus,
    PropertyStatus,
    Role,
    VerificationStatus,
)
from akwaaba_shared.db import get_supabase_client
from akwaaba_shared.logging import configure_logging
from akwaaba_shared.models import Profile
from akwaaba_shared.placeholders import find_placeholder_fields
from akwaaba_shared.workflow import can_transition

log = structlog.get_logger(__name__)


def _flagged_listings() -> list[tuple[dict, list[str]]]:
    client = get_supabase_client(service_role=True)
    rows = (
        client.table(PROPERTIES_TABLE)
        .select("id,title,description,address,status,seller_id")
        .order("created_at", desc=True)
        .execute()
    ).data
    flagged = []
    for row in rows:
        fields = find_placeholder_fields(row)
        if fields:
            flagged.append((row, fields))
    return flagged


@click.group()
@click.option(
    "--log-level",
    default=settings.log_level,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Log level",
)
def main(log_level: str) -> None:
    """Akwaaba Homes admin maintenance tasks."""
    configure_logging(log_level=log_level)


@main.command("create-admin")
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--full-name", default="Administrator", show_default=True)
def create_admin(email: str, password: str, full_name: str) -> None:
    """Create an auth user with a verified admin profile."""
    client = get_supabase_client(service_role=True)
    try:
        response = client.auth.admin.create_user({
            "email": email,
            "password": password,
            "email_confirm": True,
            "user_metadata": {"full_name": full_name, "user_role": Role.ADMIN.value},
        })
    except AuthApiError as exc:
        raise click.ClickException(f"Could not create auth user: {exc.message}") from exc

    user = response.user
    profile = Profile(
        user_id=user.id,
        email=email,
        full_name=full_name,
        user_role=Role.ADMIN,
        verification_status=VerificationStatus.VERIFIED,
        is_verified=True,
    )
    # An existing profile keeps its row id.
    row = profile.to_insert_dict()
    row.pop("id")
    try:
        client.table(PROFILES_TABLE).upsert(row, on_conflict="user_id").execute()
    except APIError as exc:
        raise click.ClickException(f"Could not write admin profile: {exc.message}") from exc

    log.info("admin_created", user_id=str(user.id), email=email)
    click.echo(f"Created admin {email} ({user.id})")


@main.command("list-admins")
def list_admins() -> None:
    """List every profile with the admin role."""
    client = get_supabase_client(service_role=True)
    rows = (
        client.table(PROFILES_TABLE)
        .select("id,user_id,email,full_name,created_at")
        .eq("user_role", Role.ADMIN.value)
        .order("created_at")
        .execute()
    ).data
    if not rows:
        click.echo("No admins found.")
        return
    for row in rows:
        click.echo(f"  {row['email']:40s} {row.get('full_name') or '':30s} {row['user_id']}")


@main.command("scan-placeholders")
def scan_placeholders() -> None:
    """Report listings whose title, description or address look like filler text."""
    flagged = _flagged_listings()
    if not flagged:
        click.echo("No placeholder listings found.")
        return
    click.echo(f"Found {len(flagged)} listing(s) with placeholder data:")
    for row, fields in flagged:
        click.echo(f"  {row['id']}  [{row.get('status')}]  {', '.join(fields)}  {row.get('title')!r}")


@main.command("archive-placeholders")
@click.option("--yes", is_flag=True, help="Archive without asking for confirmation.")
def archive_placeholders(yes: bool) -> None:
    """Soft-archive active or pending listings that hold placeholder data."""
    flagged = [
        (row, fields)
        for row, fields in _flagged_listings()
        if can_transition("property", row.get("status"), PropertyStatus.ARCHIVED)
    ]
    if not flagged:
        click.echo("Nothing to archive.")
        return
    if not yes:
        click.confirm(f"Archive {len(flagged)} listing(s)?", abort=True)

    client = get_supabase_client(service_role=True)
    now = datetime.now(timezone.utc).isoformat()
    for row, fields in flagged:
        (
            client.table(PROPERTIES_TABLE)
            .update({"status": PropertyStatus.ARCHIVED.value, "archived_at": now, "updated_at": now})
            .eq("id", row["id"])
            .execute()
        )
        log.info("placeholder_listing_archived", property_id=row["id"], fields=fields)
    click.echo(f"Archived {len(flagged)} listing(s).")


@main.command()
def pending() -> None:
    """Show how much moderation work is waiting."""
    client = get_supabase_client(service_role=True)
    agents = (
        client.table(PROFILES_TABLE)
        .select("id", count="exact")
        .eq("user_role", Role.AGENT.value)
        .eq("verification_status", VerificationStatus.PENDING.value)
        .limit(1)
        .execute()
    ).count or 0
    listings = (
        client.table(PROPERTIES_TABLE)
        .select("id", count="exact")
        .eq("approval_status", ApprovalStatus.PENDING.value)
        .limit(1)
        .execute()
    ).count or 0
    click.echo(f"Agents awaiting verification: {agents}")
    click.echo(f"Listings awaiting approval:   {listings}")


if __name__ == "__main__":
    main()
