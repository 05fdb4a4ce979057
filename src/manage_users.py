"""Operator CLI for user administration.

Roles cannot be changed over HTTP; approvers are appointed here.

    python manage_users.py list
    python manage_users.py set-role alice APPROVER
"""

import typer
from tabulate import tabulate

from core.database import SessionLocal, init_db
from core.exceptions import ValidationError
from utils.user_manager import UserManager

cli = typer.Typer(help="Purchase Request API user administration")


@cli.command("list")
def list_users() -> None:
    """List all users (id, username, email, role)."""
    init_db()
    with SessionLocal() as db:
        users = UserManager(db).list_users()
        rows = [(u.id, u.username, u.email, u.role) for u in users]
    typer.echo(tabulate(rows, headers=["id", "username", "email", "role"]))


@cli.command("set-role")
def set_role(
    username: str = typer.Argument(..., help="Username of the user to update"),
    role: str = typer.Argument(..., help="MEMBER or APPROVER"),
) -> None:
    """Assign a role to a user."""
    init_db()
    with SessionLocal() as db:
        try:
            user = UserManager(db).set_role(username, role)
        except (ValidationError, LookupError) as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
        typer.echo(f"{user.username} is now {user.role}")


if __name__ == "__main__":
    cli()
