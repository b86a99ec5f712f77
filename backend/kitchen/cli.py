# Overview: Flask CLI command groups for bootstrap and permission inspection.

# backend/kitchen/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init
#   Idempotent bootstrap: creates tables, business units and the role permission table.
# - python -m flask system seed-demo
#   Load the demo kitchen (users, recipes, plan, batches, waste, checklists).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Permission inspection:
# - python -m flask perms list Cocina
#   Show the role's level on every module.
# - python -m flask perms check ana@kitchen.com produccion edit
#   Check whether a user reaches a level on a module.

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import RolePermission
from .permissions import (
    REQUIRABLE_LEVELS,
    ROLES,
    get_all_module_codes,
    get_module_definition,
    validate_module_code,
)
from .services import auth_service, permission_service, seed_service


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@with_appcontext
def init_system():
    """
    Initialize the kitchen system.

    Creates:
    - All tables (when missing)
    - The business units
    - The role permission table, from the built-in defaults

    Existing rows are left untouched, so admin edits survive a re-run.
    """
    click.echo("START Initializing kitchen system...")

    db.create_all()
    counts = seed_service.seed_reference_data()

    click.echo(f"PASS Business units created: {counts['business_units']}")
    click.echo(f"PASS Role permission cells created: {counts['role_permissions']}")
    click.echo("\nPASS Kitchen system initialized.")


@system_group.command('seed-demo')
@with_appcontext
def seed_demo():
    """Load the demo kitchen on top of the reference data."""
    click.echo("START Loading demo data...")

    db.create_all()
    counts = seed_service.seed_demo_data()

    for name, created in counts.items():
        click.echo(f"  {name:<20} {created}")
    click.echo("\nPASS Demo data loaded. Log in with super@kitchen.com (super-admin).")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask system init' to initialize.")


@click.group('perms')
def perms_group():
    """Permission inspection commands."""


@perms_group.command('list')
@click.argument('role')
@with_appcontext
def list_permissions_cli(role):
    """Show a role's level on every module."""
    if role not in ROLES:
        click.echo(f"FAIL Role '{role}' not found. Roles: {', '.join(ROLES)}")
        return

    cells = {
        cell.module: cell.level
        for cell in db.session.query(RolePermission).filter_by(role=role).all()
    }

    click.echo(f"\n{'='*80}")
    click.echo(f"Permissions for role: {role}")
    click.echo(f"{'='*80}\n")

    click.echo(f"{'Module':<35} {'Name':<30} {'Level'}")
    click.echo("-"*80)

    for code in get_all_module_codes():
        definition = get_module_definition(code)
        click.echo(f"{code:<35} {definition['name']:<30} {cells.get(code, 'none')}")

    click.echo(f"\n Total: {len(cells)} cells stored\n")


@perms_group.command('check')
@click.argument('email')
@click.argument('module')
@click.argument('level', type=click.Choice(REQUIRABLE_LEVELS))
@with_appcontext
def check_permission_cli(email, module, level):
    """Check if a user reaches a level on a module."""
    user = auth_service.find_user_by_email(email)

    if not user:
        click.echo(f"FAIL User '{email}' not found")
        return

    if not validate_module_code(module):
        click.echo(f"FAIL Module '{module}' not found")
        return

    if permission_service.user_has_permission(user, module, level):
        click.echo(f"PASS User '{email}' HAS {level} on '{module}'")
    else:
        click.echo(f"FAIL User '{email}' DOES NOT HAVE {level} on '{module}'")

    effective = permission_service.get_effective_permission(user, module)
    click.echo(f"\nUser role: {user.role}")
    click.echo(f"Effective level: {effective}")
    if user.permission_overrides and module in user.permission_overrides:
        click.echo(f"Override: {user.permission_overrides[module]}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(perms_group)
