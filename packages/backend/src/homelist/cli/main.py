"""Homelist CLI — run the server and manage the database.

Usage:
    homelist serve                      # Run the API with uvicorn
    homelist init-db                    # Create tables (dev; production uses Alembic)
    homelist seed                       # Sample users + listings for local work
"""

from __future__ import annotations

import asyncio

import click
from sqlalchemy import select

from homelist import __version__
from homelist.auth.password import PasswordHasher
from homelist.config import Settings
from homelist.db.engine import Database
from homelist.db.models import Listing, User
from homelist.services.pricing import to_cents

# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

SEED_PASSWORD = "password123"

SEED_USERS = [
    {"name": "John Doe", "email": "john@example.com", "phone": "+1-555-0101"},
    {"name": "Jane Smith", "email": "jane@example.com", "phone": "+1-555-0102"},
    {"name": "Mike Johnson", "email": "mike@example.com", "phone": "+1-555-0103"},
]

# (owner email, listing fields): prices in major units, like the API takes them
SEED_LISTINGS = [
    ("john@example.com", {
        "title": "Modern 2BR Apartment in Downtown",
        "description": "Modern apartment with city views, updated kitchen, "
                       "hardwood floors, and in-unit laundry.",
        "price": "2500.00",
        "location": "New York, NY",
        "type": "apartment",
        "bedrooms": 2,
        "bathrooms": 2,
        "area": 1200,
    }),
    ("jane@example.com", {
        "title": "Cozy Studio Near University",
        "description": "Studio five minutes from campus. All utilities and "
                       "high-speed internet included.",
        "price": "1200.00",
        "location": "Boston, MA",
        "type": "studio",
        "bedrooms": 0,
        "bathrooms": 1,
        "area": 500,
    }),
    ("mike@example.com", {
        "title": "Spacious 4BR Family House",
        "description": "Family home in a quiet neighborhood with a large "
                       "backyard and a 2-car garage.",
        "price": "4500.00",
        "location": "Austin, TX",
        "type": "house",
        "bedrooms": 4,
        "bathrooms": 3,
        "area": 2500,
    }),
]


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="homelist")
def main():
    """Homelist: property-listing marketplace backend."""


@main.command()
@click.option("--host", default=None, help="Bind address (default: HOMELIST_HOST)")
@click.option("--port", default=None, type=int, help="Port (default: HOMELIST_PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the API server."""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "homelist.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command("init-db")
def init_db():
    """Create all tables that don't exist yet."""
    asyncio.run(_init_db(Settings()))
    click.secho("Database tables created", fg="green")


async def _init_db(settings: Settings) -> None:
    db = Database(settings.database_url)
    try:
        await db.create_all()
    finally:
        await db.dispose()


@main.command()
def seed():
    """Insert sample users and listings. Users that already exist are skipped."""
    created = asyncio.run(_seed(Settings()))
    if created:
        for email in created:
            click.secho(f"Created user: {email}", fg="green")
        click.echo(f"All sample users log in with password '{SEED_PASSWORD}'")
    else:
        click.echo("Sample users already present, nothing to do")


async def _seed(settings: Settings) -> list[str]:
    db = Database(settings.database_url)
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    created: list[str] = []
    try:
        await db.create_all()
        async with db.session_factory() as session:
            new_users: dict[str, User] = {}
            for data in SEED_USERS:
                result = await session.execute(
                    select(User).where(User.email == data["email"])
                )
                if result.scalars().first():
                    continue
                user = User(password_hash=hasher.hash(SEED_PASSWORD), **data)
                session.add(user)
                new_users[data["email"]] = user

            for email, fields in SEED_LISTINGS:
                author = new_users.get(email)
                if author is None:
                    continue
                fields = dict(fields)
                session.add(Listing(
                    author=author,
                    price_cents=to_cents(fields.pop("price")),
                    images=[],
                    **fields,
                ))

            await session.commit()
            created = list(new_users)
    finally:
        await db.dispose()
    return created


if __name__ == "__main__":
    main()
