# storyhub/core/db.py
"""
Database configuration and lifecycle.
Wraps Tortoise ORM setup over the embedded SQLite store in an explicitly owned
handle that is opened once at startup, passed to every service and closed at
shutdown.
"""
import logging
import uuid

from tortoise import Tortoise
from tortoise.transactions import in_transaction

logger = logging.getLogger("uvicorn.error")

MODEL_MODULES = [
    "storyhub.models.user",          # User model
    "storyhub.models.story",         # Story model
    "storyhub.models.favorite",      # Favorite model (user <-> story)
    "storyhub.models.message",       # Chat message model
    "storyhub.models.announcement",  # Announcement model
]


def parse_id(value) -> uuid.UUID | None:
    """Parse an external identity string; None when it is not a valid UUID."""
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def tortoise_config(database_url: str) -> dict:
    """Build the Tortoise ORM configuration dictionary for a DSN."""
    return {
        "connections": {"default": database_url},
        "apps": {
            "models": {
                "models": MODEL_MODULES,
                "default_connection": "default",
            },
        },
    }


class Store:
    """
    Handle to the embedded transactional store.

    SQLite connections opened by Tortoise run in WAL journal mode with foreign
    keys enforced, so referential integrity is checked at write time.
    """

    connection_name = "default"

    def __init__(self, database_url: str, generate_schemas: bool = True):
        self.database_url = database_url
        self.generate_schemas = generate_schemas
        self.is_open = False

    async def open(self) -> None:
        """
        Initialize the Tortoise connection and register all models.

        Missing tables are created when ``generate_schemas`` is set; existing
        tables are left untouched.
        """
        if Tortoise._inited:
            await Tortoise.close_connections()
        await Tortoise.init(config=tortoise_config(self.database_url))
        if self.generate_schemas:
            await Tortoise.generate_schemas(safe=True)
        self.is_open = True
        logger.info("[store] opened %s", self.database_url)

    async def close(self) -> None:
        """Close all database connections."""
        if not self.is_open:
            return
        await Tortoise.close_connections()
        self.is_open = False
        logger.info("[store] closed")

    def transaction(self):
        """Async context manager running its body as one atomic unit."""
        return in_transaction(self.connection_name)
