"""
Database configuration and connection management.
Handles MongoDB connection lifecycle for the catalog collection.
"""
import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from contextlib import asynccontextmanager
from fastapi import FastAPI
from pymongo import ASCENDING, DESCENDING

from .settings import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class DatabaseManager:
    """Manages MongoDB database connection and operations."""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Establish connection to MongoDB."""
        try:
            logger.info("🚀 Connecting to MongoDB...")

            self.client = AsyncIOMotorClient(
                settings.mongodb_url,
                serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
                connectTimeoutMS=settings.mongodb_connect_timeout_ms,
                socketTimeoutMS=settings.mongodb_socket_timeout_ms,
                maxPoolSize=settings.mongodb_max_pool_size,
                minPoolSize=settings.mongodb_min_pool_size,
                directConnection=settings.mongodb_direct_connection,
            )

            await self.client.admin.command('ping')
            self.database = self.client[settings.database_name]
            logger.info("✅ Connected to MongoDB successfully")

        except Exception as db_error:
            logger.warning(f"⚠️  MongoDB connection failed: {db_error}")
            # The app still starts; catalog requests report a retrieval failure

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self.client is not None:
            self.client.close()
            self.client = None
            self.database = None
            logger.info("🔌 MongoDB connection closed")

    async def create_indexes(self) -> None:
        """Create indexes backing the catalog filters and sort keys."""
        if self.database is None:
            logger.warning("Database not connected, skipping index creation")
            return

        catalog = self.database[settings.catalog_collection]
        try:
            await catalog.create_index("isActive")
            await catalog.create_index("name")
            await catalog.create_index("price")
            await catalog.create_index("stock")
            await catalog.create_index("weight")
            await catalog.create_index("purity")
            await catalog.create_index("brand")
            await catalog.create_index("manufacturer")
            await catalog.create_index("placement")
            await catalog.create_index([("isActive", ASCENDING), ("createdAt", DESCENDING)])
            await catalog.create_index([("views", DESCENDING), ("createdAt", DESCENDING)])

            logger.info("✅ Catalog indexes created successfully")

        except Exception as index_error:
            logger.warning(f"⚠️  Failed to create indexes: {index_error}")

    def get_database(self) -> AsyncIOMotorDatabase:
        """Get database instance."""
        if self.database is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.database

    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self.database is not None


# Global database manager instance
db_manager = DatabaseManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for database connection."""
    logger.info("🚀 Starting up application...")
    await db_manager.connect()
    await db_manager.create_indexes()
    app.state.db_manager = db_manager

    yield

    await db_manager.disconnect()


def get_database_manager() -> DatabaseManager:
    """Get database manager instance."""
    return db_manager
