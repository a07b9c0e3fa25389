# scripts/init_db.py

import asyncio

from sqlalchemy import text

from sales_channels.bootstrap import build_container
from sales_channels.config.logging import configure_logging
from sales_channels.config.settings import get_settings


async def init_db():
    settings = get_settings()
    configure_logging(settings.log_level)
    container = build_container(settings)
    try:
        async with container.engine.begin() as conn:
            result = await conn.execute(text("SELECT 1"))
            print("DB Connected:", result.scalar())
        await container.init_resources()
        print("Tables created")
    finally:
        await container.close()


if __name__ == "__main__":
    asyncio.run(init_db())
