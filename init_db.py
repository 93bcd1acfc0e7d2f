"""Initialize database tables"""
import asyncio
from kitchen_ops.database import create_tables


async def init():
    await create_tables()
    print("Kitchen Ops tables created successfully.")


if __name__ == "__main__":
    asyncio.run(init())
