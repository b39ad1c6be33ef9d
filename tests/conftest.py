"""Shared fixtures: an in-memory SQLite connection and the widgets table."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, create_async_engine

from sqx import SqxConfig

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

WIDGETS_DDL = """
CREATE TABLE sqx_widgets_test (
    widget_id   VARCHAR(128) NOT NULL,
    status      VARCHAR(128) NOT NULL,
    enabled     BOOLEAN NOT NULL,
    owner_id    VARCHAR(128)
)
"""


@pytest.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    yield eng
    await eng.dispose()


@pytest.fixture
async def conn(engine) -> AsyncGenerator[AsyncConnection, None]:
    async with engine.connect() as connection:
        yield connection
        await connection.rollback()


@pytest.fixture
async def widgets_table(conn: AsyncConnection) -> AsyncGenerator[None, None]:
    await conn.execute(text("DROP TABLE IF EXISTS sqx_widgets_test"))
    await conn.execute(text(WIDGETS_DDL))
    yield
    await conn.execute(text("DROP TABLE IF EXISTS sqx_widgets_test"))


@pytest.fixture
def config(conn: AsyncConnection) -> SqxConfig:
    return SqxConfig(queryable=conn)
