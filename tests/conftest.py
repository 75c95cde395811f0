"""
Pytest configuration and fixtures for branchreport tests.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from branchreport.main import app
from branchreport.schemas.template import TemplateField


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def monthly_fields() -> list[TemplateField]:
    """Fields of the seeded "Monthly Report" template."""
    return [
        TemplateField(id="f-a", key="A", label="Revenue", order=1),
        TemplateField(id="f-b", key="B", label="Expenses", order=2),
        TemplateField(id="f-c", key="C", label="Profit", order=3, formula="A - B"),
        TemplateField(id="f-d", key="D", label="Profit Margin", order=4, formula="(A - B) / A"),
    ]
