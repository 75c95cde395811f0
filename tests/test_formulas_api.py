"""Tests for formula endpoints."""

import pytest
from httpx import AsyncClient

from branchreport.core.config import settings

PREFIX = f"{settings.api_v1_prefix}/formulas"


@pytest.mark.asyncio
async def test_validate_known_variables(client: AsyncClient):
    """Test validating a formula whose keys all exist."""
    response = await client.post(
        f"{PREFIX}/validate",
        json={"formula": "A + B", "available_keys": ["A", "B", "C"]},
    )

    assert response.status_code == 200
    assert response.json() == {"valid": True, "error": None, "unknown_variable": None}


@pytest.mark.asyncio
async def test_validate_unknown_variable(client: AsyncClient):
    """Test that an unknown key is reported, not raised."""
    response = await client.post(
        f"{PREFIX}/validate",
        json={"formula": "A + Z", "available_keys": ["A", "B"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is False
    assert data["unknown_variable"] == "Z"
    assert "Z" in data["error"]


@pytest.mark.asyncio
async def test_validate_missing_formula(client: AsyncClient):
    """Test request validation errors use the error envelope."""
    response = await client.post(f"{PREFIX}/validate", json={"available_keys": []})

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["errors"][0]["field"] == "body.formula"


@pytest.mark.asyncio
async def test_evaluate(client: AsyncClient):
    """Test evaluating the profit margin formula."""
    response = await client.post(
        f"{PREFIX}/evaluate",
        json={"formula": "(A - B) / A", "values": {"A": 1000, "B": 600}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["value"] == pytest.approx(0.4)
    assert data["soft_failed"] is False
    assert data["reason"] is None


@pytest.mark.asyncio
async def test_evaluate_null_value_counts_as_zero(client: AsyncClient):
    """Test that a blank value is treated as 0."""
    response = await client.post(
        f"{PREFIX}/evaluate",
        json={"formula": "A + B", "values": {"A": 5, "B": None}},
    )

    assert response.status_code == 200
    assert response.json()["value"] == 5


@pytest.mark.asyncio
async def test_evaluate_malformed_formula(client: AsyncClient):
    """Test that a malformed formula gives 0 and is flagged."""
    response = await client.post(
        f"{PREFIX}/evaluate",
        json={"formula": "(A + B", "values": {"A": 1, "B": 2}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["value"] == 0
    assert data["soft_failed"] is True
    assert data["reason"] == "Unmatched '('"


@pytest.mark.asyncio
async def test_evaluate_without_formula(client: AsyncClient):
    """Test that a missing formula evaluates to 0."""
    response = await client.post(f"{PREFIX}/evaluate", json={})

    assert response.status_code == 200
    assert response.json()["value"] == 0
    assert response.json()["soft_failed"] is False
