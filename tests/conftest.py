"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from campus_dashboard.api.main import create_app
from campus_dashboard.config import Settings
from campus_dashboard.domain.models import (
    InvestmentPayment,
    PaymentType,
    StockCategory,
    StockProduct,
)
from campus_dashboard.infrastructure import seed


@pytest.fixture
def test_settings() -> Settings:
    """Settings with every simulated delay switched off"""
    return Settings(
        students_latency_ms=0,
        stock_latency_ms=0,
        employees_latency_ms=0,
        investment_latency_ms=0,
        activity_latency_ms=0,
        login_delay_ms=0,
        log_level="WARNING",
    )


@pytest.fixture
def client(test_settings: Settings) -> TestClient:
    """Create FastAPI test client with fresh application state"""
    app = create_app(test_settings)
    return TestClient(app)


@pytest.fixture
def categories() -> list[StockCategory]:
    return seed.load_stock_categories()


@pytest.fixture
def products() -> list[StockProduct]:
    return seed.load_stock_products()


@pytest.fixture
def science_products() -> list[StockProduct]:
    """The two Science category products from the seed catalogue"""
    return [
        StockProduct("prod-002", "Chemistry Lab Kit", "cat-002", 54, 30, 120, date(2024, 9, 3)),
        StockProduct("prod-005", "Safety Goggles", "cat-002", 35, 50, 18, date(2024, 8, 14)),
    ]


@pytest.fixture
def payments() -> list[InvestmentPayment]:
    return [
        InvestmentPayment("pay-001", "mem-001", 3200, PaymentType.INCOME, date(2025, 9, 1)),
        InvestmentPayment("pay-002", "mem-002", 1800, PaymentType.INCOME, date(2025, 9, 3)),
        InvestmentPayment("pay-003", "mem-003", 950, PaymentType.INCOME, date(2025, 9, 5)),
        InvestmentPayment("pay-004", "mem-004", 2100, PaymentType.OUTCOME, date(2025, 9, 8)),
    ]


@pytest.fixture
def students():
    return seed.load_students()


@pytest.fixture
def employees():
    return seed.load_employees()


@pytest.fixture
def members():
    return seed.load_investment_members()
