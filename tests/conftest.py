"""Pytest fixtures for testing"""

import random
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from credit_engine.api.dependencies import get_rng, get_today
from credit_engine.api.main import create_app
from credit_engine.domain.models import AccountData, CreditProfile, InquiryData

AS_OF = date(2024, 6, 1)


@pytest.fixture
def as_of() -> date:
    """Fixed reference date so ages and lookbacks are stable"""
    return AS_OF


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client with a fixed clock and seeded random source"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: AS_OF
    app.dependency_overrides[get_rng] = lambda: random.Random(42)
    return TestClient(app)


@pytest.fixture
def seasoned_profile() -> CreditProfile:
    """Long, clean history across four account types"""
    return CreditProfile(
        accounts=[
            AccountData(
                account_type="credit_card",
                current_balance=500,
                credit_limit=10000,
                open_date=date(2010, 1, 1),
                months_reviewed=120,
            ),
            AccountData(account_type="mortgage", current_balance=180000, open_date=date(2012, 5, 1)),
            AccountData(account_type="auto_loan", current_balance=8000, open_date=date(2015, 8, 1)),
            AccountData(account_type="student_loan", current_balance=12000, open_date=date(2013, 9, 1)),
        ],
        inquiries=[],
        public_records=[],
    )


@pytest.fixture
def maxed_card_profile() -> CreditProfile:
    """Single card at 90% utilization with a couple of recent inquiries"""
    return CreditProfile(
        accounts=[
            AccountData(
                account_type="credit_card",
                current_balance=9000,
                credit_limit=10000,
                open_date=AS_OF - timedelta(days=900),
            )
        ],
        inquiries=[
            InquiryData(date=AS_OF - timedelta(days=30), creditor="Capital One"),
            InquiryData(date=AS_OF - timedelta(days=60), creditor="Discover"),
        ],
    )
