"""
Shared fixtures for unit tests.
"""

from datetime import date

import pytest

from blinds_app.domain.models.company import CompanyProfile
from blinds_app.domain.models.job import (
    Job,
    BlindCategory,
    BlindLineItem,
    Task,
    AdditionalCost,
    CostSummary,
)


@pytest.fixture
def priced_job() -> Job:
    """
    One roller blind line (245.50 x 2), one task (75.00), carriage 25,
    fast track 50, one additional cost 15, VAT 20%, profit 25%.
    """
    job = Job(
        id="AAB0001",
        name="Smith Residence",
        organisation="Smith Family",
        address="123 Main Street, Anytown",
        area="Central",
        postcode="AB12 3CD"
    )
    job.roller_blinds.append(BlindLineItem(
        id="RB001",
        category=BlindCategory.ROLLER,
        location="Living Room",
        width=1200,
        drop=1800,
        quantity=2,
        cost=245.50
    ))
    job.tasks.append(Task(id="TASK001", description="Measurement", cost=75.0))
    job.cost_summary = CostSummary(
        carriage=25.0,
        fast_track=50.0,
        vat_rate=20.0,
        profit_rate=25.0,
        additional_costs=[AdditionalCost(id="ADD001", description="Special delivery", amount=15.0)]
    )
    return job


@pytest.fixture
def empty_job() -> Job:
    """Job with no line items and zero rates."""
    return Job(
        id="AAB0009",
        name="Empty Job",
        address="1 High Street",
        postcode="ZZ1 1ZZ",
        cost_summary=CostSummary(vat_rate=0.0, profit_rate=0.0)
    )


@pytest.fixture
def company_profile() -> CompanyProfile:
    return CompanyProfile(
        name="All About Blinds",
        address="123 Blind Street",
        city="Blindville",
        postcode="BL1 2ND",
        phone="01234 567890",
        email="info@allaboutblinds.com",
        bank_name="Blind Bank",
        account_name="All About Blinds Ltd",
        account_number="12345678",
        sort_code="12-34-56"
    )


@pytest.fixture
def generation_date() -> date:
    return date(2025, 4, 20)
