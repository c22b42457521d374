"""Unit tests for the provider normalizers (pure, never raising)."""

from decimal import Decimal

import pytest

from job_aggregator.parsing import (
    UNKNOWN_CITY,
    UNKNOWN_COMPANY,
    UNKNOWN_LOCATION,
    UNKNOWN_STATE,
    UNKNOWN_TITLE,
    UNKNOWN_TYPE,
)
from job_aggregator.providers.provider1 import Provider1
from job_aggregator.providers.provider2 import Provider2, format_full_address
from job_aggregator.schemas import (
    Provider1Details,
    Provider1Job,
    Provider2Compensation,
    Provider2Job,
    Provider2Location,
    Provider2Requirements,
)


@pytest.fixture
def provider1():
    return Provider1("https://provider1.test/jobs")


@pytest.fixture
def provider2():
    return Provider2("https://provider2.test/jobs")


@pytest.mark.unit
def test_provider1_full_record(provider1, make_provider1_job):
    [listing] = provider1.normalize([Provider1Job.model_validate(make_provider1_job("P1-001"))])

    assert listing.external_id == "provider1_P1-001"
    assert listing.title == "Backend Engineer"
    assert (listing.city, listing.state) == ("San Francisco", "CA")
    assert listing.full_address == "San Francisco, CA"
    assert listing.is_remote is False
    assert listing.employment_type == "Full-Time"
    assert listing.salary_min == Decimal("80000")
    assert listing.salary_max == Decimal("120000")
    assert listing.salary_currency == "USD"
    assert listing.salary_original_range == "$80k - $120k"
    assert listing.company_name == "Acme Corp"
    assert listing.company_industry == "Technology"
    assert listing.company_website is None
    assert listing.experience_years is None
    assert listing.skills == ["Python", "FastAPI", "PostgreSQL"]
    assert listing.posted_date.isoformat() == "2024-01-15T10:00:00+00:00"
    assert listing.provider == "provider1"


@pytest.mark.unit
def test_provider1_remote_with_mixed_case_k(provider1, make_provider1_job):
    raw = make_provider1_job(details={"location": "Remote", "type": "Contract", "salaryRange": "80k-120K"})
    [listing] = provider1.normalize([Provider1Job.model_validate(raw)])

    assert listing.is_remote is True
    assert listing.salary_min == 80000
    assert listing.salary_max == 120000
    assert (listing.city, listing.state) == (UNKNOWN_CITY, UNKNOWN_STATE)
    assert listing.full_address == "Remote"


@pytest.mark.unit
def test_provider1_keeps_state_that_mentions_remote(provider1, make_provider1_job):
    raw = make_provider1_job(details={"location": "San Francisco, CA (Remote)", "type": "Full-Time"})
    [listing] = provider1.normalize([Provider1Job.model_validate(raw)])

    assert listing.is_remote is True
    assert (listing.city, listing.state) == ("San Francisco", "CA (Remote)")
    assert listing.full_address == "San Francisco, CA (Remote)"


@pytest.mark.unit
def test_provider1_blank_location(provider1, make_provider1_job):
    raw = make_provider1_job(details={"location": "", "type": "Contract", "salaryRange": "80k-120K"})
    [listing] = provider1.normalize([Provider1Job.model_validate(raw)])

    assert (listing.city, listing.state) == (UNKNOWN_CITY, UNKNOWN_STATE)
    assert listing.full_address == UNKNOWN_LOCATION
    assert listing.is_remote is False


@pytest.mark.unit
def test_provider1_unparseable_salary_keeps_original_text(provider1, make_provider1_job):
    raw = make_provider1_job(details={"location": "Austin, TX", "type": "Full-Time", "salaryRange": "Competitive"})
    [listing] = provider1.normalize([Provider1Job.model_validate(raw)])

    assert listing.salary_min is None
    assert listing.salary_max is None
    assert listing.salary_currency == "USD"
    assert listing.salary_original_range == "Competitive"


@pytest.mark.unit
def test_provider1_malformed_record_degrades_to_sentinels(provider1):
    broken = Provider1Job.model_construct(
        jobId=None,
        title=None,
        details=None,
        company=None,
        skills=[1, None, " Python ", "", {"x": 1}],
        postedDate="not a date",
    )
    weird = Provider1Job.model_construct(
        jobId="P1-9",
        title=123,
        details=Provider1Details.model_construct(location=["Austin"], type="", salaryRange=80000),
        company=None,
        skills="Python",
        postedDate=None,
    )

    listings = provider1.normalize([broken, weird])

    assert len(listings) == 2
    first = listings[0]
    assert first.title == UNKNOWN_TITLE
    assert first.company_name == UNKNOWN_COMPANY
    assert first.employment_type == UNKNOWN_TYPE
    assert first.full_address == UNKNOWN_LOCATION
    assert first.skills == ["Python"]
    assert first.salary_original_range is None
    second = listings[1]
    assert second.external_id == "provider1_P1-9"
    assert second.title == UNKNOWN_TITLE
    assert second.skills == []
    assert second.salary_min is None


@pytest.mark.unit
def test_provider1_caps_skills(provider1, make_provider1_job):
    raw = make_provider1_job(skills=[f"skill-{i}" for i in range(25)])
    [listing] = provider1.normalize([Provider1Job.model_validate(raw)])
    assert listing.skills == [f"skill-{i}" for i in range(20)]


@pytest.mark.unit
def test_provider1_empty_batch(provider1):
    assert provider1.normalize([]) == []


@pytest.mark.unit
def test_provider2_full_record(provider2, make_provider2_job):
    [listing] = provider2.normalize([Provider2Job.model_validate(make_provider2_job())])

    assert listing.external_id.startswith("provider2_")
    assert listing.title == "Data Engineer"
    assert (listing.city, listing.state) == ("Austin", "TX")
    assert listing.full_address == "Austin, TX"
    assert listing.is_remote is False
    assert listing.employment_type == "Full-time"
    assert listing.salary_min == 90000
    assert listing.salary_max == 130000
    assert listing.salary_currency == "USD"
    assert listing.salary_original_range == "90000-130000 USD"
    assert listing.company_name == "DataWorks"
    assert listing.company_industry is None
    assert listing.company_website == "https://dataworks.example"
    assert listing.experience_years == 3
    assert listing.skills == ["Python", "Spark"]
    assert listing.provider == "provider2"


@pytest.mark.unit
def test_provider2_remote_address(provider2, make_provider2_job):
    raw = make_provider2_job(location={"city": "Boston", "state": "MA", "remote": True})
    [listing] = provider2.normalize([Provider2Job.model_validate(raw)])
    assert listing.is_remote is True
    assert listing.full_address == "Remote"
    assert listing.city == "Boston"


@pytest.mark.unit
@pytest.mark.parametrize("flag", ["true", 1])
def test_provider2_truthy_remote_flag(provider2, make_provider2_job, flag):
    raw = make_provider2_job(location={"city": "Boston", "state": "MA", "remote": flag})
    [listing] = provider2.normalize([Provider2Job.model_validate(raw)])
    assert listing.is_remote is True
    assert listing.full_address == "Remote"


@pytest.mark.unit
def test_provider2_compensation_edge_cases(provider2, make_provider2_job):
    no_comp = make_provider2_job(compensation=None)
    zero_comp = make_provider2_job("Zero Pay Role", compensation={"min": 0, "max": 50000, "currency": "eur"})

    first, second = provider2.normalize([Provider2Job.model_validate(no_comp), Provider2Job.model_validate(zero_comp)])

    assert first.salary_min is None and first.salary_max is None
    assert first.salary_currency == "USD"
    assert first.salary_original_range is None
    assert second.salary_min is None
    assert second.salary_max == 50000
    assert second.salary_currency == "EUR"


@pytest.mark.unit
def test_provider2_malformed_record_degrades_to_sentinels(provider2):
    broken = Provider2Job.model_construct(
        position=None,
        location=None,
        compensation=Provider2Compensation.model_construct(min="lots", max=None, currency=None),
        employer=None,
        requirements=Provider2Requirements.model_construct(experience="3 years", technologies=[None, 5, " Go "]),
        datePosted="",
    )

    [listing] = provider2.normalize([broken])

    assert listing.title == UNKNOWN_TITLE
    assert (listing.city, listing.state) == (UNKNOWN_CITY, UNKNOWN_STATE)
    assert listing.full_address == UNKNOWN_LOCATION
    assert listing.company_name == UNKNOWN_COMPANY
    assert listing.salary_min is None and listing.salary_max is None
    assert listing.experience_years is None
    assert listing.skills == ["Go"]


@pytest.mark.unit
def test_provider2_ids_are_stable_across_fetches(provider2, make_provider2_job):
    raw = make_provider2_job()
    first = provider2.normalize([Provider2Job.model_validate(raw)])[0]
    second = provider2.normalize([Provider2Job.model_validate(dict(raw))])[0]
    assert first.external_id == second.external_id


@pytest.mark.unit
@pytest.mark.parametrize(
    "location,expected",
    [
        (None, UNKNOWN_LOCATION),
        (Provider2Location(city="Austin", state="TX", remote=False), "Austin, TX"),
        (Provider2Location(city="Austin", state=None, remote=False), "Austin"),
        (Provider2Location(city=None, state="TX"), "TX"),
        (Provider2Location(), UNKNOWN_LOCATION),
        (Provider2Location(remote=True), "Remote"),
    ],
)
def test_format_full_address(location, expected):
    assert format_full_address(location) == expected
