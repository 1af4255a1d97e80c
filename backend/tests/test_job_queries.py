from __future__ import annotations

import pytest

from jobtracker.errors import NotFoundError, ValidationError
from jobtracker.models.job_application import MAX_RECORD_ID
from jobtracker.schemas.job_application import JobApplicationIn
from jobtracker.services.job_applications import (
    JobApplicationPage,
    _field_values,
    parse_job_id,
    sanitize_positive_int,
    total_pages,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 20),
        ("", 20),
        ("abc", 20),
        ("0", 20),
        ("-4", 20),
        ("2.5", 20),
        ("7", 7),
        (" 3 ", 3),
        (12, 12),
        ("250", 100),
    ],
)
def test_sanitize_positive_int(raw, expected):
    assert sanitize_positive_int(raw, 20, maximum=100) == expected


@pytest.mark.parametrize("total,limit,expected", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (21, 5, 5)])
def test_total_pages(total, limit, expected):
    assert total_pages(total, limit) == expected


def test_page_exposes_total_pages():
    page = JobApplicationPage(jobs=[], page=3, limit=4, total=9)
    assert page.total_pages == 3


@pytest.mark.parametrize("raw,expected", [("1", 1), ("42", 42), (" 8 ", 8)])
def test_parse_job_id_accepts_positive_integers(raw, expected):
    assert parse_job_id(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "0", "-1", "1e3", "٣"])
def test_parse_job_id_rejects_everything_else(raw):
    with pytest.raises(ValidationError) as excinfo:
        parse_job_id(raw)
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Invalid job ID"


def test_parse_job_id_treats_out_of_range_ids_as_missing():
    assert parse_job_id(str(MAX_RECORD_ID)) == MAX_RECORD_ID
    with pytest.raises(NotFoundError):
        parse_job_id(str(MAX_RECORD_ID + 1))


def test_field_values_default_status_and_strip_required_fields():
    values = _field_values(JobApplicationIn(company_name="  Acme ", job_title="Engineer", status=""))
    assert values["company_name"] == "Acme"
    assert values["status"] == "applied"
    assert values["notes"] is None


def test_field_values_reject_missing_title():
    with pytest.raises(ValidationError):
        _field_values(JobApplicationIn(company_name="Acme"))
