"""Tests for the result store, record serialization and dataset writer."""
import json
from datetime import datetime, timezone

import pytest

from harvester.models import JobRecord, VisaStatus
from harvester.output import write_dataset
from harvester.store import ResultStore


def _record(job_id, title, country, **kw):
    fields = dict(
        id=job_id,
        title=title,
        company="Acme",
        apply_url=job_id,
        location=f"Somewhere, {country}",
        country=country,
        posted="Recently posted",
        meta=(),
        match_reasons=("Matches Test",),
        visa_status=VisaStatus.NOT_MENTIONED,
        search_label="Test",
        search_keywords="test",
        source="LinkedIn",
        fetched_at="2026-10-17T00:00:00+00:00",
    )
    fields.update(kw)
    return JobRecord(**fields)


def test_insert_if_absent_rejects_duplicate_ids():
    store = ResultStore()
    assert store.insert_if_absent(_record("u1", "A", "Italy")) is True
    assert store.insert_if_absent(_record("u1", "B", "Italy")) is False
    assert len(store) == 1
    assert "u1" in store


def test_count_by_country_uses_substring():
    store = ResultStore()
    store.insert_if_absent(_record("u1", "A", "United Kingdom"))
    store.insert_if_absent(_record("u2", "B", "Kingdom"))
    store.insert_if_absent(_record("u3", "C", "Ireland"))
    assert store.count_by_country("united kingdom") == 1
    assert store.count_by_country("Kingdom") == 2
    assert store.count_by_country("Italy") == 0


def test_sorted_by_country_then_title():
    store = ResultStore()
    for job_id, title, country in [
        ("u1", "Social Media Lead", "United Kingdom"),
        ("u2", "Content Creator", "Italy"),
        ("u3", "Brand Manager", "United Kingdom"),
        ("u4", "SEO Specialist", "Belgium"),
        ("u5", "Digital Marketer", "Italy"),
    ]:
        store.insert_if_absent(_record(job_id, title, country))
    ordered = [(j.country, j.title) for j in store.sorted_records()]
    assert ordered == [
        ("Belgium", "SEO Specialist"),
        ("Italy", "Content Creator"),
        ("Italy", "Digital Marketer"),
        ("United Kingdom", "Brand Manager"),
        ("United Kingdom", "Social Media Lead"),
    ]


def test_to_dict_omits_empty_optionals():
    data = _record("u1", "A", "Italy").to_dict()
    assert "companyUrl" not in data
    assert data["visa"] == {"status": "Not mentioned"}
    assert data["applyUrl"] == data["id"]

    full = _record(
        "u2", "B", "Italy",
        company_url="https://www.linkedin.com/company/acme",
        visa_status=VisaStatus.SPONSORSHIP_MENTIONED,
        visa_evidence="we sponsor your visa",
    ).to_dict()
    assert full["companyUrl"] == "https://www.linkedin.com/company/acme"
    assert full["visa"] == {"status": "Yes", "evidence": "we sponsor your visa"}


def test_payload_and_write(tmp_path):
    store = ResultStore()
    store.insert_if_absent(_record("u1", "Contenuti Digitali", "Italy"))
    stamp = datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)
    path = write_dataset(store.to_payload(stamp), tmp_path / "data" / "jobs.json")

    text = path.read_text(encoding="utf-8")
    data = json.loads(text)
    assert data["generatedAt"] == "2026-10-17T09:30:00+00:00"
    assert data["total"] == 1
    assert data["jobs"][0]["title"] == "Contenuti Digitali"
    assert text.startswith('{\n  "generatedAt"')


def test_failed_write_keeps_previous_file(tmp_path):
    path = tmp_path / "jobs.json"
    path.write_text('{"total": 0}', encoding="utf-8")

    with pytest.raises(TypeError):
        write_dataset({"total": 1, "jobs": [object()]}, path)

    assert path.read_text(encoding="utf-8") == '{"total": 0}'
    assert [p.name for p in tmp_path.iterdir()] == ["jobs.json"]


def test_sort_ignores_case_and_accents():
    store = ResultStore()
    titles = [
        "Social Media Manager",
        "eCommerce Content Specialist",
        "Brand Manager",
        "Événement Marketing Lead",
    ]
    for n, title in enumerate(titles):
        store.insert_if_absent(_record(f"u{n}", title, "Belgium"))
    store.insert_if_absent(_record("u9", "Content Creator", "Österreich"))
    store.insert_if_absent(_record("u8", "Content Creator", "netherlands"))

    ordered = [(j.country, j.title) for j in store.sorted_records()]
    assert ordered == [
        ("Belgium", "Brand Manager"),
        ("Belgium", "eCommerce Content Specialist"),
        ("Belgium", "Événement Marketing Lead"),
        ("Belgium", "Social Media Manager"),
        ("netherlands", "Content Creator"),
        ("Österreich", "Content Creator"),
    ]
