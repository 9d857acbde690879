"""Reportable conformance tests.

Runs every case in tests/fixtures/reportable*.yaml through is_reportable.

Run with: uv run pytest tests/test_reportable_conformance.py -v
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from haze import (
    Predicate,
    Response,
    filter_codes,
    filter_lengths,
    is_reportable,
    match_codes,
    match_lengths,
)

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"

# ─── YAML → haze type conversion ─────────────────────────────────────────────

_RULES = {
    "match_codes": match_codes,
    "match_lengths": match_lengths,
    "filter_codes": filter_codes,
    "filter_lengths": filter_lengths,
}


@dataclass
class ReportableCase:
    """A single case from a reportable fixture."""

    fixture_name: str
    case_name: str
    matchers: list[Predicate[Response]]
    filters: list[Predicate[Response]]
    response: Response
    expect: bool


def _parse_rules(specs: list[dict[str, Any]]) -> list[Predicate[Response]]:
    """Parse ``[{match_codes: "200-299"}, ...]`` into predicates."""
    rules = []
    for rule in specs:
        ((kind, ranges),) = rule.items()
        if kind not in _RULES:
            msg = f"Unknown rule kind: {kind}"
            raise ValueError(msg)
        rules.append(_RULES[kind](str(ranges)))
    return rules


def _load_reportable_fixtures() -> list[ReportableCase]:
    cases: list[ReportableCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("reportable*.yaml")):
        with yaml_file.open() as f:
            for doc in yaml.safe_load_all(f):
                if doc is None:
                    continue
                matchers = _parse_rules(doc.get("matchers", []))
                filters = _parse_rules(doc.get("filters", []))
                for case in doc["cases"]:
                    cases.append(
                        ReportableCase(
                            fixture_name=doc["name"],
                            case_name=case["name"],
                            matchers=matchers,
                            filters=filters,
                            response=Response(
                                code=case["response"]["code"],
                                length=case["response"]["length"],
                            ),
                            expect=case["expect"],
                        )
                    )
    return cases


_CASES = _load_reportable_fixtures()


@pytest.mark.parametrize(
    "case",
    _CASES,
    ids=[f"{c.fixture_name}/{c.case_name}" for c in _CASES],
)
def test_reportable(case: ReportableCase) -> None:
    assert is_reportable(case.response, case.matchers, case.filters) is case.expect


def test_fixtures_loaded() -> None:
    assert len(_CASES) >= 10
