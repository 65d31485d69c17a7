"""Test eval runner execution."""

import subprocess
import sys
from pathlib import Path

import pytest

from backend.app.errors import EmptyCompletionError, SchemaMismatchError, UnparsableCompletionError
from eval.runner import (
    evaluate_predicates,
    load_scenarios,
    outcome_of,
    parse_completion,
    run_scenario,
)

ROOT = Path(__file__).resolve().parents[2]


def _scenario(scenario_id: str) -> dict:
    for scenario in load_scenarios()["scenarios"]:
        if scenario["scenario_id"] == scenario_id:
            return scenario
    raise KeyError(scenario_id)


def test_eval_runner_executes() -> None:
    """Test that the runner replays every scenario and exits cleanly."""
    result = subprocess.run(
        [sys.executable, "-m", "eval.runner"], capture_output=True, text=True, cwd=ROOT
    )

    assert result.returncode == 0, result.stdout + result.stderr
    assert "Scenario: tags_with_preamble" in result.stdout
    assert "Scenario: prose_only" in result.stdout
    assert "FAIL" not in result.stdout


@pytest.mark.parametrize(
    "scenario_id",
    [s["scenario_id"] for s in load_scenarios()["scenarios"]],
)
def test_scenario_passes_all_checks(scenario_id: str) -> None:
    passed, total = run_scenario(_scenario(scenario_id))

    assert passed == total


def test_ceremony_array_keeps_order() -> None:
    result = parse_completion(_scenario("ceremony_array_bare"))

    assert [venue.name for venue in result] == ["A", "B", "C"]


def test_outcome_of() -> None:
    assert outcome_of(None) == "ok"
    assert outcome_of(EmptyCompletionError("empty")) == "empty"
    assert outcome_of(UnparsableCompletionError("bad")) == "unparsable"
    assert outcome_of(SchemaMismatchError("shape")) == "schema_mismatch"


def test_failed_predicate_is_counted(capsys: pytest.CaptureFixture[str]) -> None:
    passed, total = evaluate_predicates(
        ["a", "b"],
        [
            {"predicate": "len(result) == 2", "description": "two"},
            {"predicate": "result[0] == 'z'", "description": "first is z"},
            {"predicate": "result[5]", "description": "out of range"},
        ],
    )

    assert (passed, total) == (1, 3)
    output = capsys.readouterr().out
    assert "✗ FAIL: first is z" in output
    assert "✗ ERROR: out of range" in output


def test_unexpected_outcome_fails() -> None:
    scenario = {
        "scenario_id": "wrong_expectation",
        "description": "Valid JSON marked as unparsable",
        "target": "json",
        "completion": '{"a": 1}',
        "expect_outcome": "unparsable",
    }

    assert run_scenario(scenario) == (0, 1)
