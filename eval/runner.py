"""Eval runner - replays recorded completions through the extraction pipeline.

Each scenario holds a raw completion as the model once returned it, the
target it should be parsed into, and the expected outcome. Successful parses
can be checked further with predicates over ``result``.

Run with: python -m eval.runner
"""

import sys
from pathlib import Path
from typing import Any

import yaml

from backend.app.errors import (
    AppError,
    EmptyCompletionError,
    SchemaMismatchError,
    UnparsableCompletionError,
)
from backend.app.llm.extract import extract_json
from backend.app.orchestration.tagging import split_tags
from backend.app.orchestration.wedding import (
    parse_section_type,
    validate_section_content,
    validate_wedding_plan,
)

SCENARIOS_PATH = Path(__file__).resolve().parent / "scenarios.yaml"


def load_scenarios(path: Path = SCENARIOS_PATH) -> dict[str, Any]:
    """Load scenarios from YAML."""
    with open(path) as f:
        result: dict[str, Any] = yaml.safe_load(f)
        return result


def parse_completion(scenario: dict[str, Any]) -> Any:
    """Run a recorded completion through the parser for its target."""
    completion = scenario.get("completion")
    target = scenario["target"]

    if target == "tags":
        return split_tags(completion or "")
    if target == "plan":
        return validate_wedding_plan(extract_json(completion, expect="object"))
    if target == "section":
        section = parse_section_type(scenario["section"])
        data = extract_json(completion, expect=scenario.get("expect", "any"))
        return validate_section_content(section, data)
    if target == "json":
        return extract_json(completion, expect=scenario.get("expect", "any"))
    raise ValueError(f"Unknown target: {target}")


def outcome_of(error: AppError | None) -> str:
    """Name the outcome of a parse attempt."""
    if error is None:
        return "ok"
    if isinstance(error, EmptyCompletionError):
        return "empty"
    if isinstance(error, UnparsableCompletionError):
        return "unparsable"
    if isinstance(error, SchemaMismatchError):
        return "schema_mismatch"
    return type(error).__name__


def evaluate_predicates(result: Any, predicates: list[dict[str, str]]) -> tuple[int, int]:
    """Evaluate predicates; return (passed, total)."""
    passed = 0
    total = len(predicates)
    env = {"result": result, "len": len}

    for pred_data in predicates:
        predicate = pred_data["predicate"]
        description = pred_data.get("description", predicate)
        try:
            if eval(predicate, {"__builtins__": {}}, env):
                passed += 1
                print(f"  ✓ PASS: {description}")
            else:
                print(f"  ✗ FAIL: {description}")
        except Exception as e:
            print(f"  ✗ ERROR: {description} - {e}")

    return passed, total


def run_scenario(scenario: dict[str, Any]) -> tuple[int, int]:
    """Run one scenario; the outcome check counts as one predicate."""
    result: Any = None
    error: AppError | None = None
    try:
        result = parse_completion(scenario)
    except AppError as e:
        error = e

    expected = scenario.get("expect_outcome", "ok")
    actual = outcome_of(error)
    passed = 1 if actual == expected else 0
    marker = "✓ PASS" if passed else "✗ FAIL"
    print(f"  {marker}: outcome {actual} (expected {expected})")

    if error is None and scenario.get("must_satisfy"):
        pred_passed, pred_total = evaluate_predicates(result, scenario["must_satisfy"])
        return passed + pred_passed, 1 + pred_total

    return passed, 1


def main() -> int:
    """Run eval scenarios."""
    scenarios = load_scenarios()["scenarios"]

    total_passed = 0
    total_checks = 0

    for scenario in scenarios:
        print(f"\n=== Scenario: {scenario['scenario_id']} ===")
        print(f"Description: {scenario['description']}")

        passed, total = run_scenario(scenario)
        total_passed += passed
        total_checks += total
        print(f"Result: {passed}/{total} checks passed")

    print("\n=== Summary ===")
    print(f"Total: {total_passed}/{total_checks} checks passed")

    if total_passed < total_checks:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
