"""
Tests for the pm-analyze command line.
"""

import json

import pytest

from pm_engine.run_analysis import main

REQUEST = {
    "asset_type": "crane",
    "asset_id": "SEP-450",
    "asset_name": "SEP-450 Jack-up Crane",
    "equipment_list": [
        {
            "id": "sep450-wire-main",
            "name": "Main Hoist Wire Rope",
            "type": "wire_rope",
            "cycle_count": 12000,
            "operating_hours": 6200,
        },
        {
            "id": "sep450-hoist-motor",
            "name": "Hoist Motor",
            "type": "hoist_motor",
            "operating_hours": 25000,
            "vibration": 2.1,
            "temperature": 65,
        },
    ],
    "environment_data": {"temperature": 38, "humidity": 70},
}

KNOWN_ISSUES = {
    "SEP-450": [
        {
            "equipment_name": "Motor",
            "issue": "Bearing noise reported by crane operator",
            "status": "warning",
            "health_score": 40,
            "pm_prediction": {
                "predicted_issue": "Bearing failure",
                "priority": "high",
                "warning_signals": ["Abnormal noise"],
                "recommended_action": "Replace drive-end bearing",
            },
        }
    ]
}


@pytest.fixture
def request_file(tmp_path):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(REQUEST))
    return path


def test_writes_analysis_to_file(request_file, tmp_path):
    output = tmp_path / "analysis.json"
    assert main(["--request", str(request_file), "--output", str(output)]) == 0

    analysis = json.loads(output.read_text())
    assert analysis["asset_id"] == "SEP-450"
    assert len(analysis["predictions"]) == 2
    rope = next(p for p in analysis["predictions"] if p["equipment_id"] == "sep450-wire-main")
    assert rope["priority"] == "high"


def test_prints_to_stdout(request_file, capsys):
    assert main(["--request", str(request_file)]) == 0
    analysis = json.loads(capsys.readouterr().out)
    assert analysis["status"] == "complete"


def test_known_issues_file(request_file, tmp_path):
    issues = tmp_path / "issues.json"
    issues.write_text(json.dumps(KNOWN_ISSUES))
    output = tmp_path / "analysis.json"

    assert main(["--request", str(request_file), "--known-issues", str(issues), "--output", str(output)]) == 0

    analysis = json.loads(output.read_text())
    motor = next(p for p in analysis["predictions"] if p["equipment_id"] == "sep450-hoist-motor")
    assert motor["health_score"] == 40
    assert motor["recommended_action"] == "Replace drive-end bearing"


def test_unknown_type_fails(tmp_path):
    bad = dict(REQUEST, equipment_list=[{"id": "tug-1", "name": "Tug", "type": "tugboat"}])
    path = tmp_path / "request.json"
    path.write_text(json.dumps(bad))
    assert main(["--request", str(path)]) == 1


def test_invalid_request_fails(tmp_path):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(dict(REQUEST, asset_type="submarine")))
    assert main(["--request", str(path)]) == 2


def test_missing_request_file(tmp_path):
    assert main(["--request", str(tmp_path / "nope.json")]) == 2
