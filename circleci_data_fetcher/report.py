"""Serialize the collected report to circleci-data.json."""

import json
from dataclasses import asdict
from pathlib import Path

from .models import Report

OUTPUT_FILE = "circleci-data.json"


def report_to_json(report: Report) -> list[dict]:
    return [{name: asdict(data) for name, data in entry.items()} for entry in report]


def write_report(report: Report, path: Path | None = None) -> Path:
    """Write the report as pretty-printed JSON, replacing any previous run's file."""
    path = path or Path.cwd() / OUTPUT_FILE
    with open(path, "w") as f:
        json.dump(report_to_json(report), f, indent=2)
        f.write("\n")
    return path


def summarize(report: Report) -> dict:
    stats = {
        "accounts": len(report),
        "contexts": 0,
        "context_variables": 0,
        "projects": 0,
        "project_variables": 0,
        "project_keys": 0,
    }
    for entry in report:
        for data in entry.values():
            stats["contexts"] += len(data.contexts)
            stats["context_variables"] += sum(len(c.variables) for c in data.contexts)
            stats["projects"] += len(data.projects)
            stats["project_variables"] += sum(len(p.variables) for p in data.projects)
            stats["project_keys"] += sum(len(p.keys) for p in data.projects)
    return stats
