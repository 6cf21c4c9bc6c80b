"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
from pathlib import Path
from typing import Dict, Any

from employermatch.logger import get_logger, reset_logger


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp dir with no console output."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def labeled_pairs() -> Dict[str, Any]:
    """Small labeled dataset of employer name pairs."""
    return {
        "description": "Employer names scraped from job boards",
        "true_matches": [
            ["Walmart", "Wal-Mart"],
            ["McDonald's", "McDonalds Corp"],
            ["The Home Depot", "Home Depot Inc."],
            ["Tesla Motors", "Tesla Motor"],
        ],
        "true_non_matches": [
            ["Target", "Walmart"],
            ["Apple", "Microsoft"],
            ["Lowe's", "Home Depot"],
        ],
    }


@pytest.fixture
def dataset_file(tmp_path, labeled_pairs) -> Path:
    """Labeled dataset written to a JSON file."""
    path = tmp_path / "pairs.json"
    path.write_text(json.dumps(labeled_pairs))
    return path


@pytest.fixture
def names_file(tmp_path) -> Path:
    """Batch of raw names, one per line, with a comment and a blank line."""
    path = tmp_path / "names.txt"
    path.write_text(
        "# scraped 2026-10-01\n"
        "Home Depot\n"
        "HomeDepot\n"
        "\n"
        "Lowes\n"
        "Walmart\n"
        "Wal-Mart\n"
    )
    return path
