import json

import pytest

from src.logs import get_log_path, set_log_dir


@pytest.fixture
def valid_payload():
    return {
        "benefit": {
            "title": "Atomic",
            "subtitle": "Small Habits, Big Results",
            "reasoning": "Answers the question the reader already has.",
        },
        "curiosity": {
            "title": "Blink",
            "subtitle": "",
            "reasoning": "A single word that makes the reader ask why.",
        },
        "doubleEntendre": {
            "title": "Net Worth",
            "subtitle": "What You Catch When You Stop Fishing for Approval",
            "reasoning": "Money and self-worth in one phrase.",
        },
    }


@pytest.fixture
def valid_json(valid_payload):
    return json.dumps(valid_payload)


@pytest.fixture
def tmp_log_dir(tmp_path):
    previous = get_log_path().parent
    log_dir = tmp_path / "logs"
    set_log_dir(log_dir)
    yield log_dir
    set_log_dir(previous)
