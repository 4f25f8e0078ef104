import json
from datetime import datetime

import pytest

from facilitator_stats import create_app
from facilitator_stats.config import StatsConfig
from facilitator_stats.labels import LabelCatalog
from facilitator_stats.models import AppointmentRecord
from facilitator_stats.sources import InMemoryRecordSource

D1 = datetime(2025, 1, 6, 10, 0)
D2 = datetime(2025, 1, 7, 14, 30)
D3 = datetime(2025, 1, 8, 9, 0)


@pytest.fixture
def scenario_records():
    """Two hosts, one cancelled appointment."""
    return [
        AppointmentRecord(
            id=1, host_id=1, purpose="intro", status="completed", badge_ids=[10, 11], occurs_at=D1
        ),
        AppointmentRecord(
            id=2, host_id=1, purpose="intro", status="canceled", badge_ids=[], occurs_at=D2
        ),
        AppointmentRecord(
            id=3, host_id=2, purpose="followup", status="completed", badge_ids=[10], occurs_at=D3
        ),
    ]


@pytest.fixture
def catalog_data():
    """Label catalog contents in the on-disk layout."""
    return {
        "fields": {
            "purpose": {"intro": "Introduction", "followup": "Follow-up"},
            "result": [
                {"value": "passed", "label": "Passed"},
                {"value": "needs_practice", "label": "Needs practice"},
            ],
            "status": ["completed", "canceled"],
        },
        "users": {"1": "Ada", "2": "grace"},
        "profiles": {"coordinator": {"2": "Grace H."}},
        "vocabularies": {"badges": {"10": "Laser cutter", "11": "Woodshop"}},
    }


@pytest.fixture
def catalog(catalog_data):
    return LabelCatalog(**catalog_data)


@pytest.fixture
def catalog_file(tmp_path, catalog_data):
    path = tmp_path / "labels.json"
    path.write_text(json.dumps(catalog_data), encoding="utf-8")
    return path


@pytest.fixture
def config(tmp_path):
    return StatsConfig(
        records_path=tmp_path / "appointments.json",
        labels_path=tmp_path / "labels.json",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def app(config, scenario_records, catalog):
    """Create and configure a Flask app for testing."""
    app = create_app(
        config=config,
        source=InMemoryRecordSource(scenario_records),
        labels=catalog,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()
