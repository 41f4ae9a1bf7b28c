"""
Pytest configuration file for the work order forms tests.

Contains shared fixtures, sample work orders and a recording drawing backend
so form layouts can be checked without rendering real PDFs.
"""

import os
import sys
from pathlib import Path

import pytest
from reportlab.lib.units import mm

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Keep app.py from building its module-level app during collection
os.environ.setdefault("TESTING", "True")

from models.work_order import WorkOrderDetail  # noqa: E402
from utils.pdf_backend import LINE_HEIGHT_FACTOR, DrawingBackend  # noqa: E402


class RecordingBackend(DrawingBackend):
    """Drawing backend that records every command instead of drawing it."""

    def __init__(self):
        super().__init__()
        self.commands = []

    def set_font(self, family, weight="normal"):
        super().set_font(family, weight)
        self.commands.append(("set_font", self.font_family, self.font_weight))

    def set_font_size(self, size):
        super().set_font_size(size)
        self.commands.append(("set_font_size", size))

    def set_line_width(self, width):
        super().set_line_width(width)
        self.commands.append(("set_line_width", width))

    def text(self, value, x, y, align=None):
        if isinstance(value, (list, tuple)):
            value = tuple(value)
        self.commands.append(("text", value, x, y, align))

    def line(self, x1, y1, x2, y2):
        self.commands.append(("line", x1, y1, x2, y2))

    def rect(self, x, y, width, height):
        self.commands.append(("rect", x, y, width, height))

    def table(self, head, body, start_y, left, col_widths, font_size=9,
              cell_padding=1.8, head_fill=(238, 238, 238), grid_line_width=0.1):
        self.commands.append(
            ("table", tuple(head), tuple(tuple(row) for row in body), start_y, left, tuple(col_widths))
        )
        row_height = font_size * LINE_HEIGHT_FACTOR / mm + 2 * cell_padding
        return start_y + row_height * (len(body) + 1)

    def add_page(self):
        self.commands.append(("add_page",))

    def output(self):
        return b"%PDF-recorded"

    # -- helpers for assertions ---------------------------------------------

    def of_kind(self, kind):
        return [c for c in self.commands if c[0] == kind]

    def texts(self):
        return [c[1] for c in self.of_kind("text")]

    def find_text(self, prefix):
        """First text command whose value starts with ``prefix``."""
        for command in self.of_kind("text"):
            if isinstance(command[1], str) and command[1].startswith(prefix):
                return command
        return None


# --------------------
# Sample data
# --------------------


def sample_work_order_data():
    return {
        "reference_id": 1042,
        "original_job_id": 88,
        "created_at": "2024-03-05T14:12:00Z",
        "updated_at": "2024-03-19T09:30:00Z",
        "status_key": "finished",
        "status_name": "Finished",
        "job_type_key": "repair",
        "job_type_name": "Repair",
        "customer": {
            "customer_id": 7,
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "address_line_1": "12 Main St",
            "address_line_2": "Unit 4",
            "city": "Newmarket",
            "province": "ON",
            "home_phone": "905-555-0101",
            "work_phone": "416-555-0199",
            "extension_text": "22",
        },
        "item_id": 301,
        "item_name": "Turntable",
        "brand_names": ["Technics"],
        "model_number": "SL-1200",
        "serial_number": "GE1234",
        "remote_control_qty": 1,
        "cable_qty": 2,
        "cord_qty": 1,
        "album_cd_cassette_qty": 0,
        "problem_description": "Platter does not spin at 45 RPM.",
        "worker_names": ["Sam", "Lee"],
        "work_done": "Replaced belt and cleaned pitch control.",
        "payment_method_names": ["Cash", "Debit"],
        "parts_total": 10,
        "delivery_total": 5,
        "labour_total": 20,
        "deposit": 7,
        "line_items": [
            {
                "line_item_id": 1,
                "item_name": "Drive belt",
                "unit_price": 10,
                "quantity_text": "1",
                "line_total_text": "$10.00",
            },
            {
                "line_item_id": 2,
                "item_name": "Labour",
                "unit_price": 20,
                "quantity_text": "1 hr",
                "line_total_text": "$20.00",
            },
        ],
    }


@pytest.fixture
def work_order_data():
    """Raw API payload for a fully populated work order."""
    return sample_work_order_data()


@pytest.fixture
def sample_work_order():
    return WorkOrderDetail.from_dict(sample_work_order_data())


@pytest.fixture
def empty_work_order():
    """A work order with nothing but the required fields."""
    return WorkOrderDetail.from_dict({"reference_id": 7, "deposit": 0})


@pytest.fixture
def recording_backend():
    return RecordingBackend()


@pytest.fixture
def make_backend():
    """Factory for independent recording backends."""
    return RecordingBackend


# --------------------
# Flask fixtures
# --------------------


@pytest.fixture(scope="function")
def app():
    """Fixture for creating a new Flask app for each test function."""
    from app import create_app
    from config import TestingConfig

    app = create_app(config_class=TestingConfig)
    app.config.update({"TESTING": True})
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
