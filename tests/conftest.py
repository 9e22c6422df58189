import io

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from mobile_lookup.main import app
from mobile_lookup.services.state import session


def make_workbook(rows, columns=None, extra_sheets=None) -> bytes:
    """Build an .xlsx in memory; the first sheet holds ``rows``."""
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        pd.DataFrame(rows, columns=columns).to_excel(writer, index=False, sheet_name="Contacts")
        for name, sheet_rows in (extra_sheets or {}).items():
            pd.DataFrame(sheet_rows).to_excel(writer, index=False, sheet_name=name)
    return output.getvalue()


@pytest.fixture(autouse=True)
def fresh_session():
    session.reset()
    yield
    session.reset()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def contacts_xlsx():
    return make_workbook([
        {"Mobile Number": "+91 98765-43210", "Customer Name": " Alice ", "Status": "Active", "Circle": "Delhi"},
        {"Mobile Number": "8765432109", "Customer Name": "Bob", "Status": " Inactive", "Circle": "Mumbai"},
        {"Mobile Number": "7654321098", "Customer Name": "Carol", "Status": "Active", "Circle": ""},
    ])


@pytest.fixture
def dataset():
    return [
        {"id": 1, "mobile": "9876543210", "name": "Alice", "status": "Active"},
        {"id": 2, "mobile": "8765432109", "name": "Bob", "status": "Inactive"},
    ]
