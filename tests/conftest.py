import io
import zipfile

import pytest
from openpyxl import Workbook


def xlsx_bytes(rows):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def truncate_member(raw, member):
    """Rebuild a zip with one member cut in half."""
    src = zipfile.ZipFile(io.BytesIO(raw))
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as dst:
        for item in src.infolist():
            data = src.read(item.filename)
            if item.filename == member:
                data = data[: len(data) // 2]
            dst.writestr(item, data)
    return buf.getvalue()


@pytest.fixture
def make_xlsx():
    return xlsx_bytes


@pytest.fixture
def truncated_xlsx():
    raw = xlsx_bytes([["name", "email"]] + [[f"Person {i}", f"p{i}@x.com"] for i in range(50)])
    return truncate_member(raw, "xl/worksheets/sheet1.xml")
