"""Unit tests: utils.import_parsers (CSV/JSON location import parsing)."""
import pytest

from utils.import_parsers import parse_csv, parse_json, parse_upload

pytestmark = pytest.mark.unit


def test_parse_csv_camel_case_headers():
    """CSV headers in external camelCase are converted to snake_case keys."""
    content = (
        b"qrCodeId,locationName,area,supervisorName,contactNumber,latitude,longitude\n"
        b"NGMSC00083, Sector 4 Market ,North Zone,R. Sharma,9876543210,28.6139,77.2090\n"
    )
    rows = parse_csv(content)
    assert rows == [
        {
            "qr_code_id": "NGMSC00083",
            "location_name": "Sector 4 Market",
            "area": "North Zone",
            "supervisor_name": "R. Sharma",
            "contact_number": "9876543210",
            "latitude": "28.6139",
            "longitude": "77.2090",
        }
    ]


def test_parse_csv_skips_blank_rows_and_bom():
    """Blank rows are skipped and a UTF-8 BOM does not leak into the first header."""
    content = "\ufeffqr_code_id,area\nQR0001,East\n,\n".encode("utf-8")
    assert parse_csv(content) == [{"qr_code_id": "QR0001", "area": "East"}]


def test_parse_json_list():
    """JSON array of objects is parsed; values keep their JSON types."""
    rows = parse_json(b'[{"qrCodeId": "QR0001", "latitude": 28.6}]')
    assert rows == [{"qr_code_id": "QR0001", "latitude": 28.6}]


def test_parse_json_requires_array():
    """Non-array JSON is rejected."""
    with pytest.raises(ValueError, match="array"):
        parse_json(b'{"qrCodeId": "QR0001"}')


def test_parse_json_rejects_non_object_rows():
    """Array entries must be objects."""
    with pytest.raises(ValueError, match="Row 2"):
        parse_json(b'[{"qrCodeId": "QR0001"}, 5]')


def test_parse_json_invalid():
    """Malformed JSON raises ValueError."""
    with pytest.raises(ValueError, match="Invalid JSON"):
        parse_json(b"[{")


def test_parse_upload_detects_format():
    """Format comes from the extension, falling back to content sniffing."""
    assert parse_upload(b'[{"area": "X"}]', "rows.json") == [{"area": "X"}]
    assert parse_upload(b"area\nX\n", "rows.csv") == [{"area": "X"}]
    assert parse_upload(b'  [{"area": "X"}]', None) == [{"area": "X"}]
    assert parse_upload(b"area\nX\n", "upload") == [{"area": "X"}]
