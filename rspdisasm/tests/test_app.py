# rspdisasm/tests/test_app.py
import pytest

from rspdisasm.app import app


@pytest.fixture
def client():
    """Provides a Flask test client for the disassembler service."""
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_ping(client):
    response = client.get("/api/ping")
    assert response.status_code == 200
    assert response.get_json() == {"message": "pong"}

def test_disassemble_hex_data(client):
    response = client.post("/api/disassemble", json={"data": "2008000500000000"})
    assert response.status_code == 200
    result = response.get_json()
    assert not result["errors"], f"Expected no errors, got: {result['errors']}"
    assert result["assembly_code"] == (
        "/* 84000000 20080005 */\taddi t0, r0, 5\n"
        "/* 84000004 00000000 */\tnop\n"
    )

def test_disassemble_with_options_and_vaddr(client):
    response = client.post("/api/disassemble", json={
        "data": "40882000",
        "vaddr": "0x04001000",
        "reg_names": False,
        "armips_cop0_names": False,
    })
    assert response.status_code == 200
    assert response.get_json()["assembly_code"] == "/* 04001000 40882000 */\tmtc0 $8, SP_STATUS\n"

def test_disassemble_machine_code_list(client):
    response = client.post("/api/disassemble", json={"machine_code": ["0x0D000000"], "vaddr": 0x84000000})
    assert response.status_code == 200
    assert response.get_json()["assembly_code"] == "subr_84000000:\n/* 84000000 0D000000 */\tjal subr_84000000\n"

def test_unaligned_data_is_bad_request(client):
    response = client.post("/api/disassemble", json={"data": "000000"})
    assert response.status_code == 400
    errors = response.get_json()["errors"]
    assert errors[0]["message"] == "data was not aligned to four-byte size (was 3 bytes sized)"

def test_invalid_hex_data(client):
    response = client.post("/api/disassemble", json={"data": "zz"})
    assert response.status_code == 400

def test_invalid_machine_code_line(client):
    response = client.post("/api/disassemble", json={"machine_code": ["0x20080005", "nope"]})
    assert response.status_code == 400
    assert response.get_json()["errors"][0]["line"] == 2

def test_missing_payload(client):
    response = client.post("/api/disassemble", json={})
    assert response.status_code == 400
    assert "errors" in response.get_json()

def test_invalid_vaddr(client):
    response = client.post("/api/disassemble", json={"data": "00000000", "vaddr": "banana"})
    assert response.status_code == 400
