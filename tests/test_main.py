import pytest

import main
from history import HistoryStore, MemoryStore
from workflow import SqlGeneratorWorkflow


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(main, "workflow", SqlGeneratorWorkflow(HistoryStore(MemoryStore())))
    main.app.config["TESTING"] = True
    with main.app.test_client() as c:
        yield c


def test_generate_endpoint(client):
    resp = client.post("/generate", json={
        "query_type": "update",
        "dialect": "postgresql",
        "table_name": "table",
        "structure": "id:bigint:pk\nname:text",
        "rows": [{"id": 1, "name": "y"}],
    })
    assert resp.status_code == 200
    assert resp.get_json() == {"sql": 'UPDATE "table" SET "name" = \'y\' WHERE "id" = 1;'}


def test_generate_endpoint_error(client):
    resp = client.post("/generate", json={"table_name": "t", "structure": "a b c", "rows": "1\n2\n3\n4"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["kind"] == "MisalignedRows"
    assert "multiples of 3" in body["error"]


def test_generate_endpoint_requires_object(client):
    resp = client.post("/generate", data="not json", content_type="application/json")
    assert resp.status_code == 400


def test_history_endpoint(client):
    client.post("/generate", json={"table_name": "users", "structure": "id name", "rows": '{"id": 1}'})
    resp = client.get("/history")
    assert resp.get_json() == {
        "table_names": ["users"],
        "structures": [{"label": "id name", "value": "id name"}],
    }


def test_home_form_round_trip(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"SQL statement generator" in resp.data

    resp = client.post("/", data={
        "query_type": "insert",
        "dialect": "mysql",
        "table_name": "users",
        "structure": "id:int\nname",
        "rows": "1\tAnn",
    })
    assert resp.status_code == 200
    assert b"INSERT INTO `users` (`id`, `name`) VALUES" in resp.data
    assert b"Query generated successfully." in resp.data


def test_home_form_error(client):
    resp = client.post("/", data={"table_name": "", "structure": "a", "rows": "1"})
    assert resp.status_code == 400
    assert b"Table name is required." in resp.data


def test_home_prefills_suggested_structure(client):
    resp = client.get("/?structure=id%3Aint")
    assert b"id:int</textarea>" in resp.data
