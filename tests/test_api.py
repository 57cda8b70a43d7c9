import pytest

pytest.importorskip("fastapi")
pytest.importorskip("multipart")

from fastapi.testclient import TestClient

from unconfuse.interfaces.api import app


@pytest.fixture
def client():
    return TestClient(app)


def upload(client, source, **form):
    return client.post(
        "/decode",
        files={"file": ("obfuscated.js", source.encode("utf-8"), "application/javascript")},
        data=form,
    )


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["endpoints"]["decode"] == "/decode"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_decode_upload(client, level2_source):
    response = upload(client, level2_source)
    assert response.status_code == 200
    data = response.json()
    assert data["metadata"]["source"] == "obfuscated.js"
    assert data["metadata"]["status"] == "decoded"
    assert [r["plaintext"] for r in data["results"]] == ["Hello World!", "ABC", "Hello"]
    assert "markdown_report" not in data


def test_decode_upload_with_report(client, level2_source):
    data = upload(client, level2_source, include_report="true").json()
    assert data["markdown_report"].startswith("# Unconfuse Report: obfuscated.js")


def test_decode_upload_unsupported(client):
    data = upload(client, "var a = ['<~87cURD]~>', 'x'];").json()
    assert data["metadata"]["status"] == "unsupported"
    assert data["results"] == []


def test_decode_upload_bad_preset(client, level2_source):
    response = upload(client, level2_source, preset="nope")
    assert response.status_code == 400


def test_decode_string(client):
    response = client.post("/decode-string", data={"literal": "<~87cURD]~>"})
    assert response.status_code == 200
    result = response.json()["results"][0]
    assert result["codec"] == "base85"
    assert result["plaintext"] == "Hello"


def test_decode_string_with_options(client):
    response = client.post("/decode-string", data={"literal": "#G(I", "level": "1", "scoring": "shannon"})
    assert response.status_code == 200
    assert response.json()["results"][0]["plaintext"] == "abc"


def test_decode_string_invalid_level(client):
    response = client.post("/decode-string", data={"literal": "abc", "level": "0"})
    assert response.status_code == 400
