import json
import threading

import pytest

from crystal_counter import config
from crystal_counter.crystal_counter_showtime import create_app
from crystal_counter.kernel.anonymizer import anonymize_ip

def _id(ip):
    return anonymize_ip(ip)["anonymized_id"]

def _distinct_addresses(n, avoid=()):
    # distinct ids, none shared with the addresses in avoid
    taken = {_id(ip) for ip in avoid}
    out = []
    for i in range(1, 255):
        ip = f"198.51.100.{i}"
        if _id(ip) not in taken:
            taken.add(_id(ip))
            out.append(ip)
        if len(out) == n:
            return out
    raise AssertionError("not enough distinct addresses")

def _make_client(tmp_path, **kw):
    app = create_app(data_file=str(tmp_path / "data.json"), **kw)
    app.testing = True
    return app.test_client()

@pytest.fixture
def client(tmp_path):
    with _make_client(tmp_path) as client:
        yield client

def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json["ok"]

    r = client.get("/version")
    assert r.status_code == 200
    assert r.json["name"] == "CrystalCounter"

def test_visit_counts_unique_addresses(client):
    hdr = "X-Nf-Client-Connection-Ip"
    r = client.get("/api/visit", headers={hdr: "192.0.2.10"})
    assert r.status_code == 200
    assert r.json["count"] == 1

    r = client.get("/api/visit", headers={hdr: "192.0.2.10"})
    assert r.json["count"] == 1

    r = client.get("/api/visit", headers={hdr: "2001:db8::10"})
    assert r.json["count"] == 2

def test_forwarded_for_first_hop_wins(client):
    first, other, second = _distinct_addresses(3, avoid=["127.0.0.1"])
    r = client.get("/api/visit", headers={"X-Forwarded-For": f"{first}, {second}"})
    assert r.json["count"] == 1
    ids = [v["id"] for v in client.get("/api/ips").json["visitors"]]
    assert ids == [_id(first)]

    r = client.get("/api/visit", headers={"X-Forwarded-For": first})
    assert r.json["count"] == 1
    r = client.get("/api/visit", headers={"X-Forwarded-For": other})
    assert r.json["count"] == 2

def test_configured_header_overrides_default(tmp_path):
    ip, fallback = _distinct_addresses(2, avoid=["127.0.0.1"])
    with _make_client(tmp_path, ip_header="X-Real-Ip") as c:
        c.get("/api/visit", headers={"X-Real-Ip": ip, "X-Nf-Client-Connection-Ip": fallback})
        ids = [v["id"] for v in c.get("/api/ips").json["visitors"]]
    assert ids == [_id(ip)]

def test_header_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("CRYSTAL_COUNTER_IP_HEADER", "X-Client")
    ip, = _distinct_addresses(1, avoid=["127.0.0.1"])
    with _make_client(tmp_path) as c:
        assert c.application.config["IP_HEADER"] == "X-Client"
        c.get("/api/visit", headers={"X-Client": ip})
        ids = [v["id"] for v in c.get("/api/ips").json["visitors"]]
    assert ids == [_id(ip)]

def test_no_address_leaves_count(client):
    client.get("/api/visit", headers={"X-Nf-Client-Connection-Ip": "192.0.2.77"})
    r = client.get("/api/visit", environ_overrides={"REMOTE_ADDR": ""})
    assert r.status_code == 200
    assert r.json["count"] == 1
    assert len(client.get("/api/ips").json["visitors"]) == 1

def test_malformed_store_document(tmp_path):
    (tmp_path / "data.json").write_text(json.dumps({"visitors": None}), encoding="utf-8")
    with _make_client(tmp_path) as c:
        assert c.get("/api/ips").json == {"count": 0, "visitors": []}
        r = c.get("/api/visit", headers={"X-Nf-Client-Connection-Ip": "192.0.2.8"})
        assert r.status_code == 200
        assert r.json["count"] == 1

def test_config_from_environment(monkeypatch):
    monkeypatch.delenv("CRYSTAL_COUNTER_DATA_FILE", raising=False)
    monkeypatch.delenv("CRYSTAL_COUNTER_PORT", raising=False)
    assert config.get_data_file() == "data.json"
    assert config.get_port() == 5000
    monkeypatch.setenv("CRYSTAL_COUNTER_DATA_FILE", " /var/lib/cc/visitors.json ")
    monkeypatch.setenv("CRYSTAL_COUNTER_PORT", "8081")
    assert config.get_data_file() == "/var/lib/cc/visitors.json"
    assert config.get_port() == 8081
    monkeypatch.setenv("CRYSTAL_COUNTER_PORT", "eighty")
    assert config.get_port() == 5000

def test_app_uses_data_file_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    monkeypatch.setenv("CRYSTAL_COUNTER_DATA_FILE", str(path))
    app = create_app()
    assert app.extensions["visitor_store"].path == str(path)
    with app.test_client() as c:
        c.get("/api/visit", headers={"X-Nf-Client-Connection-Ip": "192.0.2.9"})
    assert json.loads(path.read_text(encoding="utf-8"))["count"] == 1

def test_ips_lists_crystals_not_addresses(client):
    client.get("/api/visit", headers={"X-Nf-Client-Connection-Ip": "192.0.2.55"})
    r = client.get("/api/ips")
    assert r.status_code == 200
    assert r.json["count"] == 1
    v = r.json["visitors"][0]
    assert v["id"].isdigit()
    assert "+" in v["crystal"]
    assert "192.0.2.55" not in r.get_data(as_text=True)

def test_store_unavailable(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    app = create_app(data_file=str(blocker / "data.json"))
    app.testing = True
    with app.test_client() as c:
        r = c.get("/api/visit", headers={"X-Nf-Client-Connection-Ip": "192.0.2.1"})
        assert r.status_code == 503
        assert r.json["ok"] is False

def test_parallel_first_visits_share_one_store(tmp_path):
    app = create_app(data_file=str(tmp_path / "data.json"))
    app.testing = True
    store = app.extensions["visitor_store"]
    ips = _distinct_addresses(12, avoid=["127.0.0.1"])

    def hit(ip):
        with app.test_client() as c:
            c.get("/api/visit", headers={"X-Nf-Client-Connection-Ip": ip})

    threads = [threading.Thread(target=hit, args=(ip,)) for ip in ips]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert app.extensions["visitor_store"] is store
    with app.test_client() as c:
        data = c.get("/api/ips").json
    assert data["count"] == len(ips)
    assert sorted(v["id"] for v in data["visitors"]) == sorted(_id(ip) for ip in ips)
