from fastapi.testclient import TestClient

from api import app


client = TestClient(app)


def test_parse_directory(mib_dir):
	resp = client.post("/parse", json={"root_path": str(mib_dir)})
	assert resp.status_code == 200
	body = resp.json()
	assert [n["name"] for n in body["tree"]] == ["acme", "base"]
	assert body["nodes"][2]["oid"] == "1.1.2.1"
	assert body["modules"] == ["ACME-MIB", "BASE-MIB"]
	assert body["summary"]["global_overview"].startswith("2 modules")


def test_missing_dependency(mib_dir):
	(mib_dir / "BASE-MIB.mib").unlink()
	resp = client.post("/parse", json={"root_path": str(mib_dir)})
	assert resp.status_code == 422
	assert resp.json()["detail"]["missing"] == ["BASE-MIB.mib"]


def test_preloaded_modules(mib_dir):
	(mib_dir / "BASE-MIB.mib").unlink()
	resp = client.post("/parse", json={"root_path": str(mib_dir), "preloaded_modules": ["BASE-MIB"]})
	assert resp.status_code == 200


def test_invalid_root(tmp_path):
	resp = client.post("/parse", json={"root_path": str(tmp_path / "absent")})
	assert resp.status_code == 400


def test_cycle(tmp_path):
	(tmp_path / "LOOP.mib").write_text("p OBJECT IDENTIFIER ::= { q 1 }\nq OBJECT IDENTIFIER ::= { p 2 }\n")
	resp = client.post("/parse", json={"root_path": str(tmp_path)})
	assert resp.status_code == 422
	assert resp.json()["detail"]["error"] == "integrity"


def test_custom_root_names_and_arc(tmp_path):
	(tmp_path / "CCITT.mib").write_text("a OBJECT IDENTIFIER ::= { ccitt 4 }\nb OBJECT IDENTIFIER ::= { nowhere 5 }\n")
	resp = client.post(
		"/parse",
		json={"root_path": str(tmp_path), "root_names": {"iso": "1", "ccitt": "0"}, "root_arc": "2"},
	)
	assert resp.status_code == 200
	oids = {n["name"]: n["oid"] for n in resp.json()["nodes"]}
	assert oids["a"] == "0.4"
	assert oids["b"] == "2.5"
	assert [n["name"] for n in resp.json()["tree"]] == ["a"]


def test_module_suffix(mib_dir):
	(mib_dir / "BASE-MIB.mib").unlink()
	resp = client.post("/parse", json={"root_path": str(mib_dir), "module_suffix": ".txt"})
	assert resp.status_code == 422
	assert resp.json()["detail"]["missing"] == ["BASE-MIB.txt"]


def test_non_numeric_root_arc(mib_dir):
	resp = client.post("/parse", json={"root_path": str(mib_dir), "root_arc": "x"})
	assert resp.status_code == 400
