import json
import os

import pytest

from landly import cli
from landly.config import settings


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)


def _write(tmp_path, name, payload):
    path = tmp_path / name
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return str(path)


@pytest.mark.unit
def test_validate_prints_normalized_schema(tmp_path, capsys):
    path = _write(tmp_path, "schema.json", {"pages": []})
    assert cli.main(["validate", path]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["auto_fixes"] == ["default_page_added"]
    assert out["schema"]["pages"][0]["path"] == "/"


@pytest.mark.unit
def test_validate_reports_schema_errors(tmp_path, capsys):
    path = _write(tmp_path, "schema.json", "definitely not json")
    assert cli.main(["validate", path]) == 1
    err = json.loads(capsys.readouterr().err)
    assert err["error_code"] == "SCHEMA_NOT_JSON"


@pytest.mark.unit
def test_missing_file_is_reported(tmp_path, capsys):
    assert cli.main(["validate", str(tmp_path / "absent.json")]) == 1
    assert json.loads(capsys.readouterr().err)["error_code"] == "IO_ERROR"


@pytest.mark.unit
def test_render_writes_build(tmp_path, capsys):
    path = _write(tmp_path, "schema.json", {"pages": [{"path": "/", "title": "Home", "blocks": []}]})
    out_dir = str(tmp_path / "builds")
    assert cli.main(["render", "proj-7", path, "--output-dir", out_dir]) == 0
    build_dir = json.loads(capsys.readouterr().out)["build_dir"]
    assert build_dir == os.path.join(out_dir, "proj-7")
    assert os.path.isfile(os.path.join(build_dir, "index.html"))


@pytest.mark.unit
def test_render_failure_exit_code(tmp_path, capsys):
    path = _write(tmp_path, "schema.json", {"pages": "nope"})
    assert cli.main(["render", "proj-7", path, "--output-dir", str(tmp_path)]) == 1
    err = json.loads(capsys.readouterr().err)
    assert err["details"]["stage"] == "structure"


@pytest.mark.unit
def test_generate_uses_mock_provider(capsys):
    assert cli.main(["generate", "студия йоги", "--payment-url", "https://pay.example"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["schema"]["payment"]["url"] == "https://pay.example"
    assert out["schema"]["pages"][0]["title"] == "Студия йоги"


@pytest.mark.integration
def test_publish_to_local_disk(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "local")
    monkeypatch.setattr(settings, "PUBLISH_DIR", str(tmp_path / "published"))
    monkeypatch.setattr(settings, "PUBLIC_BASE_URL", "https://landly.example")
    path = _write(tmp_path, "schema.json", {"pages": [{"path": "/", "title": "Home", "blocks": []}]})

    code = cli.main(["publish", "abcdef123456", "Yoga Studio", path, "--output-dir", str(tmp_path / "builds")])
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["subdomain"] == "yoga-studio-abcdef12"
    assert out["public_url"] == "https://landly.example/sites/yoga-studio-abcdef12"
    assert out["files_uploaded"] == 3
    assert os.path.isfile(tmp_path / "published" / "sites" / "yoga-studio-abcdef12" / "index.html")


@pytest.mark.unit
def test_subcommand_is_required():
    with pytest.raises(SystemExit):
        cli.main([])
