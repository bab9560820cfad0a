from pathlib import Path

from routecurl.config.locator import locate_config_documents, read_config_document
from routecurl.config.resolver import resolve_server_config


def _touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _project(root: Path) -> Path:
    _touch(root / "pom.xml", "<project/>")
    return _touch(root / "src" / "main" / "java" / "com" / "acme" / "UserController.java", "class UserController {}")


def test_finds_config_files_of_the_owning_module(tmp_path):
    controller = _project(tmp_path)
    _touch(tmp_path / "src" / "main" / "resources" / "application.yml", "server:\n  port: 9000\n")
    _touch(tmp_path / "src" / "main" / "resources" / "application-dev.properties", "server.port=7000\n")
    _touch(tmp_path / "src" / "main" / "resources" / "bootstrap.yml", "server:\n  port: 1\n")

    docs = locate_config_documents(controller)
    assert sorted(d.name for d in docs) == ["application-dev.properties", "application.yml"]
    assert all(Path(d.source_path).is_file() for d in docs)
    assert resolve_server_config(docs).port == "9000"


def test_nested_modules_and_build_output_are_not_searched(tmp_path):
    controller = _project(tmp_path)
    _touch(tmp_path / "target" / "classes" / "application.yml", "server:\n  port: 1\n")
    _touch(tmp_path / "other-service" / "build.gradle")
    _touch(tmp_path / "other-service" / "src" / "main" / "resources" / "application.yml", "server:\n  port: 2\n")

    assert locate_config_documents(controller) == []


def test_extra_roots_come_after_the_module(tmp_path):
    app = tmp_path / "app"
    shared = tmp_path / "shared"
    controller = _project(app)
    _touch(app / "src" / "main" / "resources" / "application.properties", "server.port=8081\n")
    _touch(shared / "src" / "main" / "resources" / "application.properties", "server.port=9999\n")

    docs = locate_config_documents(controller, extra_roots=[shared, tmp_path / "missing"])
    assert [d.priority for d in docs] == [0, 1]
    assert docs[0].source_path.startswith(str(app.resolve()))
    assert resolve_server_config(docs).port == "8081"


def test_unreadable_config_is_skipped(tmp_path):
    bad = tmp_path / "application.yml"
    bad.write_bytes(b"\xff\xfe\x00bad")
    assert read_config_document(bad, priority=0) is None
    assert read_config_document(tmp_path / "absent.yml", priority=0) is None
