import textwrap

from routecurl.config.resolver import (
    properties_candidates,
    resolve_server_config,
    server_origin,
    yaml_candidates,
)
from routecurl.domain.models import ConfigDocument, ResolvedServerConfig
from routecurl.settings import InspectorSettings


def doc(name: str, content: str, priority: int = 0) -> ConfigDocument:
    return ConfigDocument(name=name, content=textwrap.dedent(content), priority=priority)


def test_defaults_when_nothing_is_configured():
    cfg = resolve_server_config([])
    assert cfg == ResolvedServerConfig()
    assert server_origin(cfg) == "http://localhost:8080"


def test_default_ports_are_omitted():
    assert server_origin(ResolvedServerConfig(port="80")) == "http://localhost"
    assert server_origin(ResolvedServerConfig(port="443", ssl_enabled=True)) == "https://localhost"
    assert server_origin(ResolvedServerConfig(port="9090")) == "http://localhost:9090"
    # 443 over plain http is not a default port
    assert server_origin(ResolvedServerConfig(port="443")) == "http://localhost:443"


def test_yaml_values_are_resolved():
    docs = [
        doc(
            "application.yml",
            """
            server:
              address: api.example.com
              port: 8443
              ssl:
                enabled: TRUE
              servlet:
                context-path: /shop
            """,
        )
    ]
    cfg = resolve_server_config(docs)
    assert cfg.context_path == "/shop"
    assert cfg.host == "api.example.com"
    assert cfg.port == "8443"
    assert cfg.ssl_enabled is True
    assert server_origin(cfg) == "https://api.example.com:8443"


def test_properties_used_only_when_yaml_has_no_value():
    docs = [
        doc("application.yml", "server:\n  port: 9000\n"),
        doc("application.properties", "server.port=7000\nserver.servlet.context-path=/props\n"),
    ]
    cfg = resolve_server_config(docs)
    assert cfg.port == "9000"
    assert cfg.context_path == "/props"


def test_properties_legacy_context_path_key():
    docs = [doc("application.properties", "server.context-path=/legacy\n")]
    assert resolve_server_config(docs).context_path == "/legacy"


def test_properties_profiles_after_base():
    docs = [
        doc("application-dev.properties", "server.port=1111\nserver.address=dev.local\n"),
        doc("application.properties", "server.port=2222\n"),
    ]
    cfg = resolve_server_config(docs)
    assert cfg.port == "2222"
    assert cfg.host == "dev.local"


def test_yaml_profiles_only_without_base_file():
    docs = [
        doc("application-dev.yml", "server:\n  port: 1111\n"),
        doc("application-prod.yml", "server:\n  port: 3333\n"),
    ]
    assert [d.name for d in yaml_candidates(docs, InspectorSettings())] == [
        "application-dev.yml",
        "application-prod.yml",
    ]
    assert resolve_server_config(docs).port == "1111"

    with_base = docs + [doc("application.yaml", "spring:\n  name: x\n")]
    assert [d.name for d in yaml_candidates(with_base, InspectorSettings())] == ["application.yaml"]
    # the base file has no port and profiles are not consulted
    assert resolve_server_config(with_base).port is None


def test_yml_preferred_over_yaml():
    docs = [
        doc("application.yaml", "server:\n  port: 2\n"),
        doc("application.yml", "server:\n  port: 1\n"),
    ]
    assert resolve_server_config(docs).port == "1"


def test_same_file_name_in_several_roots_follows_priority():
    docs = [
        doc("application.properties", "server.port=2\n", priority=1),
        doc("application.properties", "server.port=1\n", priority=0),
    ]
    assert [d.content for d in properties_candidates(docs, InspectorSettings())][0] == "server.port=1\n"
    assert resolve_server_config(docs).port == "1"


def test_ssl_flag_other_than_true_is_http():
    docs = [doc("application.properties", "server.ssl.enabled=yes\n")]
    cfg = resolve_server_config(docs)
    assert cfg.ssl_enabled is False
    assert server_origin(cfg).startswith("http://")


def test_settings_override_defaults():
    settings = InspectorSettings(default_host="127.0.0.1", default_port="80")
    assert server_origin(ResolvedServerConfig(), settings) == "http://127.0.0.1"
