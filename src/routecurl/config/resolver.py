from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Sequence

from routecurl.config.properties_lookup import extract_property
from routecurl.config.yaml_lookup import extract_yaml_property
from routecurl.domain.models import ConfigDocument, ResolvedServerConfig
from routecurl.settings import InspectorSettings

logger = logging.getLogger(__name__)

CONTEXT_PATH_KEYS = ("server.servlet.context-path", "server.context-path")
HOST_KEY = "server.address"
PORT_KEY = "server.port"
SSL_KEY = "server.ssl.enabled"

_DEFAULT_PORTS = {"http": "80", "https": "443"}


def _by_name(documents: Iterable[ConfigDocument]) -> dict[str, list[ConfigDocument]]:
    out: dict[str, list[ConfigDocument]] = {}
    for doc in sorted(documents, key=lambda d: d.priority):
        out.setdefault(doc.name, []).append(doc)
    return out


def yaml_candidates(documents: Sequence[ConfigDocument], settings: InspectorSettings) -> list[ConfigDocument]:
    """
    application.yml, else application.yaml, else every profile file in the
    declared order. Profiles are only consulted when no base file exists.
    """
    named = _by_name(documents)
    for base in settings.yaml_base_files:
        if named.get(base):
            return list(named[base])

    out: list[ConfigDocument] = []
    for profile in settings.yaml_profile_files:
        out.extend(named.get(profile, []))
    return out


def properties_candidates(documents: Sequence[ConfigDocument], settings: InspectorSettings) -> list[ConfigDocument]:
    named = _by_name(documents)
    out: list[ConfigDocument] = []
    for name in settings.properties_files:
        out.extend(named.get(name, []))
    return out


def _first_value(
    docs: Iterable[ConfigDocument],
    keys: Sequence[str],
    lookup: Callable[[str, str], Optional[str]],
) -> Optional[str]:
    for key in keys:
        for doc in docs:
            value = lookup(doc.content, key)
            if value is not None:
                logger.debug("%s=%r from %s", key, value, doc.source_path or doc.name)
                return value
    return None


def lookup_setting(
    documents: Sequence[ConfigDocument],
    yaml_key: str,
    properties_keys: Sequence[str],
    settings: Optional[InspectorSettings] = None,
) -> Optional[str]:
    """YAML documents first; properties documents only when YAML has nothing."""
    settings = settings or InspectorSettings()

    value = _first_value(yaml_candidates(documents, settings), (yaml_key,), extract_yaml_property)
    if value is not None:
        return value
    return _first_value(properties_candidates(documents, settings), properties_keys, extract_property)


def resolve_server_config(
    documents: Sequence[ConfigDocument],
    settings: Optional[InspectorSettings] = None,
) -> ResolvedServerConfig:
    settings = settings or InspectorSettings()
    logger.debug("resolving server config from %d document(s)", len(documents))

    # the YAML lookup honours server.context-path on its own
    context_path = lookup_setting(documents, CONTEXT_PATH_KEYS[0], CONTEXT_PATH_KEYS, settings)
    host = lookup_setting(documents, HOST_KEY, (HOST_KEY,), settings)
    port = lookup_setting(documents, PORT_KEY, (PORT_KEY,), settings)
    ssl = lookup_setting(documents, SSL_KEY, (SSL_KEY,), settings)

    return ResolvedServerConfig(
        context_path=context_path,
        host=host,
        port=port,
        ssl_enabled=None if ssl is None else ssl.strip().lower() == "true",
    )


def server_origin(config: ResolvedServerConfig, settings: Optional[InspectorSettings] = None) -> str:
    """
    protocol://host[:port]; the port is left out when it is the protocol default.
    """
    settings = settings or InspectorSettings()

    host = config.host or settings.default_host
    port = config.port or settings.default_port
    protocol = "https" if config.ssl_enabled else "http"

    if _DEFAULT_PORTS[protocol] == port:
        return f"{protocol}://{host}"
    return f"{protocol}://{host}:{port}"
