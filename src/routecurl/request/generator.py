from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from routecurl.config.resolver import resolve_server_config
from routecurl.domain.models import (
    ConfigDocument,
    ResolvedServerConfig,
    RoutingMethod,
    TypeDefinition,
    TypeRef,
    TypeResolver,
)
from routecurl.request.body import BodySynthesizer
from routecurl.request.command import assemble_command
from routecurl.request.params import classify_parameters, resolve_content_type
from routecurl.routing.http_method import infer_http_method
from routecurl.routing.url import resolve_url
from routecurl.settings import InspectorSettings

logger = logging.getLogger(__name__)


class NullTypeResolver:
    """Resolves nothing; bodies come out as {} and custom fields as null."""

    def resolve(self, ref: TypeRef, referrer: Optional[str] = None) -> Optional[TypeDefinition]:
        return None


@dataclass(frozen=True)
class RouteRequest:
    url: str
    http_method: str
    command: str


class RouteInspector:
    """
    Entry point for one controller module: resolves route URLs and renders
    curl commands for routing methods.

    Server config is resolved once from the documents handed in; every call
    after that is a pure function of the method snapshot.
    """

    def __init__(
        self,
        config_documents: Sequence[ConfigDocument] = (),
        type_resolver: Optional[TypeResolver] = None,
        settings: Optional[InspectorSettings] = None,
        server_config: Optional[ResolvedServerConfig] = None,
    ) -> None:
        self.settings = settings or InspectorSettings()
        self.type_resolver = type_resolver if type_resolver is not None else NullTypeResolver()
        if server_config is None:
            server_config = resolve_server_config(config_documents, self.settings)
        self.server_config = server_config
        self.body_synthesizer = BodySynthesizer(self.type_resolver, self.settings)

    def resolve_url(self, method: RoutingMethod) -> Optional[str]:
        return resolve_url(method, self.server_config, self.settings)

    def inspect(self, method: RoutingMethod) -> Optional[RouteRequest]:
        url = self.resolve_url(method)
        if url is None:
            logger.debug("%s has no mapping annotation", method.name)
            return None

        http_method = infer_http_method(method)
        params = classify_parameters(method)
        content_type = resolve_content_type(method, params.body, self.settings)

        body = None
        if params.body is not None:
            referrer = method.owner.qualified_name if method.owner is not None else ""
            body = self.body_synthesizer.synthesize_ref(params.body.type, referrer or None)

        command = assemble_command(
            url,
            http_method,
            params.path_variables,
            params.query_params,
            body=body,
            content_type=content_type,
            accept=self.settings.accept,
        )
        return RouteRequest(url=url, http_method=http_method, command=command)

    def generate_request(self, method: RoutingMethod) -> Optional[str]:
        result = self.inspect(method)
        return result.command if result is not None else None
