"""Inspector settings.

InspectorSettings is a frozen dataclass: every tunable the resolver and the
request synthesizer read lives here, with the defaults a Spring Boot
application uses when nothing is configured.
"""

from __future__ import annotations

from dataclasses import dataclass

YAML_BASE_FILES = ("application.yml", "application.yaml")

YAML_PROFILE_FILES = (
    "application-dev.yml",
    "application-test.yml",
    "application-prod.yml",
    "application-dev.yaml",
    "application-test.yaml",
    "application-prod.yaml",
    "application-local.yml",
    "application-local.yaml",
)

PROPERTIES_FILES = (
    "application.properties",
    "application-dev.properties",
    "application-test.properties",
    "application-prod.properties",
    "application-local.properties",
)


@dataclass(frozen=True)
class InspectorSettings:
    """Resolver/synthesizer tunables. Immutable after creation.

    Override what you need::

        settings = InspectorSettings(default_port="9000", max_body_depth=3)
    """

    # Server origin defaults
    default_host: str = "localhost"
    default_port: str = "8080"

    # Body synthesis
    max_body_depth: int = 5
    indent: str = "  "

    # Headers
    accept: str = "application/json"
    default_content_type: str = "application/json"

    # Config discovery
    yaml_base_files: tuple[str, ...] = YAML_BASE_FILES
    yaml_profile_files: tuple[str, ...] = YAML_PROFILE_FILES
    properties_files: tuple[str, ...] = PROPERTIES_FILES

    @property
    def config_file_names(self) -> tuple[str, ...]:
        return self.yaml_base_files + self.yaml_profile_files + self.properties_files
