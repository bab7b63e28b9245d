"""Configuration management for the agent."""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from convoy.agent.source import Locator, fetch, parse_locator
from convoy.models.container import ContainerSpec
from convoy.models.network import NetworkSpec
from convoy.models.state import DesiredState
from convoy.models.volume import VolumeSpec


logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """The configuration document could not be parsed or validated."""
    pass


class ConfigManager:
    """Loads the desired state from a configuration locator."""

    def __init__(self, config_url: str):
        """Initialize configuration manager."""
        self.locator: Locator = parse_locator(config_url)
        # JSON documents are valid YAML, so one parser covers both formats.
        self.yaml = YAML(typ="safe", pure=True)
        self.desired: Optional[DesiredState] = None

    async def load(self) -> DesiredState:
        """Fetch, parse and validate the configuration document."""
        logger.info(f"Loading configuration from {self.locator.location}")
        raw = await fetch(self.locator)
        desired = self.parse(raw)

        logger.info(f"Found {len(desired.volumes)} volume(s) in config")
        logger.info(f"Found {len(desired.networks)} network(s) in config")
        logger.info(f"Found {len(desired.containers)} container(s) in config")

        self.desired = desired
        return desired

    def parse(self, raw: bytes) -> DesiredState:
        """Parse a raw configuration document into a DesiredState."""
        try:
            data = self.yaml.load(raw.decode("utf-8"))
        except (YAMLError, UnicodeDecodeError) as e:
            raise ConfigError(f"Unparseable configuration: {e}") from e

        if data is None:
            raise ConfigError("Configuration document is empty")
        if not isinstance(data, dict):
            raise ConfigError("Configuration document must be a mapping")

        try:
            return DesiredState(
                volumes=self._volumes(_section(data, "volumes", list)),
                networks=self._networks(_section(data, "networks", dict)),
                containers=self._containers(_section(data, "containers", dict)),
            )
        except ValidationError as e:
            logger.error(f"Invalid configuration: {e}")
            raise ConfigError(f"Invalid configuration: {e}") from e

    def _volumes(self, items: List[Any]) -> List[VolumeSpec]:
        return [VolumeSpec.model_validate(item) for item in items]

    def _networks(self, items: Dict[str, Any]) -> Dict[str, NetworkSpec]:
        return {
            name: NetworkSpec.model_validate({**_entry(name, spec), "name": name})
            for name, spec in items.items()
        }

    def _containers(self, items: Dict[str, Any]) -> Dict[str, ContainerSpec]:
        return {
            name: ContainerSpec.model_validate({**_entry(name, spec), "name": name})
            for name, spec in items.items()
        }


def _section(data: Dict[str, Any], name: str, expected: type) -> Any:
    """Find a top-level section by case-insensitive key."""
    for key, value in data.items():
        if str(key).lower() != name:
            continue
        if value is None:
            return expected()
        if not isinstance(value, expected):
            raise ConfigError(f"Section {key!r} must be a {expected.__name__}")
        return value
    return expected()


def _entry(name: str, spec: Any) -> Dict[str, Any]:
    if spec is None:
        return {}
    if not isinstance(spec, dict):
        raise ConfigError(f"Definition of {name!r} must be a mapping")
    return spec
