from dataclasses import dataclass
from importlib.metadata import version
from typing import Any

from hydraclient.parsers import ParserRegistry, build_default_registry, load_parser
from hydraclient.processors import RdfProcessor
from hydraclient.utils import strtobool


class ConfigError(Exception):
    def __init__(self, message):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class HydraContext:
    """Lazily constructed processing components, configured from a dictionary
    (usually loaded from a YAML configuration file).

    Recognized keys in the `PROCESSOR` section:

    * `LOAD_PLUGINS`: whether to load parsers from the `hydraclient.parsers`
      entry point group (default `true`)
    * `PARSERS`: mapping of media type to a `"module:attribute"` reference to
      a parser class or instance; these replace built-in and plugin parsers
    * `DISABLED_MEDIA_TYPES`: list of media types to remove from the registry
    """
    config: dict[str, Any] = None
    _registry: ParserRegistry = None
    _processor: RdfProcessor = None

    @property
    def version(self):
        return version('hydraclient')

    @property
    def processor_config(self) -> dict[str, Any]:
        return (self.config or {}).get('PROCESSOR') or {}

    @property
    def registry(self) -> ParserRegistry:
        if self._registry is None:
            config = self.processor_config
            try:
                load_plugins = strtobool(config.get('LOAD_PLUGINS', True))
            except (ValueError, AttributeError) as e:
                raise ConfigError(f"Invalid value for 'LOAD_PLUGINS' in section 'PROCESSOR': {e}") from e

            registry = build_default_registry(load_plugins=bool(load_plugins))

            for media_type, reference in (config.get('PARSERS') or {}).items():
                try:
                    registry.register(media_type, load_parser(reference))
                except (ImportError, AttributeError, TypeError, ValueError) as e:
                    raise ConfigError(f"Unable to load parser '{reference}' for {media_type}: {e}") from e

            for media_type in config.get('DISABLED_MEDIA_TYPES') or []:
                registry.unregister(media_type)

            self._registry = registry

        return self._registry

    @property
    def processor(self) -> RdfProcessor:
        if self._processor is None:
            self._processor = RdfProcessor(registry=self.registry)
        return self._processor
