from typing import Any

from hydraclient.context import HydraContext


class BaseCommand:
    def __init__(self, context: HydraContext = None):
        self.context = context if context is not None else HydraContext(config={})
        self.result = None

    @property
    def config(self) -> dict[str, Any]:
        name = self.__module__.split('.')[-1]
        return (self.context.config or {}).get('COMMANDS', {}).get(name.upper(), {})

    def __call__(self, *args, **kwargs):
        self.execute(*args, **kwargs)

    def execute(self, *args, **kwargs):
        raise NotImplementedError
