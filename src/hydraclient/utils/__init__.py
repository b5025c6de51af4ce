import logging
import os
import re
from datetime import datetime, timezone
from typing import Mapping

DEFAULT_LOGGING_OPTIONS = {
    'version': 1,
    'formatters': {
        'full': {
            'format': '%(levelname)s|%(asctime)s|%(threadName)s|%(name)s|%(message)s'
        },
        'messageonly': {
            'format': '%(message)s'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'messageonly',
            'stream': 'ext://sys.stderr'
        },
    },
    'loggers': {
        '__main__': {
            'level': 'DEBUG',
            'handlers': ['console'],
            'propagate': False
        },
        'hydraclient': {
            'level': 'DEBUG',
            'handlers': ['console'],
            'propagate': False
        },
    },
    'root': {
        'level': 'DEBUG'
    }
}
logger = logging.getLogger(__name__)


def datetimestamp() -> str:
    """Current UTC time as a 14-digit string, e.g. `20231117151827`, for use in log file names."""
    return datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S')


def with_file_handler(logging_options: dict, log_dir: str, name: str) -> dict:
    """Add a DEBUG-level file handler writing to `{log_dir}/hydraclient.{name}.{timestamp}.log`
    to a copy of the given `logging.config.dictConfig()` options, and attach it to every
    configured logger. The log directory is created if it does not exist."""
    if not os.path.isdir(log_dir):
        os.makedirs(log_dir)
    filename = os.path.join(log_dir, f'hydraclient.{name}.{datetimestamp()}.log')
    return {
        **logging_options,
        'handlers': {
            **logging_options.get('handlers', {}),
            'file': {
                'class': 'logging.FileHandler',
                'level': 'DEBUG',
                'formatter': 'full',
                'filename': filename,
            },
        },
        'loggers': {
            logger_name: {**config, 'handlers': [*config.get('handlers', []), 'file']}
            for logger_name, config in logging_options.get('loggers', {}).items()
        },
    }


PLACEHOLDER = re.compile(r'\$\{([^}]+)\}')


def substitute(match: re.Match, env: Mapping[str, str]) -> str:
    name = match.group(1)
    if name not in env:
        logger.warning(f'Environment variable ${{{name}}} not found')
        return match.group(0)
    return env[name]


def envsubst(value: str | list | dict, env: Mapping[str, str] = None) -> str | list | dict:
    """Replace `${NAME}` placeholders in a configuration value with entries
    from `env` (by default, `os.environ`). Lists and dictionaries are
    processed recursively and returned as new objects; other values are
    returned unchanged. Placeholders with no matching entry are kept as is.
    """
    if env is None:
        env = os.environ
    if isinstance(value, str):
        return PLACEHOLDER.sub(lambda match: substitute(match, env), value)
    elif isinstance(value, list):
        return [envsubst(v, env) for v in value]
    elif isinstance(value, dict):
        return {k: envsubst(v, env) for k, v in value.items()}
    else:
        return value


TRUE_VALUES = {'y', 'yes', 't', 'true', 'on', '1'}
FALSE_VALUES = {'n', 'no', 'f', 'false', 'off', '0'}


def strtobool(val: str | bool) -> int:
    """Interpret a configuration flag as 1 or 0. Accepts `y`, `yes`, `t`,
    `true`, `on` and `1` (and the opposites, in any case), as well as the
    booleans YAML produces for unquoted `true` and `false`. Raises
    `ValueError` for anything else."""
    if isinstance(val, bool):
        return int(val)
    flag = val.lower()
    if flag in TRUE_VALUES:
        return 1
    if flag in FALSE_VALUES:
        return 0
    raise ValueError(f'invalid truth value {val!r}')
