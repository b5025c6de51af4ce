import importlib.metadata
import logging
import logging.config
import sys
from argparse import ArgumentParser, FileType
from importlib import import_module
from pkgutil import iter_modules
from typing import Optional, Sequence

import yaml

from hydraclient.cli import commands
from hydraclient.context import HydraContext, ConfigError
from hydraclient.parsers import ProcessingError
from hydraclient.utils import DEFAULT_LOGGING_OPTIONS, envsubst, with_file_handler

logger = logging.getLogger(__name__)
version = importlib.metadata.version('hydraclient')


def load_commands(subparsers):
    # load all defined subcommands from the hydraclient.cli.commands package,
    # using introspection
    command_modules = {}
    for finder, name, ispkg in iter_modules(commands.__path__):
        module = import_module(commands.__name__ + '.' + name)
        if hasattr(module, 'configure_cli'):
            module.configure_cli(subparsers)
            command_modules[name] = module
    return command_modules


def get_logging_options(config: dict, cmd_name: str, verbose: bool = False, quiet: bool = False) -> dict:
    if 'LOGGING_CONFIG' in config:
        with open(config['LOGGING_CONFIG'], 'r') as logging_config_file:
            logging_options = yaml.safe_load(logging_config_file)
    else:
        logging_options = {
            **DEFAULT_LOGGING_OPTIONS,
            'handlers': {k: dict(v) for k, v in DEFAULT_LOGGING_OPTIONS['handlers'].items()},
        }

    if config.get('LOG_DIR'):
        logging_options = with_file_handler(logging_options, config['LOG_DIR'], cmd_name)

    # manipulate console verbosity
    if 'console' in logging_options.get('handlers', {}):
        if verbose:
            logging_options['handlers']['console']['level'] = 'DEBUG'
        elif quiet:
            logging_options['handlers']['console']['level'] = 'WARNING'

    return logging_options


def main(argv: Optional[Sequence[str]] = None):
    """Parse args and handle options."""

    parser = ArgumentParser(
        prog='hydraclient',
        description='Parse RDF representations of Hydra API resources and apply Hydra inferences.'
    )
    parser.set_defaults(cmd_name=None)

    parser.add_argument(
        '-c', '--config',
        help='Path to configuration file.',
        action='store',
        dest='config_file',
        type=FileType('r')
    )
    parser.add_argument(
        '-V', '--version',
        help='Print version and exit.',
        action='version',
        version=version
    )
    parser.add_argument(
        '-v', '--verbose',
        help='increase the verbosity of the status output',
        action='store_true'
    )
    parser.add_argument(
        '-q', '--quiet',
        help='decrease the verbosity of the status output',
        action='store_true'
    )

    subparsers = parser.add_subparsers(title='commands')

    command_modules = load_commands(subparsers)

    # parse command line args
    args = parser.parse_args(argv)

    # if no subcommand was selected, display the help
    if args.cmd_name is None:
        parser.print_help()
        sys.exit(0)

    if args.config_file is not None:
        config = envsubst(yaml.safe_load(args.config_file)) or {}
    else:
        config = {}

    # configure logging
    logging.config.dictConfig(get_logging_options(config, args.cmd_name, args.verbose, args.quiet))

    if args.config_file is not None:
        logger.debug(f'Loaded configuration from {args.config_file.name}')

    # get the selected subcommand
    command_module = command_modules[args.cmd_name]

    # dispatch to the selected subcommand
    try:
        if not hasattr(command_module, 'Command'):
            raise RuntimeError(f'Unable to execute command {args.cmd_name}')

        command = command_module.Command(context=HydraContext(config=config))
        command(args)
    except (ProcessingError, ConfigError, RuntimeError) as e:
        # something failed, exit with non-zero status
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        # aborted due to Ctrl+C
        sys.exit(2)


if __name__ == "__main__":
    main()
