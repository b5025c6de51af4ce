import asyncio
import logging
from argparse import FileType, Namespace
from pathlib import Path

from hydraclient.cli.commands import BaseCommand
from hydraclient.context import ConfigError
from hydraclient.dataset import QuadDataset
from hydraclient.formats import guess_media_type
from hydraclient.namespaces import get_manager
from hydraclient.parsers import UnsupportedMediaTypeError
from hydraclient.response import TypedText

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('nquads', 'trig', 'trix', 'json-ld')


def configure_cli(subparsers):
    parser = subparsers.add_parser(
        name='process',
        description=(
            'Parse an RDF document, add the statements implied by its Hydra '
            'vocabulary usage, and write the resulting dataset.'
        )
    )
    parser.add_argument(
        '-t', '--media-type',
        help='media type of the input; guessed from the file extension if not given',
        dest='media_type',
        action='store'
    )
    parser.add_argument(
        '-b', '--base-uri',
        help='base URI for resolving relative references; defaults to the file URI of the input',
        dest='base_uri',
        action='store'
    )
    parser.add_argument(
        '-f', '--output-format',
        help=f'RDF serialization format for the output; one of {", ".join(OUTPUT_FORMATS)} (default: nquads)',
        dest='output_format',
        choices=OUTPUT_FORMATS,
        action='store'
    )
    parser.add_argument(
        '-o', '--output-file',
        help='file to write the output to (default: STDOUT)',
        dest='output_file',
        type=FileType('w'),
        default='-'
    )
    parser.add_argument(
        'source',
        help='file to process, or "-" to read from STDIN',
        type=FileType('r')
    )
    parser.set_defaults(cmd_name='process')


def default_base_uri(filename: str) -> str:
    if filename in ('<stdin>', '-'):
        raise RuntimeError('A base URI (-b/--base-uri) is required when reading from STDIN')
    return Path(filename).resolve().as_uri()


class Command(BaseCommand):
    def execute(self, args: Namespace):
        media_type = args.media_type or guess_media_type(args.source.name)
        if media_type is None:
            raise RuntimeError(f'Unable to determine the media type of {args.source.name}; use -t/--media-type')

        processor = self.context.processor
        if not processor.can_process(media_type):
            raise UnsupportedMediaTypeError(media_type)

        base_uri = args.base_uri or default_base_uri(args.source.name)
        output_format = args.output_format or self.config.get('OUTPUT_FORMAT', 'nquads')
        if output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"Invalid value for 'OUTPUT_FORMAT' in section 'COMMANDS.PROCESS': {output_format}")

        logger.info(f'Processing {args.source.name} as {media_type} with base URI {base_uri}')
        response = TypedText(media_type, args.source.read())
        quads = asyncio.run(processor.process(base_uri, response))
        dataset = QuadDataset()
        dataset.namespace_manager = get_manager(dataset)
        dataset.import_quads(quads)

        args.output_file.write(dataset.serialize(format=output_format))
        args.output_file.flush()
        self.result = dataset.quad_count()
        logger.info(f'Wrote {self.result} quad(s) as {output_format}')
