import sys
from argparse import Namespace

from hydraclient.cli.commands import BaseCommand


def configure_cli(subparsers):
    parser = subparsers.add_parser(
        name='formats',
        description='List the media types that have a registered parser.'
    )
    parser.set_defaults(cmd_name='formats')


class Command(BaseCommand):
    def execute(self, args: Namespace, out=None):
        if out is None:
            out = sys.stdout
        self.result = sorted(self.context.registry.keys())
        for media_type in self.result:
            parser = self.context.registry.find(media_type)
            print(f'{media_type}\t{parser!r}', file=out)
