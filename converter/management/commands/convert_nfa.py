import json

from django.core.management.base import BaseCommand, CommandError

from converter.conf import get_option
from converter.dfa_table import render_text_table
from converter.nfa_config import NFAConfigError, check_state_labels, load_nfa_config
from converter.subset_construction import construct_from_config


class Command(BaseCommand):
    help = 'Converts a saved NFA configuration file into its DFA table.'

    def add_arguments(self, parser):
        parser.add_argument('path', help='NFA configuration file (.json)')
        parser.add_argument('-o', '--output', help='Write the DFA table as JSON to this file')
        parser.add_argument('--delimiter', default=None,
                            help='Separator between member labels of compound states (default: setting)')

    def handle(self, *args, **options):
        delimiter = options['delimiter']
        if delimiter is None:
            delimiter = get_option('STATE_DELIMITER')

        try:
            with open(options['path'], 'rb') as f:
                config = load_nfa_config(f.read())
        except OSError as e:
            raise CommandError(f"Cannot read {options['path']}: {e}")
        except NFAConfigError as e:
            raise CommandError(str(e))

        labels = check_state_labels(config, delimiter)
        if not labels['valid']:
            raise CommandError(labels['error'])

        dfa_table = construct_from_config(config, delimiter)
        self.stdout.write(render_text_table(dfa_table, config['alphabet']))

        if options['output']:
            with open(options['output'], 'w', encoding='utf-8') as f:
                json.dump(dfa_table, f, indent=2, ensure_ascii=False)
            self.stdout.write(self.style.SUCCESS(f"DFA table written to {options['output']}"))
