import logging
from typing import Dict, List

from .nfa_config import (
    NFAConfigError,
    TransitionMap,
    build_transition_map,
    check_state_labels,
    dump_nfa_config,
    load_nfa_config,
    transition_list,
)
from .subset_construction import construct

logger = logging.getLogger(__name__)


def parse_list_field(text: str) -> List[str]:
    """Splits a comma separated form field into trimmed, non-blank items."""
    return [item.strip() for item in text.split(',') if item.strip()]


class NFAEditor:
    """
    Holds the NFA being edited and the last DFA table built from it.

    Field setters take raw form text. Construction is never triggered by an
    edit; callers run convert() when they want a fresh table.
    """

    def __init__(self, delimiter: str = ''):
        self.delimiter = delimiter
        self.states: List[str] = []
        self.alphabet: List[str] = []
        self.initial_state = ''
        self.accepting_states: List[str] = []
        self.transitions: TransitionMap = {}
        self.dfa_table: List[Dict] = []

    def set_states(self, text: str):
        self.states = parse_list_field(text)

    def set_alphabet(self, text: str):
        self.alphabet = parse_list_field(text)

    def set_initial_state(self, text: str):
        self.initial_state = text.strip()

    def set_accepting_states(self, text: str):
        self.accepting_states = parse_list_field(text)

    def set_transition(self, state: str, symbol: str, text: str):
        """Replaces the destinations of (state, symbol); blank text removes the entry."""
        targets = parse_list_field(text)
        if targets:
            self.transitions[(state, symbol)] = frozenset(targets)
        else:
            self.transitions.pop((state, symbol), None)

    def get_transition(self, state: str, symbol: str) -> List[str]:
        return sorted(self.transitions.get((state, symbol), frozenset()))

    @property
    def can_convert(self) -> bool:
        return bool(self.transitions)

    def check_labels(self, config: Dict):
        labels = check_state_labels(config, self.delimiter)
        if not labels['valid']:
            raise NFAConfigError(labels['error'])

    def convert(self) -> List[Dict]:
        """
        Rebuilds the DFA table from the current input, replacing the previous one.

        Raises:
            NFAConfigError: If a state label cannot be kept apart in compound keys
        """
        self.check_labels(self.to_config())
        self.dfa_table = construct(
            self.states,
            self.alphabet,
            self.transitions,
            self.initial_state,
            self.accepting_states,
            self.delimiter
        )
        return self.dfa_table

    def to_config(self) -> Dict:
        return {
            'states': self.states[:],
            'alphabet': self.alphabet[:],
            'transitions': transition_list(self.transitions),
            'initialState': self.initial_state,
            'acceptingStates': self.accepting_states[:]
        }

    def export_json(self) -> str:
        return dump_nfa_config(self.to_config())

    def load_config(self, config: Dict):
        self.states = config['states'][:]
        self.alphabet = config['alphabet'][:]
        self.transitions = build_transition_map(config['transitions'])
        self.initial_state = config['initialState']
        self.accepting_states = config['acceptingStates'][:]
        self.dfa_table = []

    def load_json(self, text) -> Dict:
        """
        Replaces the editor contents with a saved configuration.

        The text is fully validated before anything is assigned, so a
        malformed file leaves the editor as it was.

        Raises:
            NFAConfigError: If the text is not a valid configuration
        """
        config = load_nfa_config(text)
        self.check_labels(config)
        self.load_config(config)
        logger.info("Loaded NFA with %d states and %d transitions", len(self.states), len(self.transitions))
        return config
