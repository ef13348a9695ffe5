import json
from collections import defaultdict
from typing import Dict, FrozenSet, List, Set, Tuple, Union

TransitionMap = Dict[Tuple[str, str], FrozenSet[str]]

NFA_CONFIG_FIELDS = ('states', 'alphabet', 'transitions', 'initialState', 'acceptingStates')

LOAD_ERROR_MESSAGE = 'Error loading NFA configuration file'


class NFAConfigError(ValueError):
    """Raised when an NFA configuration cannot be loaded or is malformed."""


def _is_string_list(value) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def validate_nfa_config(config: Dict) -> Dict:
    """
    Validates that an NFA configuration has the exchange format structure.

    Args:
        config: The decoded configuration object, expected to hold:
            - states: List of state labels
            - alphabet: List of symbols
            - transitions: List of {state, symbol, nextStates} objects
            - initialState: The initial state string
            - acceptingStates: List of accepting state labels

    Returns:
        Dict: Validation result with 'valid' boolean and optional 'error' message
    """
    if not isinstance(config, dict):
        return {'valid': False, 'error': 'NFA configuration must be an object'}

    # Check all required keys exist
    for key in NFA_CONFIG_FIELDS:
        if key not in config:
            return {'valid': False, 'error': f'Missing required key: {key}'}

    if not _is_string_list(config['states']):
        return {'valid': False, 'error': 'states must be a list of strings'}

    if not _is_string_list(config['alphabet']):
        return {'valid': False, 'error': 'alphabet must be a list of strings'}

    if not isinstance(config['initialState'], str):
        return {'valid': False, 'error': 'initialState must be a string'}

    if not _is_string_list(config['acceptingStates']):
        return {'valid': False, 'error': 'acceptingStates must be a list of strings'}

    if not isinstance(config['transitions'], list):
        return {'valid': False, 'error': 'transitions must be a list'}

    for index, transition in enumerate(config['transitions']):
        if not isinstance(transition, dict):
            return {'valid': False, 'error': f'Transition {index} must be an object'}
        if not isinstance(transition.get('state'), str):
            return {'valid': False, 'error': f'Transition {index} is missing a state'}
        if not isinstance(transition.get('symbol'), str):
            return {'valid': False, 'error': f'Transition {index} is missing a symbol'}
        if not _is_string_list(transition.get('nextStates')):
            return {'valid': False, 'error': f'Transition {index} nextStates must be a list of strings'}

    return {'valid': True}


def check_state_labels(config: Dict, delimiter: str = '') -> Dict:
    """
    Checks that state labels can be told apart inside compound state keys.

    Without a delimiter compound keys are split into characters, so any
    multi-character label would be broken into unrelated states.

    Args:
        config: A structurally valid NFA configuration
        delimiter: Separator between member labels, '' for character mode

    Returns:
        Dict: Validation result with 'valid' boolean and optional 'error' message
    """
    labels: List[str] = list(config['states']) + list(config['acceptingStates'])
    for transition in config['transitions']:
        labels.append(transition['state'])
        labels.extend(transition['nextStates'])

    # Empty labels vanish when compound keys are split
    if '' in labels:
        return {'valid': False, 'error': 'State labels must not be empty'}

    if delimiter:
        for label in labels:
            if delimiter in label:
                return {'valid': False, 'error': f'State {label!r} contains the delimiter {delimiter!r}'}
        return {'valid': True}

    for label in labels:
        if len(label) != 1:
            return {
                'valid': False,
                'error': f'State {label!r} is not a single character; '
                         'configure a state delimiter to use longer labels'
            }

    return {'valid': True}


def build_transition_map(transitions: List[Dict]) -> TransitionMap:
    """
    Builds the (state, symbol) -> destinations mapping from transition objects.

    Repeated entries for the same pair are merged, and entries without
    destinations are dropped.
    """
    merged: Dict[Tuple[str, str], Set[str]] = defaultdict(set)
    for transition in transitions:
        merged[(transition['state'], transition['symbol'])].update(transition['nextStates'])

    return {pair: frozenset(targets) for pair, targets in merged.items() if targets}


def transition_list(transition_map: TransitionMap) -> List[Dict]:
    """Inverse of build_transition_map, ordered by state then symbol."""
    return [
        {'state': state, 'symbol': symbol, 'nextStates': sorted(targets)}
        for (state, symbol), targets in sorted(transition_map.items())
        if targets
    ]


def empty_nfa_config() -> Dict:
    return {
        'states': [],
        'alphabet': [],
        'transitions': [],
        'initialState': '',
        'acceptingStates': []
    }


def parse_nfa_config(data) -> Dict:
    """
    Validates a decoded configuration and returns a normalized copy.

    The copy holds exactly the exchange format fields, with independent
    lists so later edits never reach the caller's object.

    Raises:
        NFAConfigError: If the configuration is malformed
    """
    validation = validate_nfa_config(data)
    if not validation['valid']:
        raise NFAConfigError(f"{LOAD_ERROR_MESSAGE}: {validation['error']}")

    return {
        'states': data['states'][:],
        'alphabet': data['alphabet'][:],
        'transitions': [
            {
                'state': transition['state'],
                'symbol': transition['symbol'],
                'nextStates': transition['nextStates'][:]
            }
            for transition in data['transitions']
        ],
        'initialState': data['initialState'],
        'acceptingStates': data['acceptingStates'][:]
    }


def load_nfa_config(text: Union[str, bytes]) -> Dict:
    """
    Loads an NFA configuration from JSON text.

    Args:
        text: JSON document as str or UTF-8 bytes

    Returns:
        Dict: The normalized configuration

    Raises:
        NFAConfigError: If the text is not JSON or not a valid configuration
    """
    try:
        if isinstance(text, bytes):
            text = text.decode('utf-8')
        data = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise NFAConfigError(f'{LOAD_ERROR_MESSAGE}: invalid JSON ({e})') from e

    return parse_nfa_config(data)


def dump_nfa_config(config: Dict) -> str:
    """Serializes a configuration with the exchange format field order."""
    return json.dumps({field: config[field] for field in NFA_CONFIG_FIELDS}, indent=2, ensure_ascii=False)
