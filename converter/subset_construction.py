import logging
from collections import deque
from typing import Dict, FrozenSet, Iterable, List, Set

from .nfa_config import TransitionMap, build_transition_map

logger = logging.getLogger(__name__)


def split_state_key(key: str, delimiter: str = '') -> List[str]:
    """
    Splits a compound state key into its member NFA state identifiers.

    With no delimiter every character of the key is a member state, so state
    labels are limited to single characters in that mode.

    Args:
        key (str): A compound state key
        delimiter (str): Separator between member labels, '' for character mode

    Returns:
        List[str]: Member state identifiers in key order
    """
    if not delimiter:
        return list(key)
    return [member for member in key.split(delimiter) if member]


def canonicalize_state_set(members: Iterable[str], delimiter: str = '') -> str:
    """
    Converts a collection of states into a canonical compound state key.

    Each member may itself be a compound key; the result names the union of
    all their member states, sorted and without duplicates, so equal sets
    always produce the same key regardless of discovery order.

    Args:
        members (Iterable[str]): State identifiers or compound keys
        delimiter (str): Separator between member labels, '' for character mode

    Returns:
        str: The canonical compound state key
    """
    member_states: Set[str] = set()
    for member in members:
        member_states.update(split_state_key(member, delimiter))
    return delimiter.join(sorted(member_states))


def canonicalize_state_key(key: str, delimiter: str = '') -> str:
    """Canonical form of a single compound state key, e.g. 'BAB' -> 'AB'."""
    return canonicalize_state_set([key], delimiter)


def next_states_for_single(transitions: TransitionMap, state: str, symbol: str) -> FrozenSet[str]:
    """Destinations recorded for (state, symbol), empty when there is no entry."""
    return transitions.get((state, symbol), frozenset())


def next_states(transitions: TransitionMap, states: Iterable[str], symbol: str) -> List[str]:
    """
    Computes all NFA states reachable from any of the given states on a symbol.

    Args:
        transitions (TransitionMap): Mapping of (state, symbol) to destinations
        states (Iterable[str]): Member states of a compound state
        symbol (str): The input symbol

    Returns:
        List[str]: Sorted union of the destinations, without duplicates
    """
    result = set()
    for state in states:
        result.update(next_states_for_single(transitions, state, symbol))
    return sorted(result)


def construct(states: Iterable[str], alphabet: List[str], transitions: TransitionMap,
              initial_state: str, accepting_states: Iterable[str], delimiter: str = '') -> List[Dict]:
    """
    Converts an NFA into the equivalent DFA table using subset construction.

    Compound states are explored breadth first from the canonicalized initial
    state, so the table lists every reachable compound state exactly once in
    the order it was first visited.

    Args:
        states (Iterable[str]): Declared NFA states (not needed by the algorithm)
        alphabet (List[str]): Input symbols; their order fixes the column order
        transitions (TransitionMap): Mapping of (state, symbol) to destinations
        initial_state (str): Starting state, may itself name a compound state
        accepting_states (Iterable[str]): Accepting NFA states
        delimiter (str): Separator between member labels, '' for character mode

    Returns:
        List[Dict]: DFA states, each with the keys:
            - name: The compound state key
            - isAccepting: Whether any member state is accepting
            - transitions: Symbol -> destination key, only for non-empty destinations
    """
    nfa_accepting = frozenset(accepting_states)
    start_key = canonicalize_state_key(initial_state, delimiter)

    queue = deque([start_key])
    queued: Set[str] = {start_key}
    processed: Set[str] = set()
    dfa_table: List[Dict] = []

    while queue:
        current_key = queue.popleft()
        queued.discard(current_key)

        # Skip if already processed
        if current_key in processed:
            continue
        processed.add(current_key)

        current_states = split_state_key(current_key, delimiter)
        dfa_state = {
            'name': current_key,
            'isAccepting': any(state in nfa_accepting for state in current_states),
            'transitions': {}
        }

        for symbol in alphabet:
            targets = next_states(transitions, current_states, symbol)

            # No destination means no entry, not an empty state
            if not targets:
                continue

            target_key = canonicalize_state_set(targets, delimiter)
            dfa_state['transitions'][symbol] = target_key

            if target_key not in processed and target_key not in queued:
                queue.append(target_key)
                queued.add(target_key)

        dfa_table.append(dfa_state)

    logger.debug("Subset construction from %r produced %d DFA states", start_key, len(dfa_table))
    return dfa_table


def construct_from_config(config: Dict, delimiter: str = '') -> List[Dict]:
    """
    Runs subset construction on a parsed NFA configuration.

    Args:
        config (Dict): A configuration as returned by nfa_config.parse_nfa_config
        delimiter (str): Separator between member labels, '' for character mode

    Returns:
        List[Dict]: The DFA table
    """
    return construct(
        config['states'],
        config['alphabet'],
        build_transition_map(config['transitions']),
        config['initialState'],
        config['acceptingStates'],
        delimiter
    )
