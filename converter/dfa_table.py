from typing import Dict, List

NO_TRANSITION = '∅'
ACCEPTING_MARK = '✓'


def table_header(alphabet: List[str]) -> List[str]:
    return ['State'] + list(alphabet) + ['Accepting']


def table_rows(dfa_table: List[Dict], alphabet: List[str]) -> List[List[str]]:
    """
    Lays out a DFA table with one column per alphabet symbol.

    Args:
        dfa_table (List[Dict]): DFA states as produced by subset construction
        alphabet (List[str]): Symbols in column order

    Returns:
        List[List[str]]: One row per DFA state: name, one target per symbol
        (NO_TRANSITION when undefined) and the accepting mark
    """
    rows = []
    for dfa_state in dfa_table:
        row = [dfa_state['name']]
        for symbol in alphabet:
            row.append(dfa_state['transitions'].get(symbol, NO_TRANSITION))
        row.append(ACCEPTING_MARK if dfa_state['isAccepting'] else '')
        rows.append(row)
    return rows


def render_text_table(dfa_table: List[Dict], alphabet: List[str]) -> str:
    """Renders the DFA table as fixed-width text for terminal output."""
    lines = [table_header(alphabet)] + table_rows(dfa_table, alphabet)
    widths = [max(len(line[column]) for line in lines) for column in range(len(lines[0]))]

    rendered = []
    for index, line in enumerate(lines):
        rendered.append(' | '.join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip())
        if index == 0:
            rendered.append('-+-'.join('-' * width for width in widths))
    return '\n'.join(rendered)


def dfa_statistics(dfa_table: List[Dict]) -> Dict:
    return {
        'states_count': len(dfa_table),
        'transitions_count': sum(len(dfa_state['transitions']) for dfa_state in dfa_table),
        'accepting_states_count': sum(1 for dfa_state in dfa_table if dfa_state['isAccepting'])
    }
