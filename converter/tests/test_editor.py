import json

from django.test import TestCase
from converter.editor import NFAEditor, parse_list_field
from converter.nfa_config import NFAConfigError


class TestParseListField(TestCase):

    def test_split_and_trim(self):
        self.assertEqual(parse_list_field('A, B ,C'), ['A', 'B', 'C'])

    def test_blank_items_dropped(self):
        self.assertEqual(parse_list_field(''), [])
        self.assertEqual(parse_list_field(' , A,,'), ['A'])


class TestNFAEditor(TestCase):

    def setUp(self):
        self.editor = NFAEditor()
        self.editor.set_states('A,B,C')
        self.editor.set_alphabet('0,1')
        self.editor.set_initial_state(' A ')
        self.editor.set_accepting_states('C')
        self.editor.set_transition('A', '0', 'A, B')
        self.editor.set_transition('A', '1', 'A')
        self.editor.set_transition('B', '1', 'C')

    def test_fields_are_parsed(self):
        self.assertEqual(self.editor.states, ['A', 'B', 'C'])
        self.assertEqual(self.editor.alphabet, ['0', '1'])
        self.assertEqual(self.editor.initial_state, 'A')
        self.assertEqual(self.editor.accepting_states, ['C'])
        self.assertEqual(self.editor.get_transition('A', '0'), ['A', 'B'])
        self.assertEqual(self.editor.get_transition('C', '0'), [])

    def test_set_transition_replaces_entry(self):
        self.editor.set_transition('A', '0', 'C')
        self.assertEqual(self.editor.get_transition('A', '0'), ['C'])

    def test_blank_transition_removes_entry(self):
        self.editor.set_transition('A', '0', ' , ')
        self.assertNotIn(('A', '0'), self.editor.transitions)

    def test_can_convert_needs_a_transition(self):
        self.assertTrue(self.editor.can_convert)
        self.assertFalse(NFAEditor().can_convert)

    def test_convert(self):
        dfa_table = self.editor.convert()

        self.assertEqual([s['name'] for s in dfa_table], ['A', 'AB', 'AC'])
        self.assertTrue(dfa_table[2]['isAccepting'])
        self.assertIs(self.editor.dfa_table, dfa_table)

    def test_convert_replaces_previous_table(self):
        self.editor.convert()
        self.editor.set_transition('B', '1', '')
        dfa_table = self.editor.convert()

        self.assertEqual([s['name'] for s in dfa_table], ['A', 'AB'])
        self.assertEqual(self.editor.dfa_table, dfa_table)

    def test_export_json(self):
        exported = json.loads(self.editor.export_json())

        self.assertEqual(exported, {
            'states': ['A', 'B', 'C'],
            'alphabet': ['0', '1'],
            'transitions': [
                {'state': 'A', 'symbol': '0', 'nextStates': ['A', 'B']},
                {'state': 'A', 'symbol': '1', 'nextStates': ['A']},
                {'state': 'B', 'symbol': '1', 'nextStates': ['C']}
            ],
            'initialState': 'A',
            'acceptingStates': ['C']
        })

    def test_load_json(self):
        other = NFAEditor()
        other.convert()
        other.load_json(self.editor.export_json())

        self.assertEqual(other.to_config(), self.editor.to_config())
        self.assertEqual(other.dfa_table, [])
        self.assertEqual(other.convert(), self.editor.convert())

    def test_failed_load_keeps_current_state(self):
        self.editor.convert()
        before = self.editor.to_config()
        table_before = self.editor.dfa_table

        for text in ['not json', '{"states": ["A"]}', '[]']:
            with self.assertRaises(NFAConfigError):
                self.editor.load_json(text)

        self.assertEqual(self.editor.to_config(), before)
        self.assertIs(self.editor.dfa_table, table_before)

    def test_delimiter_editor(self):
        editor = NFAEditor(delimiter=',')
        editor.set_alphabet('a')
        editor.set_initial_state('q0')
        editor.set_accepting_states('q1')
        editor.set_transition('q0', 'a', 'q0, q1')

        dfa_table = editor.convert()

        self.assertEqual(dfa_table, [
            {'name': 'q0', 'isAccepting': False, 'transitions': {'a': 'q0,q1'}},
            {'name': 'q0,q1', 'isAccepting': True, 'transitions': {'a': 'q0,q1'}},
        ])

    def test_convert_rejects_long_labels_in_character_mode(self):
        """Multi-character labels are reported instead of being split into characters"""
        editor = NFAEditor()
        editor.set_states('S1,S2')
        editor.set_alphabet('a')
        editor.set_initial_state('S1')
        editor.set_accepting_states('S2')
        editor.set_transition('S1', 'a', 'S2')

        with self.assertRaises(NFAConfigError) as ctx:
            editor.convert()
        self.assertIn("'S1'", str(ctx.exception))
        self.assertEqual(editor.dfa_table, [])

    def test_load_rejects_long_labels_in_character_mode(self):
        """A file with multi-character labels leaves the editor unchanged"""
        before = self.editor.to_config()
        text = json.dumps({
            'states': ['S1', 'S2'],
            'alphabet': ['a'],
            'transitions': [{'state': 'S1', 'symbol': 'a', 'nextStates': ['S2']}],
            'initialState': 'S1',
            'acceptingStates': ['S2']
        })

        with self.assertRaises(NFAConfigError):
            self.editor.load_json(text)
        self.assertEqual(self.editor.to_config(), before)

        # Same file is accepted once labels are delimited
        editor = NFAEditor(delimiter=',')
        editor.load_json(text)
        self.assertEqual([s['name'] for s in editor.convert()], ['S1', 'S2'])
