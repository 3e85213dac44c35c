import unittest

from rdf_explorer.errors import ServiceError
from rdf_explorer.state import ExplorerState, RequestSequencer
from tests.fixtures import ALICE, EX


class FakeChatService:
    def __init__(self, replies=None, error=None):
        self.prompts = []
        self.replies = list(replies or [])
        self.error = error
        self.resets = 0

    def send_chat_query(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else "ok"

    def reset_session(self):
        self.resets += 1


class RequestSequencerTests(unittest.TestCase):
    def test_only_latest_is_current(self):
        seq = RequestSequencer()
        first, second = seq.issue(), seq.issue()
        self.assertFalse(seq.is_current(first))
        self.assertTrue(seq.is_current(second))
        seq.invalidate()
        self.assertFalse(seq.is_current(second))


class ParseStateTests(unittest.TestCase):
    def setUp(self):
        self.state = ExplorerState(input_text=ALICE, chat_service=FakeChatService())

    def test_parse_installs_graph(self):
        self.assertTrue(self.state.parse())
        self.assertEqual(len(self.state.graph_data.nodes), 3)
        self.assertEqual(self.state.graph_version, 1)
        self.assertFalse(self.state.loading)
        self.assertIsNone(self.state.error)

    def test_failed_parse_keeps_previous_graph(self):
        self.state.parse()
        previous = self.state.graph_data
        self.assertFalse(self.state.parse("ex:Alice ex:knows <http://example.org/Bob"))
        self.assertIsNotNone(self.state.error)
        self.assertIs(self.state.graph_data, previous)
        self.assertEqual(self.state.graph_version, 1)
        self.assertFalse(self.state.loading)

    def test_empty_input_reports_no_entities(self):
        self.assertFalse(self.state.parse("   "))
        self.assertEqual(self.state.error, "No valid entities found in the dataset.")
        self.assertIsNone(self.state.graph_data)

    def test_new_parse_clears_error_and_selection(self):
        self.state.parse()
        self.state.select_node_id(EX + "Alice")
        self.state.parse("not turtle at all")
        self.assertIsNone(self.state.selected_node)
        self.state.parse()
        self.assertIsNone(self.state.error)

    def test_superseded_parse_discarded(self):
        stale = self.state.begin_parse()
        latest = self.state.begin_parse()
        self.assertFalse(self.state.finish_parse(stale, ALICE))
        self.assertIsNone(self.state.graph_data)
        self.assertTrue(self.state.loading)
        self.assertTrue(self.state.finish_parse(latest, ALICE))
        self.assertIsNotNone(self.state.graph_data)

    def test_superseded_failure_discarded(self):
        stale = self.state.begin_parse()
        self.state.begin_parse()
        self.state.finish_parse(stale, "@prefix broken")
        self.assertIsNone(self.state.error)


class SelectionTests(unittest.TestCase):
    def setUp(self):
        self.state = ExplorerState(input_text=ALICE, chat_service=FakeChatService())
        self.state.parse()

    def test_select_by_id(self):
        node = self.state.select_node_id(EX + "Bob")
        self.assertEqual(node.label, "Bob")
        self.assertEqual(self.state.selected_id, EX + "Bob")

    def test_unknown_id_keeps_selection(self):
        self.state.select_node_id(EX + "Alice")
        self.assertIsNone(self.state.select_node_id(EX + "Nobody"))
        self.assertEqual(self.state.selected_id, EX + "Alice")

    def test_clear_selection(self):
        self.state.select_node(self.state.graph_data.nodes[0])
        self.state.clear_selection()
        self.assertIsNone(self.state.selected_id)


class ChatStateTests(unittest.TestCase):
    def setUp(self):
        self.service = FakeChatService(replies=["Alice knows Bob.", "Bob works at CompanyX."])
        self.state = ExplorerState(input_text=ALICE, chat_service=self.service)

    def test_first_prompt_embeds_dataset(self):
        self.assertTrue(self.state.send_chat("Who does Alice know?"))
        self.assertTrue(self.service.prompts[0].startswith("Graph Dataset:\n```turtle\n"))
        self.assertIn("ex:Alice a foaf:Person", self.service.prompts[0])
        self.assertTrue(self.service.prompts[0].endswith("Question: Who does Alice know?"))
        self.state.send_chat("And Bob?")
        self.assertEqual(self.service.prompts[1], "And Bob?")
        self.assertEqual([(m.role, m.text) for m in self.state.chat_messages], [
            ("user", "Who does Alice know?"), ("model", "Alice knows Bob."),
            ("user", "And Bob?"), ("model", "Bob works at CompanyX."),
        ])
        self.assertEqual(self.state.chat_input, "")

    def test_blank_message_ignored(self):
        self.assertFalse(self.state.send_chat("   "))
        self.assertEqual(self.service.prompts, [])

    def test_one_request_at_a_time(self):
        self.assertIsNotNone(self.state.begin_chat("first"))
        self.assertIsNone(self.state.begin_chat("second"))

    def test_service_error_reported(self):
        self.service.error = ServiceError("quota exceeded")
        self.assertFalse(self.state.send_chat("hello"))
        self.assertEqual(self.state.chat_error, "AI Error: quota exceeded")
        self.assertFalse(self.state.chat_loading)
        self.assertEqual([m.role for m in self.state.chat_messages], ["user"])

    def test_reply_after_clear_discarded(self):
        generation, _ = self.state.begin_chat("slow question")
        self.state.clear_chat()
        self.assertFalse(self.state.finish_chat(generation, response="late answer"))
        self.assertEqual(self.state.chat_messages, [])
        self.assertGreaterEqual(self.service.resets, 1)

    def test_input_change_clears_chat(self):
        self.state.send_chat("hello")
        self.state.set_input(ALICE)
        self.assertEqual(len(self.state.chat_messages), 2)
        self.state.set_input(ALICE + "\nex:Carol ex:knows ex:Alice .")
        self.assertEqual(self.state.chat_messages, [])
        self.assertEqual(self.state.chat_input, "Summarize the relationships in this dataset.")

    def test_reset_all(self):
        self.state.parse()
        self.state.select_node_id(EX + "Alice")
        self.state.send_chat("hello")
        version = self.state.graph_version
        self.state.reset_all()
        self.assertEqual(self.state.input_text, "")
        self.assertIsNone(self.state.graph_data)
        self.assertIsNone(self.state.selected_node)
        self.assertEqual(self.state.chat_messages, [])
        self.assertGreater(self.state.graph_version, version)


if __name__ == "__main__":
    unittest.main()
