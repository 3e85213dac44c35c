"""Explorer session state: the active graph, selection, errors and chat transcript."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from rdf_explorer.chat import GeminiChatService, dataset_prompt
from rdf_explorer.config import CONFIG
from rdf_explorer.errors import EmptyGraphError, ParseError, ServiceError
from rdf_explorer.graph_builder import parse_graph
from rdf_explorer.models import GraphData, Node


class RequestSequencer:
    """Generation stamps: only the most recently issued request may apply its result."""

    def __init__(self):
        self.latest = 0

    def issue(self) -> int:
        self.latest += 1
        return self.latest

    def is_current(self, generation: int) -> bool:
        return generation == self.latest

    def invalidate(self) -> None:
        self.latest += 1


@dataclass
class ChatMessage:
    role: str
    text: str


class ExplorerState:
    def __init__(self, input_text: Optional[str] = None, chat_service: Optional[GeminiChatService] = None):
        self.input_text = CONFIG["DEFAULT_TURTLE"] if input_text is None else input_text
        self.graph_data: Optional[GraphData] = None
        self.graph_version = 0
        self.selected_node: Optional[Node] = None
        self.error: Optional[str] = None
        self.loading = False
        self.chat_service = chat_service or GeminiChatService()
        self.chat_messages: List[ChatMessage] = []
        self.chat_input = CONFIG["CHAT"]["default_prompt"]
        self.chat_error: Optional[str] = None
        self.chat_loading = False
        self._parses = RequestSequencer()
        self._chats = RequestSequencer()

    def set_input(self, text: str) -> None:
        if text == self.input_text:
            return
        self.input_text = text
        self.clear_chat()

    # ------------------------------
    # Parsing
    # ------------------------------
    def begin_parse(self) -> int:
        self.loading = True
        self.error = None
        self.selected_node = None
        return self._parses.issue()

    def finish_parse(self, generation: int, text: str) -> bool:
        """Build the graph for `text`; the result is installed only if `generation` is still the latest."""
        try:
            graph = parse_graph(text)
        except (ParseError, EmptyGraphError) as e:
            if not self._parses.is_current(generation):
                logging.info(f"Discarding failure of superseded parse #{generation}.")
                return False
            logging.error(f"Parse #{generation} failed: {e}")
            self.error = str(e)
            self.loading = False
            return False
        if not self._parses.is_current(generation):
            logging.info(f"Discarding result of superseded parse #{generation}.")
            return False
        self.graph_data = graph
        self.graph_version += 1
        self.selected_node = None
        self.loading = False
        return True

    def parse(self, text: Optional[str] = None) -> bool:
        source = self.input_text if text is None else text
        return self.finish_parse(self.begin_parse(), source)

    # ------------------------------
    # Selection
    # ------------------------------
    def select_node(self, node: Optional[Node]) -> None:
        self.selected_node = node

    def select_node_id(self, node_id: Optional[str]) -> Optional[Node]:
        node = self.graph_data.node(node_id) if self.graph_data is not None else None
        if node is not None:
            self.selected_node = node
        return node

    def clear_selection(self) -> None:
        self.selected_node = None

    @property
    def selected_id(self) -> Optional[str]:
        return self.selected_node.id if self.selected_node is not None else None

    # ------------------------------
    # Chat
    # ------------------------------
    def begin_chat(self, message: str) -> Optional[Tuple[int, str]]:
        if not message.strip() or self.chat_loading:
            return None
        answered = any(m.role == "model" for m in self.chat_messages)
        prompt = message if answered else dataset_prompt(self.input_text, message)
        self.chat_messages.append(ChatMessage(role="user", text=message))
        self.chat_input = ""
        self.chat_error = None
        self.chat_loading = True
        return self._chats.issue(), prompt

    def finish_chat(self, generation: int, response: Optional[str] = None,
                    error: Optional[Exception] = None) -> bool:
        if not self._chats.is_current(generation):
            logging.info(f"Discarding reply to superseded chat request #{generation}.")
            return False
        self.chat_loading = False
        if error is not None:
            self.chat_error = f"AI Error: {error}"
            return False
        self.chat_messages.append(ChatMessage(role="model", text=response or "No response."))
        return True

    def send_chat(self, message: str) -> bool:
        ticket = self.begin_chat(message)
        if ticket is None:
            return False
        generation, prompt = ticket
        try:
            reply = self.chat_service.send_chat_query(prompt)
        except ServiceError as e:
            logging.error(f"Chat request #{generation} failed: {e}")
            return self.finish_chat(generation, error=e)
        return self.finish_chat(generation, response=reply)

    def clear_chat(self) -> None:
        self.chat_messages = []
        self.chat_service.reset_session()
        self.chat_input = CONFIG["CHAT"]["default_prompt"]
        self.chat_error = None
        self.chat_loading = False
        self._chats.invalidate()

    def reset_all(self) -> None:
        self.input_text = ""
        self.graph_data = None
        self.graph_version += 1
        self.selected_node = None
        self.error = None
        self.loading = False
        self._parses.invalidate()
        self.clear_chat()
