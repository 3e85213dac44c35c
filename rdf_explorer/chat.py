"""Chat assistant backed by the Gemini generateContent REST API."""

import logging
from typing import Any, Dict, List, Optional

import requests

from rdf_explorer.config import CONFIG, get_api_key
from rdf_explorer.errors import ServiceError


def dataset_prompt(turtle: str, question: str) -> str:
    return f"Graph Dataset:\n```turtle\n{turtle}\n```\n\nQuestion: {question}"


class GeminiChatService:
    """
    One multi-turn chat session. `send_chat_query` appends the prompt and the reply
    to the session history; `reset_session` starts over.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 system_instruction: Optional[str] = None, timeout: Optional[float] = None,
                 http: Optional[requests.Session] = None):
        chat_config = CONFIG["CHAT"]
        self.api_key = api_key
        self.model = model or chat_config["model"]
        self.system_instruction = system_instruction or chat_config["system_instruction"]
        self.timeout = timeout or chat_config["timeout"]
        self.http = http or requests.Session()
        self.history: List[Dict[str, Any]] = []

    def _resolve_key(self) -> str:
        key = self.api_key or get_api_key()
        if not key:
            raise ServiceError("Gemini API key not configured. Please set GEMINI_API_KEY environment variable.")
        return key

    def reset_session(self) -> None:
        self.history = []

    def send_chat_query(self, prompt_text: str) -> str:
        key = self._resolve_key()
        contents = self.history + [{"role": "user", "parts": [{"text": prompt_text}]}]
        payload = {
            "systemInstruction": {"parts": [{"text": self.system_instruction}]},
            "contents": contents,
        }
        url = CONFIG["CHAT"]["endpoint"].format(model=self.model)
        try:
            response = self.http.post(url, params={"key": key}, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logging.error(f"Chat request failed: {e}")
            raise ServiceError(f"Chat request failed: {e}") from e
        if not response.ok:
            raise ServiceError(self._error_message(response))
        try:
            data = response.json()
        except ValueError as e:
            raise ServiceError(f"Chat service returned invalid JSON: {e}") from e
        text = self._extract_text(data) or "No response."
        self.history = contents + [{"role": "model", "parts": [{"text": text}]}]
        logging.info(f"Chat reply received ({len(text)} characters, {len(self.history)} turn(s) in session).")
        return text

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)

    @staticmethod
    def _error_message(response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        message = (body.get("error") or {}).get("message") if isinstance(body, dict) else None
        return message or f"Chat service returned HTTP {response.status_code}: {response.text[:500]}"
