# Role: Minimal wrapper around Gemini API. Centralizes model name, temperature, timeout and error handling,
# so the rest of the code calls a single method: complete(messages).

import os
from typing import Dict, List, Optional

from google import genai

import backend.config as config
from backend.models.message import Turn


class CompletionServiceError(RuntimeError):
    """Completion call failed (network, timeout, non-2xx, empty text)."""


class GeminiClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_output_tokens: int = 400,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        # Key lines:
        # - Reads secrets from env (no secrets in code).
        # - Model, temperature and timeout are configurable for experiments.
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise CompletionServiceError("Missing GEMINI_API_KEY in environment or .env")

        self.model_name = model or os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout_seconds = timeout_seconds or config.COMPLETION_TIMEOUT_SECONDS

        # Key line: the HTTP timeout (milliseconds) bounds every completion call.
        self.client = genai.Client(
            api_key=self.api_key,
            http_options={"timeout": int(self.timeout_seconds * 1000)},
        )

    def _to_contents(self, messages: List[Turn]) -> tuple[Optional[str], List[Dict]]:
        # Role: split role-tagged turns into Gemini's system_instruction + user/model contents.
        system_parts: List[str] = []
        contents: List[Dict] = []
        for m in messages:
            if m.role == "system":
                system_parts.append(m.content)
                continue
            role = "model" if m.role == "assistant" else "user"
            contents.append({"role": role, "parts": [{"text": m.content}]})
        system_instruction = "\n\n".join(system_parts) if system_parts else None
        return system_instruction, contents

    def complete(self, messages: List[Turn]) -> str:
        # 1) Validate messages (need at least one non-system turn)
        # 2) Call Gemini (single chat completion)
        # 3) Validate non-empty response
        system_instruction, contents = self._to_contents(messages)
        if not contents:
            raise ValueError("At least one user/assistant message is required.")

        generation_config = {
            "temperature": self.temperature,
            "max_output_tokens": self.max_output_tokens,
        }
        if system_instruction:
            generation_config["system_instruction"] = system_instruction

        if config.DEBUG:
            print(f"[GEMINI_CLIENT] sending {len(contents)} message(s) to {self.model_name}")

        try:
            resp = self.client.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=generation_config,
            )
        except Exception as e:
            raise CompletionServiceError(f"Gemini API call failed: {e}") from e

        text = getattr(resp, "text", None)
        if not text or not text.strip():
            raise CompletionServiceError("Gemini returned an empty response.")

        return text.strip()
