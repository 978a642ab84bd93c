# Role: The only place where untrusted completion text becomes a typed ValidatedResponse.
# Parses JSON defensively (repairs code fences / surrounding prose), fills every default, and falls back
# to wrapping the raw text as the reply when the contract is violated. Never raises.

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional, Tuple

import backend.config as config
from backend.models.validated_response import ValidatedResponse

# Used only when the completion text is blank, so the reply is never empty.
EMPTY_REPLY_FALLBACK = "Sorry, I couldn't come up with an answer just now. Could you rephrase your question?"


class ResponseValidator:
    """
    Contract:
    - The model is asked for {"reply": str, "keywords": {"location": str, "tags": [str], "showPosts": bool}}.
    - In practice, models sometimes wrap JSON in code fences, add extra text, or answer in plain text.
    - Every input maps to a valid ValidatedResponse; used_fallback tells the two paths apart.
    """

    def validate(self, raw_text: Optional[str]) -> ValidatedResponse:
        # 1) Parse JSON (with repairs)
        # 2) No object or no usable reply -> fallback (raw text becomes the reply)
        # 3) Otherwise pick each keyword field only if it has the right type
        raw = raw_text if isinstance(raw_text, str) else ""

        parsed, parse_meta = self._try_parse_json(raw)
        if not isinstance(parsed, dict):
            return self._fallback(raw, reason=f"not a JSON object ({parse_meta.get('method')})")

        reply = self._parse_reply(parsed.get("reply"))
        if reply is None:
            return self._fallback(raw, reason="missing reply field")

        if parse_meta.get("repaired") and config.DEBUG:
            print(f"[RESPONSE_VALIDATOR] received non-strict JSON output (repaired={parse_meta})")

        keywords = parsed.get("keywords")
        if not isinstance(keywords, dict):
            keywords = {}

        return ValidatedResponse(
            reply=reply,
            location=self._parse_location(keywords.get("location")),
            tags=self._parse_tags(keywords.get("tags")),
            show_posts=self._parse_show_posts(keywords.get("showPosts")),
            used_fallback=False,
        )

    def _strip_code_fences(self, text: str) -> str:
        # Role: remove markdown fences if model incorrectly wrapped JSON.
        if not text:
            return ""
        t = text.strip()

        if t.startswith("```"):
            t = re.sub(r"^\s*```(?:json)?\s*", "", t, flags=re.IGNORECASE)
            t = re.sub(r"\s*```\s*$", "", t)
        return t.strip()

    def _try_parse_json(self, text: str) -> Tuple[Optional[Any], Dict[str, Any]]:
        # 1) strict json.loads
        # 2) strip code fences
        # 3) extract {...} substring as last attempt
        raw = (text or "").strip()
        if not raw:
            return None, {"repaired": False, "method": "empty"}

        try:
            return json.loads(raw), {"repaired": False, "method": "strict"}
        except (ValueError, RecursionError):
            pass

        cleaned = self._strip_code_fences(raw)
        if cleaned != raw:
            try:
                return json.loads(cleaned), {"repaired": True, "method": "stripped_fences"}
            except (ValueError, RecursionError):
                pass

        start = cleaned.find("{")
        end = cleaned.rfind("}")
        if start != -1 and end != -1 and end > start:
            candidate = cleaned[start : end + 1]
            try:
                return json.loads(candidate), {"repaired": True, "method": "extracted_braces"}
            except (ValueError, RecursionError):
                return None, {"repaired": True, "method": "failed"}

        return None, {"repaired": False, "method": "failed"}

    def _parse_reply(self, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    def _parse_location(self, value: Any) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return ""

    def _parse_tags(self, value: Any) -> List[str]:
        # Key line: a list with any non-string item is treated as invalid as a whole.
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            return []
        return [item.strip() for item in value if item.strip()]

    def _parse_show_posts(self, value: Any) -> bool:
        # Strict: "true" (string) or 1 do not count.
        return value if isinstance(value, bool) else False

    def _fallback(self, raw_text: str, reason: str) -> ValidatedResponse:
        # Role: safe default when parsing fails -> show the raw text as the reply, no keywords.
        if config.DEBUG:
            print("\n--- RESPONSE VALIDATOR FALLBACK ---")
            print("REASON:", reason)
            print("RAW TEXT:", raw_text)
            print("-----------------------------------\n")

        return ValidatedResponse(
            reply=raw_text.strip() or EMPTY_REPLY_FALLBACK,
            location="",
            tags=[],
            show_posts=False,
            used_fallback=True,
        )
