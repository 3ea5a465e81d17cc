"""Codecs por defecto para el data-store.

- `JsonObjectSerializer`: objetos JSON-serializables (y modelos Pydantic) a UTF-8.
- `Base64BinarySanitizer`: bytes <-> base64 URL-safe, ida y vuelta exacta.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from pydantic import BaseModel


class JsonObjectSerializer:
    def serialize(self, obj: Any) -> bytes:
        if isinstance(obj, BaseModel):
            obj = obj.model_dump(mode="json")
        return json.dumps(obj, ensure_ascii=False, separators=(",", ":")).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        if not data:
            return None
        # json.JSONDecodeError y UnicodeDecodeError son ValueError.
        return json.loads(data.decode("utf-8"))


class Base64BinarySanitizer:
    def sanitize(self, data: bytes) -> str:
        return base64.urlsafe_b64encode(data).decode("ascii")

    def unsanitize(self, text: str) -> bytes:
        try:
            return base64.urlsafe_b64decode(text.strip().encode("ascii"))
        except (binascii.Error, UnicodeEncodeError) as exc:
            raise ValueError(f"Invalid base64 payload: {exc}") from exc
