"""Typed request/result contract over the Groq SDK.

Every call returns a ModelResult instead of raising: either a value or one
of a small, closed set of failure reasons. Callers decide what a failure
turns into.
"""

import base64
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

import groq
from groq import Groq
from pydantic import BaseModel, ValidationError

from mindwell.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FailureReason(str, Enum):
    TRANSPORT = "transport"    # network error, non-2xx, SDK exception
    PARSE = "parse"            # empty or non-JSON content
    SCHEMA = "schema"          # JSON that does not match the schema
    INCOMPLETE = "incomplete"  # parsed, but required values are blank


@dataclass(frozen=True)
class ModelResult(Generic[T]):
    value: Optional[T] = None
    failure: Optional[FailureReason] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "ModelResult[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, reason: FailureReason, detail: str = "") -> "ModelResult[T]":
        return cls(failure=reason, detail=detail)


@dataclass(frozen=True)
class StructuredRequest:
    prompt: str
    schema: Type[BaseModel]
    temperature: Optional[float] = None
    image: Optional[bytes] = None
    image_mime_type: str = "image/jpeg"


def schema_instructions(schema: Type[BaseModel]) -> str:
    """Text appended to every structured prompt; JSON mode needs the word JSON in it."""
    return (
        "Respond only with a JSON object that matches this JSON schema. "
        "Every property listed as required must be present.\n"
        f"{json.dumps(schema.model_json_schema(), ensure_ascii=False)}"
    )


def parse_structured(content: Optional[str], schema: Type[BaseModel]) -> ModelResult:
    if not content or not content.strip():
        return ModelResult.failed(FailureReason.PARSE, "empty response")
    try:
        payload = json.loads(content.strip())
    except json.JSONDecodeError as e:
        return ModelResult.failed(FailureReason.PARSE, str(e))
    try:
        return ModelResult.success(schema.model_validate(payload))
    except ValidationError as e:
        return ModelResult.failed(FailureReason.SCHEMA, f"{e.error_count()} validation error(s)")


def _message_content(completion) -> Optional[str]:
    try:
        return completion.choices[0].message.content
    except (AttributeError, IndexError):
        return None


class ModelGateway:
    """The only place that talks to Groq."""

    def __init__(self, client: Groq, settings: Settings):
        self.client = client
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelGateway":
        client = Groq(api_key=settings.groq_api_key, timeout=settings.request_timeout)
        return cls(client, settings)

    def _user_content(self, request: StructuredRequest) -> Any:
        text = f"{request.prompt}\n\n{schema_instructions(request.schema)}"
        if request.image is None:
            return text
        data = base64.b64encode(request.image).decode("ascii")
        return [
            {"type": "text", "text": text},
            {"type": "image_url", "image_url": {"url": f"data:{request.image_mime_type};base64,{data}"}},
        ]

    def generate(self, request: StructuredRequest) -> ModelResult:
        model = self.settings.vision_model if request.image is not None else self.settings.text_model
        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": self._user_content(request)}],
            "response_format": {"type": "json_object"},
        }
        if request.temperature is not None:
            kwargs["temperature"] = request.temperature
        try:
            completion = self.client.chat.completions.create(**kwargs)
        except groq.GroqError as e:
            logger.warning("Structured request to %s failed: %s", model, e)
            return ModelResult.failed(FailureReason.TRANSPORT, str(e))

        result = parse_structured(_message_content(completion), request.schema)
        if not result.ok:
            logger.warning("Structured response from %s rejected (%s): %s",
                           model, result.failure.value, result.detail)
        return result

    def chat(self, system_instruction: str, messages: List[Dict[str, str]]) -> ModelResult:
        try:
            completion = self.client.chat.completions.create(
                model=self.settings.text_model,
                messages=[{"role": "system", "content": system_instruction}] + messages,
                temperature=0.7,
            )
        except groq.GroqError as e:
            logger.warning("Chat request failed: %s", e)
            return ModelResult.failed(FailureReason.TRANSPORT, str(e))

        text = _message_content(completion)
        if not text or not text.strip():
            logger.warning("Chat response was empty")
            return ModelResult.failed(FailureReason.PARSE, "empty response")
        return ModelResult.success(text.strip())

    def transcribe(self, audio: bytes, filename: str = "voice-log.wav") -> ModelResult:
        try:
            transcription = self.client.audio.transcriptions.create(
                file=(filename, audio),
                model=self.settings.speech_model,
                response_format="json",
            )
        except groq.GroqError as e:
            logger.warning("Transcription failed: %s", e)
            return ModelResult.failed(FailureReason.TRANSPORT, str(e))

        text = (getattr(transcription, "text", None) or "").strip()
        if not text:
            return ModelResult.failed(FailureReason.INCOMPLETE, "no speech detected")
        return ModelResult.success(text)
