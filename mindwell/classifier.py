import logging
from typing import Optional

from mindwell.ai_client import FailureReason, ModelGateway, ModelResult, StructuredRequest
from mindwell.models import Mood, MoodReading
from mindwell.schemas import ImageMoodSchema, TextMoodSchema

logger = logging.getLogger(__name__)

FALLBACK_EMOJI = "😐"
TEXT_FALLBACK = MoodReading(mood=Mood.NEUTRAL, emoji=FALLBACK_EMOJI, notes="Could not analyze mood.")
IMAGE_FALLBACK = MoodReading(mood=Mood.NEUTRAL, emoji=FALLBACK_EMOJI, notes="Could not determine mood from image.")

TEXT_PROMPT = (
    "Analyze the mood from the following journal entry and provide a brief, gentle, "
    'one-sentence summary of its feeling. Entry: "{text}"'
)
IMAGE_PROMPT = "Analyze the dominant mood of the person in this image."
CLASSIFY_TEMPERATURE = 0.2


def reading_or_fallback(result: ModelResult, fallback: MoodReading) -> MoodReading:
    """The one place a failed classification turns into a placeholder reading."""
    if result.ok:
        return result.value
    logger.info("Using fallback mood reading (%s)", result.failure.value)
    return fallback


# ===============================
# TEXT
# ===============================

def request_text_mood(gateway: ModelGateway, text: str) -> ModelResult:
    result = gateway.generate(StructuredRequest(
        prompt=TEXT_PROMPT.format(text=text),
        schema=TextMoodSchema,
        temperature=CLASSIFY_TEMPERATURE,
    ))
    if not result.ok:
        return result
    parsed = result.value
    return ModelResult.success(MoodReading(mood=parsed.mood, emoji=parsed.emoji, notes=parsed.notes))


def classify_from_text(gateway: ModelGateway, text: str) -> MoodReading:
    """Classify a journal entry or voice transcript. Never raises."""
    if not text or not text.strip():
        return TEXT_FALLBACK
    return reading_or_fallback(request_text_mood(gateway, text), TEXT_FALLBACK)


# ===============================
# IMAGE
# ===============================

def _missing_fields(parsed: ImageMoodSchema) -> Optional[str]:
    missing = [name for name in ("mood", "emoji") if not str(getattr(parsed, name, "") or "").strip()]
    return ", ".join(missing) or None


def request_image_mood(gateway: ModelGateway, image: bytes, mime_type: str = "image/jpeg") -> ModelResult:
    result = gateway.generate(StructuredRequest(
        prompt=IMAGE_PROMPT,
        schema=ImageMoodSchema,
        temperature=CLASSIFY_TEMPERATURE,
        image=image,
        image_mime_type=mime_type,
    ))
    if not result.ok:
        return result

    parsed = result.value
    missing = _missing_fields(parsed)
    if missing:
        logger.warning("Image mood response is missing %s", missing)
        return ModelResult.failed(FailureReason.INCOMPLETE, f"missing {missing}")

    mood = Mood(parsed.mood)
    return ModelResult.success(MoodReading(
        mood=mood,
        emoji=parsed.emoji,
        notes=f"Detected a {mood.value.lower()} expression.",
    ))


def classify_from_image(gateway: ModelGateway, image: bytes, mime_type: str = "image/jpeg") -> MoodReading:
    """Classify the dominant facial expression in a still image. Never raises."""
    if not image:
        return IMAGE_FALLBACK
    return reading_or_fallback(request_image_mood(gateway, image, mime_type), IMAGE_FALLBACK)


# ===============================
# VOICE
# ===============================

def transcribe_audio(gateway: ModelGateway, audio: bytes, filename: str = "voice-log.wav") -> Optional[str]:
    if not audio:
        return None
    result = gateway.transcribe(audio, filename)
    return result.value if result.ok else None
