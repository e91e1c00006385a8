import google.generativeai as genai
import os
import json
import httpx
from PIL import Image
import re
import io
from typing import List, Optional

import structlog
from dotenv import load_dotenv

from app.analytics.colors import EMOTION_COLORS, emotion_color
from app.models.mood import EmotionTag

load_dotenv()

GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
genai.configure(api_key=GOOGLE_API_KEY)

logger = structlog.get_logger(__name__)

MAX_DETECTED_EMOTIONS = 3

system_instruction = """
    You are an emotion classifier for a student wellbeing journal.
    Only answer with the emotions from this list:
    """ + ", ".join(EMOTION_COLORS) + """.
    Never add commentary.
    """

model_json = genai.GenerativeModel(
    'models/gemini-2.5-flash',
    system_instruction=system_instruction,
    generation_config={"response_mime_type": "application/json"}
)


def clean_json_string(json_str: str) -> str:
    # Lấy khối JSON đầu tiên ({...} hoặc [...]) trong câu trả lời
    match = re.search(r'(\{.*\}|\[.*\])', json_str, re.DOTALL)
    if match:
        return match.group(0)
    return json_str.strip()


def get_optimized_image_url(url: str) -> str:
    if "cloudinary.com" in url and "/upload/" in url:
        return url.replace("/upload/", "/upload/w_200/")
    return url


def parse_detected_emotions(raw_text: str) -> List[EmotionTag]:
    """
    Turn the model's JSON answer into emotion tags.

    The answer is untrusted: items without a name are dropped, confidence is
    clamped to [0, 1] and colors always come from our own palette.
    """
    data = json.loads(clean_json_string(raw_text))
    if isinstance(data, dict):
        data = data.get("emotions", [])
    if not isinstance(data, list):
        return []

    tags = []
    for item in data:
        if not isinstance(item, dict):
            continue
        emotion = str(item.get("emotion") or "").strip().lower()
        if not emotion:
            continue
        try:
            confidence = float(item.get("confidence", 0.0))
        except (TypeError, ValueError):
            confidence = 0.0
        confidence = min(1.0, max(0.0, confidence))
        tags.append(EmotionTag(
            emotion=emotion,
            confidence=confidence,
            color=emotion_color(emotion),
        ))

    tags.sort(key=lambda t: t.confidence, reverse=True)
    return tags[:MAX_DETECTED_EMOTIONS]


async def _load_image(url: str) -> Optional[Image.Image]:
    optimized_url = get_optimized_image_url(url)
    logger.info("ai_loading_image", url=optimized_url)
    async with httpx.AsyncClient() as client:
        resp = await client.get(optimized_url, timeout=10.0)
    if resp.status_code != 200:
        logger.warning("ai_image_unavailable", url=optimized_url, status=resp.status_code)
        return None
    return Image.open(io.BytesIO(resp.content))


async def detect_emotions(notes: str, selfie_url: Optional[str] = None) -> List[EmotionTag]:
    if not notes.strip() and not selfie_url:
        return []

    prompt = f"""
    Detect the emotions expressed by the student.
    Journal note: "{notes}"

    Return a JSON array of at most {MAX_DETECTED_EMOTIONS} objects:
    [{{"emotion": "<name>", "confidence": <0.0-1.0>}}]
    """
    input_parts = [prompt]

    try:
        if selfie_url:
            try:
                img = await _load_image(selfie_url)
                if img is not None:
                    input_parts.append(img)
            except (httpx.HTTPError, OSError) as e:
                logger.warning("ai_image_failed", url=selfie_url, error=str(e))

        response = model_json.generate_content(input_parts)
        return parse_detected_emotions(response.text)

    except Exception as e:
        logger.error("ai_detection_failed", error=str(e))
        return []
