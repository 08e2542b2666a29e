"""
Text to speech for chat replies and the voice assistant.
"""
import io
import logging

from gtts import gTTS, gTTSError

from ekheti.ai.media import to_data_uri
from ekheti.errors import FlowError

logger = logging.getLogger(__name__)


def generate_speech_from_text(text, language='en'):
    """Speak `text` and return it as an MP3 data URI."""
    if not text or not text.strip():
        raise FlowError("There is no text to speak.", status_code=400)
    try:
        mp3 = io.BytesIO()
        gTTS(text, lang=language or 'en').write_to_fp(mp3)
    except (gTTSError, ValueError) as e:
        # ValueError: language not supported by gTTS
        logger.error("TTS error: %s", e)
        raise FlowError("Could not generate audio for this message.")
    return {'audioDataUri': to_data_uri('audio/mpeg', mp3.getvalue())}
