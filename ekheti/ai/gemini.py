"""
Thin wrapper around google-generativeai. Flows and the knowledge base only talk
to the model through `generate` and `embed`.
"""
import logging

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from flask import current_app

from ekheti.errors import FlowError, KnowledgeBaseError

logger = logging.getLogger(__name__)


def _configure():
    api_key = current_app.config.get('GEMINI_API_KEY')
    if not api_key:
        raise FlowError("GEMINI_API_KEY is not configured.")
    genai.configure(api_key=api_key)


def generate(contents, json_output=True):
    """Send prompt parts (text and media dicts) to the model and return its text."""
    _configure()
    model = genai.GenerativeModel(current_app.config['GEMINI_MODEL'])
    generation_config = {'response_mime_type': 'application/json'} if json_output else None
    try:
        response = model.generate_content(contents, generation_config=generation_config)
        return response.text
    except (google_exceptions.GoogleAPIError, ValueError) as e:
        # ValueError: response.text on a blocked/empty candidate
        logger.error("Gemini request failed: %s", e)
        raise FlowError("The AI model request failed.")


def embed(texts, task_type):
    """Embed a list of texts; returns one vector per text."""
    try:
        _configure()
        result = genai.embed_content(
            model=current_app.config['GEMINI_EMBEDDING_MODEL'],
            content=list(texts),
            task_type=task_type,
        )
    except (google_exceptions.GoogleAPIError, ValueError, FlowError) as e:
        logger.error("Gemini embedding failed: %s", e)
        raise KnowledgeBaseError("Could not embed knowledge base text.")
    return result['embedding']
