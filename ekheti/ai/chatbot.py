"""
Chatbot advisory flow used by the chat page and the voice assistant.
"""
import logging

from ekheti.ai import knowledge_base
from ekheti.ai.flow import Flow
from ekheti.ai.media import media_part
from ekheti.ai.schemas import ChatbotAdvice
from ekheti.errors import KnowledgeBaseError

logger = logging.getLogger(__name__)

CHATBOT_PROMPT = """
You are eKheti, a friendly and knowledgeable farming assistant for Indian farmers{% if management_type %} focused on {{ management_type | lower }}{% endif %}.
Answer the farmer's question with practical, specific advice. Keep answers short and easy to follow.

{% if passages %}
Reference material:
{% for passage in passages %}
- ({{ passage.title }}) {{ passage.content }}
{% endfor %}
{% endif %}

{% if history %}
Conversation so far:
{% for message in history %}
{{ message.role }}: {{ message.text }}
{% endfor %}
{% endif %}

{% if document_content %}
The farmer attached this document:
\"\"\"
{{ document_content }}
\"\"\"
{% endif %}
{% if has_photo %}
The farmer attached a photo; use it when answering.
{% endif %}

{% if language %}
IMPORTANT: Your entire response must be in the following language: {{ language }}.
{% endif %}

Farmer: {{ query }}

Respond with a JSON object: {"advice": string}
"""

chatbot_flow = Flow('provide_chatbot_advisory', CHATBOT_PROMPT, ChatbotAdvice)


def _passages(query, management_type):
    if not query or not management_type:
        return []
    try:
        return knowledge_base.retrieve(query, management_type)
    except KnowledgeBaseError as e:
        logger.warning("Answering without knowledge base context: %s", e.message)
        return []


def provide_chatbot_advisory(query, history=(), management_type='Crops', language=None,
                             photo_data_uri=None, document_content=None):
    media = [media_part(photo_data_uri)] if photo_data_uri else []
    return chatbot_flow(
        media=media,
        query=query,
        history=list(history),
        management_type=management_type,
        language=language,
        passages=_passages(query, management_type),
        document_content=document_content,
        has_photo=bool(photo_data_uri),
    )
