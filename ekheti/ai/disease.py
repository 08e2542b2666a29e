"""
Disease detection from a crop or fruit photo.
"""
from ekheti.ai.flow import Flow
from ekheti.ai.media import media_part
from ekheti.ai.schemas import DiseaseAnalysis

DISEASE_PROMPT = """
You are an expert in {{ specialty }}, specializing in identifying {{ subject }} diseases from images.

Analyze the provided {{ subject }} image and determine if any diseases are present. Provide the disease name, a confidence level (0-1), and suggested solutions.
If the plant looks healthy, set diseaseDetected to false and say so in diseaseName.

{% if language %}
IMPORTANT: Your entire response (diseaseName and suggestedSolutions) must be in the following language: {{ language }}.
{% endif %}

Respond in the following JSON format:
{
  "diseaseDetected": boolean,
  "diseaseName": string,
  "confidenceLevel": number,
  "suggestedSolutions": string
}
"""

analyze_crop_image_flow = Flow('analyze_crop_image_for_disease', DISEASE_PROMPT, DiseaseAnalysis)
analyze_fruit_image_flow = Flow('analyze_fruit_image_for_disease', DISEASE_PROMPT, DiseaseAnalysis)


def analyze_crop_image(photo_data_uri, language=None):
    return analyze_crop_image_flow(media=[media_part(photo_data_uri)], specialty='plant pathology',
                                   subject='crop', language=language)


def analyze_fruit_image(photo_data_uri, language=None):
    return analyze_fruit_image_flow(media=[media_part(photo_data_uri)], specialty='pomology and fruit pathology',
                                    subject='fruit', language=language)


def analyze_image(item_type, photo_data_uri, language=None):
    if item_type == 'Fruit':
        return analyze_fruit_image(photo_data_uri, language)
    return analyze_crop_image(photo_data_uri, language)
