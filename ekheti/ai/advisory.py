"""
Advisory flow that folds current weather into farming advice.
"""
import logging

from flask import current_app

from ekheti.ai.flow import Flow
from ekheti.ai.schemas import AdvisoryResult, AdvisoryText, WeatherSnapshot
from ekheti.errors import WeatherError
from ekheti.services import weather as weather_service

logger = logging.getLogger(__name__)

ADVISORY_PROMPT = """
You are an expert agricultural advisor. You are provided with a base advisory, crop information, and current weather data. Your task is to integrate the weather data into the advisory to provide more specific and relevant recommendations.

Base Advisory: {{ advisory }}
Crop Type: {{ crop_type }}
Soil Details: {{ soil_details }}
Current Stage: {{ current_stage }}

Location: {{ location }}

{% if language %}
IMPORTANT: Your entire response must be in the following language: {{ language }}.
{% endif %}

{% if weather %}
Current Weather Conditions:
- Temperature: {{ weather.temperature }}°C
- Condition: {{ weather.condition }}
- Humidity: {{ weather.humidity }}%
- Wind Speed: {{ weather.wind_speed }} km/h

Based on all this information, provide an integrated advisory that takes into account the current weather conditions.
{% else %}
Could not retrieve weather data. Please provide a general advisory based on the crop and soil information.
{% endif %}

Respond with a JSON object: {"integratedAdvisory": string}
"""

integrate_weather_flow = Flow('integrate_weather_data_for_advisory', ADVISORY_PROMPT, AdvisoryText)


def fetch_weather_snapshot(location):
    """Current weather for the advisory, or None when it cannot be fetched."""
    api_key = current_app.config.get('OPENWEATHERMAP_API_KEY')
    if not api_key:
        logger.warning("OPENWEATHERMAP_API_KEY is not configured. Skipping weather fetch.")
        return None
    try:
        current = weather_service.get_current_weather(location, api_key)
    except WeatherError as e:
        logger.error("Failed to fetch weather in flow: %s", e.message)
        return None
    return WeatherSnapshot(temperature=current['temperature'], condition=current['condition'],
                           humidity=current['humidity'], wind_speed=current['windSpeed'])


def integrate_weather_data_for_advisory(crop_type, soil_details, current_stage, location,
                                        advisory, language=None):
    weather = fetch_weather_snapshot(location)
    output = integrate_weather_flow(
        crop_type=crop_type,
        soil_details=soil_details,
        current_stage=current_stage,
        location=location,
        advisory=advisory,
        language=language,
        weather=weather,
    )
    return AdvisoryResult(integrated_advisory=output.integrated_advisory, weather=weather)
