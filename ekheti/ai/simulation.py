"""
Crop yield and profitability simulation.

The model estimates yield and selling price from live weather and mandi data;
the money arithmetic and the profitability band are computed here.
"""
import logging

from flask import current_app

from ekheti.ai.flow import Flow
from ekheti.ai.schemas import ProfitabilityEstimate, ProfitabilityResult
from ekheti.errors import MarketDataError, WeatherError
from ekheti.services import market
from ekheti.services import weather as weather_service

logger = logging.getLogger(__name__)

SIMULATION_PROMPT = """
You are an expert agricultural economist. Estimate how a crop will perform for a farmer in India.

User Inputs:
- Crop to Simulate: {{ crop_name }}
- Land Size: {{ land_size }} acres
- Total Input Costs: ₹{{ input_costs }}
- Location: {{ location }}

{% if weather %}
Current weather at the location: {{ weather.temperature }}°C, {{ weather.condition }}, humidity {{ weather.humidity }}%, wind {{ weather.windSpeed }} km/h.
{% else %}
Weather data is unavailable; rely on typical conditions for the region and season.
{% endif %}

{% if average_price %}
Latest mandi prices for {{ crop_name }} ({{ price_count }} records): average modal price ₹{{ average_price | round(2) }} per quintal.
{% else %}
No mandi prices were found; use a realistic national average for this crop in India.
{% endif %}

Your task:
1. Estimate expectedYieldPerAcre in kilograms from the crop type, typical agricultural data and the weather.
2. Estimate estimatedSellingPricePerKg in rupees from the market data (1 quintal = 100 kg).
3. Write a concise recommendation explaining the key factors behind the estimate.
4. If the crop looks like a poor fit, name a more suitable crop for the region in alternativeCropSuggestion.

Respond with JSON only:
{
  "expectedYieldPerAcre": number,
  "estimatedSellingPricePerKg": number,
  "recommendation": string,
  "alternativeCropSuggestion": string or null
}
"""

simulation_flow = Flow('simulate_crop_profitability', SIMULATION_PROMPT, ProfitabilityEstimate)


def profitability_indicator(net_profit, input_costs):
    """High above 50% of costs, Medium from 10%, otherwise Low."""
    if net_profit > 0.5 * input_costs:
        return 'High'
    if net_profit >= 0.1 * input_costs:
        return 'Medium'
    return 'Low'


def _gather_weather(location):
    api_key = current_app.config.get('OPENWEATHERMAP_API_KEY')
    if not api_key:
        return None
    try:
        return weather_service.get_current_weather(location, api_key)
    except WeatherError as e:
        logger.warning("Simulation continues without weather: %s", e.message)
        return None


def _gather_prices(location, crop_name):
    try:
        return market.get_market_prices(location, crop_name)
    except MarketDataError as e:
        logger.warning("Simulation continues without market prices: %s", e.message)
        return []


def simulate_crop_profitability(land_size_in_acres, crop_name, input_costs, location):
    weather = _gather_weather(location)
    prices = _gather_prices(location, crop_name)

    estimate = simulation_flow(
        crop_name=crop_name,
        land_size=land_size_in_acres,
        input_costs=input_costs,
        location=location,
        weather=weather,
        average_price=market.average_modal_price(prices),
        price_count=len(prices),
    )

    total_revenue = estimate.expected_yield_per_acre * estimate.estimated_selling_price_per_kg * land_size_in_acres
    net_profit = total_revenue - input_costs
    indicator = profitability_indicator(net_profit, input_costs)

    return ProfitabilityResult(
        expected_yield_per_acre=estimate.expected_yield_per_acre,
        estimated_selling_price_per_kg=estimate.estimated_selling_price_per_kg,
        total_revenue=round(total_revenue, 2),
        net_profit=round(net_profit, 2),
        profitability_indicator=indicator,
        recommendation=estimate.recommendation,
        best_crop_choice=crop_name,
        alternative_crop_suggestion=estimate.alternative_crop_suggestion if indicator == 'Low' else None,
    )
