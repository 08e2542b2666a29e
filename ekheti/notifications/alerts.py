"""
Checks that turn price alerts and weather alert settings into notifications.
"""
import logging

from ekheti.errors import MarketDataError
from ekheti.services import market

logger = logging.getLogger(__name__)

RAIN_CONDITIONS = ('Rain', 'Drizzle', 'Thunderstorm')
FROST_TEMPERATURE = 2  # °C
HIGH_WIND_SPEED = 40  # km/h


def check_price_alerts(alerts, location):
    """Compare each alert with the current average modal price for its crop."""
    results = []
    for alert in alerts:
        try:
            price = market.average_modal_price(market.get_market_prices(location, alert.crop))
        except MarketDataError as e:
            logger.warning("Price alert %s not checked: %s", alert.id, e.message)
            price = None
        results.append({
            'alert': alert.to_dict(),
            'currentPrice': round(price, 2) if price is not None else None,
            'triggered': price is not None and alert.is_triggered_by(price),
        })
    return results


def check_weather_alerts(settings, current, forecast):
    """Active alerts for the enabled settings, given current weather and the daily forecast."""
    active = []
    if settings.rain:
        rainy = [day for day in forecast if day['condition'] in RAIN_CONDITIONS]
        if rainy:
            active.append({
                'type': 'rain',
                'message': f"{rainy[0]['condition']} expected on {rainy[0]['dayOfWeek']}.",
            })
    if settings.frost:
        lows = [day['temp_min'] for day in forecast] + [current['temp_min']]
        if min(lows) <= FROST_TEMPERATURE:
            active.append({'type': 'frost', 'message': f"Frost risk: temperatures down to {min(lows)}°C."})
    if settings.high_wind and current['windSpeed'] >= HIGH_WIND_SPEED:
        active.append({'type': 'highWind', 'message': f"High winds of {current['windSpeed']} km/h."})
    return active
