"""
Weather data from the OpenWeatherMap API.
"""
import logging
import math
import random
from collections import Counter
from datetime import date, datetime

import requests
from flask import current_app

from ekheti.errors import WeatherError

logger = logging.getLogger(__name__)

CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
FORECAST_DAYS = 7


def _location_params(location, api_key):
    """A location is either a place name or a (lat, lon) pair."""
    params = {'appid': api_key, 'units': 'metric'}
    if isinstance(location, str):
        params['q'] = location
    else:
        lat, lon = location
        params['lat'] = lat
        params['lon'] = lon
    return params


def _get(url, location, api_key, what):
    try:
        response = requests.get(url, params=_location_params(location, api_key),
                                timeout=current_app.config['HTTP_TIMEOUT'])
    except requests.exceptions.RequestException as e:
        logger.error("%s request failed: %s", what, e)
        raise WeatherError(f"Failed to fetch {what}.")

    if response.status_code != 200:
        try:
            message = response.json().get('message', response.text)
        except ValueError:
            message = response.text
        logger.error("%s request failed: %s %s", what, response.status_code, message)
        raise WeatherError(f"Failed to fetch {what}.")

    try:
        return response.json()
    except ValueError:
        logger.error("%s returned a non-JSON body", what)
        raise WeatherError(f"Failed to fetch {what}.")


def get_current_weather(location, api_key):
    """Fetch current conditions for a place name or (lat, lon)."""
    data = _get(CURRENT_URL, location, api_key, 'current weather')
    try:
        weather = data['weather'][0] if data.get('weather') else {}
        return {
            'location': f"{data['name']}, {data['sys']['country']}",
            'temperature': round(data['main']['temp']),
            'condition': weather.get('main', 'Clear'),
            'humidity': data['main']['humidity'],
            'windSpeed': round(data['wind']['speed'] * 3.6),  # m/s to km/h
            'icon': weather.get('icon', '01d'),
            'temp_max': round(data['main']['temp_max']),
            'temp_min': round(data['main']['temp_min']),
        }
    except (KeyError, TypeError) as e:
        logger.error("Unexpected current weather payload: %s", e)
        raise WeatherError("Failed to fetch current weather.")


def _most_common(counter):
    """Most frequent key; on a tie the one seen last wins."""
    return max(reversed(list(counter)), key=counter.get)


def get_daily_forecast(location, api_key):
    """Collapse the 3-hourly forecast into one entry per day."""
    data = _get(FORECAST_URL, location, api_key, 'daily forecast')

    days = {}
    try:
        for item in data['list']:
            day = item['dt_txt'].split(' ')[0]
            entry = days.setdefault(day, {'mins': [], 'maxs': [], 'conditions': Counter(), 'icons': Counter()})
            entry['mins'].append(item['main']['temp_min'])
            entry['maxs'].append(item['main']['temp_max'])
            entry['conditions'][item['weather'][0]['main']] += 1
            entry['icons'][item['weather'][0]['icon']] += 1
    except (KeyError, IndexError, TypeError) as e:
        logger.error("Unexpected forecast payload: %s", e)
        raise WeatherError("Failed to fetch daily forecast.")

    forecast = []
    for day in list(days)[:FORECAST_DAYS]:
        entry = days[day]
        forecast.append({
            'date': day,
            'dayOfWeek': datetime.strptime(day, '%Y-%m-%d').strftime('%A'),
            'temp_min': round(min(entry['mins'])),
            'temp_max': round(max(entry['maxs'])),
            'condition': _most_common(entry['conditions']),
            'icon': _most_common(entry['icons']),
        })
    return forecast


def get_city_name_from_coords(coords, api_key):
    """Reverse geocode (lat, lon) to "City, CC"."""
    data = _get(CURRENT_URL, coords, api_key, 'city name')
    name = data.get('name')
    country = (data.get('sys') or {}).get('country')
    if name and country:
        return f"{name}, {country}"
    if name:
        return name
    raise WeatherError("Could not determine location name from coordinates.")


def yearly_report(today=None, rng=None):
    """Simulated monthly climate for the last 12 months (northern hemisphere, monsoon Jun-Sep)."""
    today = today or date.today()
    rng = rng or random.Random()
    report = []
    for offset in range(11, -1, -1):
        year, month = today.year, today.month - offset
        while month < 1:
            month += 12
            year -= 1
        month_index = month - 1
        monsoon = 5 <= month_index <= 8

        temperature = 20 + math.sin((month_index - 3) * (math.pi / 6)) * 15 + rng.uniform(-2, 2)
        rainfall = (150 if monsoon else 30) + rng.uniform(0, 100 if monsoon else 20)
        humidity = (80 if monsoon else 60) + rng.uniform(-5, 5)

        report.append({
            'month': date(year, month, 1).strftime('%b'),
            'temperature': round(temperature, 1),
            'rainfall': round(rainfall, 1),
            'humidity': round(humidity, 1),
        })
    return report
