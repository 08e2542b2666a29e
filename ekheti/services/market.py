"""
Mandi prices from the data.gov.in "current daily price" resource.
"""
import json
import logging
from collections import defaultdict
from datetime import datetime

import requests
from flask import current_app

from ekheti.errors import MarketDataError
from ekheti.extensions import cache

logger = logging.getLogger(__name__)

MARKET_URL = "https://api.data.gov.in/resource/9ef84268-d588-465a-a308-a864a43d0070"
RECORD_LIMIT = 2000
POPULAR_CROPS = ["Wheat", "Paddy", "Cotton", "Maize", "Sugarcane", "Potato", "Tomato", "Onion"]


def _to_price(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_records(records):
    """Map API records to price rows, dropping rows without a positive modal price."""
    prices = []
    for record in records:
        modal = _to_price(record.get('modal_price'))
        if modal is None or modal <= 0:
            continue
        prices.append({
            'cropName': record.get('commodity'),
            'variety': record.get('variety'),
            'market': record.get('market'),
            'minPrice': _to_price(record.get('min_price')),
            'maxPrice': _to_price(record.get('max_price')),
            'modalPrice': modal,
            'arrivalDate': record.get('arrival_date'),
        })
    return prices


def get_market_prices(location, crop='All'):
    """Prices for a state and commodity; crop "All" lists every commodity."""
    cache_key = f"market-prices:{(location or '').lower()}:{(crop or '').lower()}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    filters = {}
    if location:
        filters['state'] = location
    if crop and crop.lower() != 'all':
        filters['commodity'] = crop

    params = {
        'api-key': current_app.config['DATA_GOV_API_KEY'],
        'format': 'json',
        'limit': RECORD_LIMIT,
        'filters': json.dumps(filters),
    }
    try:
        response = requests.get(MARKET_URL, params=params, timeout=current_app.config['HTTP_TIMEOUT'])
    except requests.exceptions.RequestException as e:
        logger.error("Data.gov.in request failed: %s", e)
        raise MarketDataError("Failed to fetch market prices from the API.")

    if response.status_code != 200:
        logger.error("Data.gov.in API request failed: %s %s", response.status_code, response.text)
        raise MarketDataError("Failed to fetch market prices from the API.")

    try:
        data = response.json()
    except ValueError:
        logger.error("Data.gov.in returned a non-JSON body")
        raise MarketDataError("Failed to fetch market prices from the API.")

    if not data.get('records'):
        logger.warning("No records found in API response for %s / %s", location, crop)
        prices = []
    else:
        prices = parse_records(data['records'])

    cache.set(cache_key, prices, timeout=current_app.config['MARKET_CACHE_TIMEOUT'])
    return prices


def parse_arrival_date(value):
    """Arrival dates come as DD/MM/YYYY; ISO dates are accepted too."""
    for fmt in ('%d/%m/%Y', '%Y-%m-%d'):
        try:
            return datetime.strptime(value, fmt).date()
        except (TypeError, ValueError):
            continue
    return None


def price_history(location, crops):
    """Chart points {date, <crop>: mean modal price} across several crops, oldest first."""
    by_date = defaultdict(lambda: defaultdict(list))
    for crop in crops:
        for price in get_market_prices(location, crop):
            day = parse_arrival_date(price['arrivalDate'])
            if day is None:
                continue
            by_date[day][crop].append(price['modalPrice'])

    points = []
    for day in sorted(by_date):
        point = {'date': day.isoformat()}
        for crop, values in by_date[day].items():
            point[crop] = round(sum(values) / len(values), 2)
        points.append(point)
    return points


def average_modal_price(prices):
    if not prices:
        return None
    return sum(p['modalPrice'] for p in prices) / len(prices)
