"""
Kheti Samachar: agriculture news from newsdata.io.
"""
import logging

import requests
from flask import current_app

from ekheti.errors import NewsError

logger = logging.getLogger(__name__)

NEWS_URL = "https://newsdata.io/api/1/news"
NEWS_LANGUAGES = ('en', 'hi')
ARTICLE_FIELDS = ('title', 'link', 'description', 'pubDate', 'image_url', 'source_id')


def get_kheti_samachar(language):
    api_key = current_app.config.get('NEWSDATA_API_KEY')
    if not api_key:
        raise NewsError("NEWSDATA_API_KEY is not configured in environment variables.")
    if language not in NEWS_LANGUAGES:
        raise NewsError(f"Unsupported news language: {language}", status_code=400)

    params = {
        'apikey': api_key,
        'q': 'agriculture OR farming',
        'country': 'in',
        'language': language,
        'category': 'business,science,technology,politics',
    }
    try:
        response = requests.get(NEWS_URL, params=params, timeout=current_app.config['HTTP_TIMEOUT'])
    except requests.exceptions.RequestException as e:
        logger.error("Newsdata.io request failed: %s", e)
        raise NewsError("Failed to fetch news from the API.")

    if response.status_code != 200:
        logger.error("Newsdata.io API request failed: %s %s", response.status_code, response.text)
        raise NewsError("Failed to fetch news from the API.")

    try:
        data = response.json()
    except ValueError:
        logger.error("Newsdata.io returned a non-JSON body")
        raise NewsError("Failed to fetch news from the API.")

    if data.get('status') == 'error':
        logger.error("Newsdata.io API error: %s", data.get('results', {}).get('message'))
        raise NewsError("Failed to fetch news from the API.")

    return [{field: article.get(field) for field in ARTICLE_FIELDS} for article in data.get('results') or []]
