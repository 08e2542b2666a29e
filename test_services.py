import random
from datetime import date

import pytest

from ekheti.errors import MarketDataError, NewsError, WeatherError
from ekheti.services import market, news, weather

CURRENT_PAYLOAD = {
    'name': 'Pune',
    'sys': {'country': 'IN'},
    'main': {'temp': 27.6, 'humidity': 64, 'temp_max': 29.4, 'temp_min': 25.2},
    'wind': {'speed': 5},
    'weather': [{'main': 'Clouds', 'icon': '03d'}],
}


def forecast_item(day, hour, low, high, condition, icon='10d'):
    return {
        'dt_txt': f'{day} {hour:02d}:00:00',
        'main': {'temp_min': low, 'temp_max': high},
        'weather': [{'main': condition, 'icon': icon}],
    }


def test_current_weather_by_name(app, requests_mock):
    requests_mock.get(weather.CURRENT_URL, json=CURRENT_PAYLOAD)
    with app.app_context():
        data = weather.get_current_weather('Pune', 'key')

    assert data == {
        'location': 'Pune, IN',
        'temperature': 28,
        'condition': 'Clouds',
        'humidity': 64,
        'windSpeed': 18,
        'icon': '03d',
        'temp_max': 29,
        'temp_min': 25,
    }
    query = requests_mock.last_request.qs
    assert query['q'] == ['pune']
    assert query['units'] == ['metric']


def test_current_weather_by_coordinates(app, requests_mock):
    requests_mock.get(weather.CURRENT_URL, json=CURRENT_PAYLOAD)
    with app.app_context():
        weather.get_current_weather((18.52, 73.85), 'key')
    query = requests_mock.last_request.qs
    assert query['lat'] == ['18.52']
    assert query['lon'] == ['73.85']


def test_current_weather_upstream_error(app, requests_mock):
    requests_mock.get(weather.CURRENT_URL, status_code=404, json={'message': 'city not found'})
    with app.app_context(), pytest.raises(WeatherError) as exc:
        weather.get_current_weather('Nowhere', 'key')
    assert exc.value.status_code == 502


def test_daily_forecast_groups_by_day(app, requests_mock):
    items = [
        forecast_item('2024-06-03', 9, 24, 30, 'Rain'),
        forecast_item('2024-06-03', 12, 22, 33, 'Rain'),
        forecast_item('2024-06-03', 15, 25, 31, 'Clouds', '04d'),
        forecast_item('2024-06-04', 9, 21, 28, 'Clear', '01d'),
    ]
    requests_mock.get(weather.FORECAST_URL, json={'list': items})
    with app.app_context():
        forecast = weather.get_daily_forecast('Pune', 'key')

    assert len(forecast) == 2
    assert forecast[0] == {
        'date': '2024-06-03',
        'dayOfWeek': 'Monday',
        'temp_min': 22,
        'temp_max': 33,
        'condition': 'Rain',
        'icon': '10d',
    }
    assert forecast[1]['dayOfWeek'] == 'Tuesday'


def test_daily_forecast_keeps_seven_days(app, requests_mock):
    items = [forecast_item(f'2024-06-{day:02d}', 12, 20, 30, 'Clear') for day in range(1, 10)]
    requests_mock.get(weather.FORECAST_URL, json={'list': items})
    with app.app_context():
        forecast = weather.get_daily_forecast('Pune', 'key')
    assert [d['date'] for d in forecast][-1] == '2024-06-07'
    assert len(forecast) == 7


def test_city_name_from_coords(app, requests_mock):
    requests_mock.get(weather.CURRENT_URL, json={'name': 'Nashik', 'sys': {'country': 'IN'}})
    with app.app_context():
        assert weather.get_city_name_from_coords((20.0, 73.8), 'key') == 'Nashik, IN'


def test_city_name_missing(app, requests_mock):
    requests_mock.get(weather.CURRENT_URL, json={'sys': {}})
    with app.app_context(), pytest.raises(WeatherError):
        weather.get_city_name_from_coords((0, 0), 'key')


def test_yearly_report_covers_last_twelve_months():
    report = weather.yearly_report(today=date(2024, 3, 15), rng=random.Random(1))
    assert len(report) == 12
    assert report[0]['month'] == 'Apr'
    assert report[-1]['month'] == 'Mar'
    july = report[3]
    january = report[-3]
    assert july['rainfall'] >= 150
    assert january['rainfall'] <= 50
    assert july['humidity'] > january['humidity']


def test_market_prices_filters_and_parsing(app, requests_mock):
    records = [
        {'commodity': 'Wheat', 'variety': 'Dara', 'market': 'Indore', 'min_price': '2100',
         'max_price': '2400', 'modal_price': '2250', 'arrival_date': '03/06/2024'},
        {'commodity': 'Wheat', 'variety': 'Local', 'market': 'Ujjain', 'min_price': '2000',
         'max_price': '2300', 'modal_price': 'NR', 'arrival_date': '03/06/2024'},
        {'commodity': 'Wheat', 'variety': 'Local', 'market': 'Dewas', 'min_price': '0',
         'max_price': '0', 'modal_price': '0', 'arrival_date': '03/06/2024'},
    ]
    requests_mock.get(market.MARKET_URL, json={'records': records})
    with app.app_context():
        prices = market.get_market_prices('Madhya Pradesh', 'Wheat')

    assert prices == [{
        'cropName': 'Wheat', 'variety': 'Dara', 'market': 'Indore', 'minPrice': 2100.0,
        'maxPrice': 2400.0, 'modalPrice': 2250.0, 'arrivalDate': '03/06/2024',
    }]
    query = requests_mock.last_request.qs
    assert query['limit'] == ['2000']
    assert 'commodity' in query['filters'][0]


def test_market_prices_all_crops_has_no_commodity_filter(app, requests_mock):
    requests_mock.get(market.MARKET_URL, json={'records': []})
    with app.app_context():
        assert market.get_market_prices('Punjab', 'All') == []
    assert 'commodity' not in requests_mock.last_request.qs['filters'][0]


def test_market_prices_missing_records(app, requests_mock):
    requests_mock.get(market.MARKET_URL, json={'status': 'ok'})
    with app.app_context():
        assert market.get_market_prices('Punjab', 'Wheat') == []


def test_market_prices_upstream_error(app, requests_mock):
    requests_mock.get(market.MARKET_URL, status_code=500, text='boom')
    with app.app_context(), pytest.raises(MarketDataError):
        market.get_market_prices('Punjab', 'Wheat')


def test_price_history_merges_crops(app, monkeypatch):
    rows = {
        'Wheat': [
            {'modalPrice': 2200.0, 'arrivalDate': '04/06/2024'},
            {'modalPrice': 2300.0, 'arrivalDate': '04/06/2024'},
            {'modalPrice': 2100.0, 'arrivalDate': '03/06/2024'},
        ],
        'Onion': [
            {'modalPrice': 1500.0, 'arrivalDate': '03/06/2024'},
            {'modalPrice': 900.0, 'arrivalDate': 'unknown'},
        ],
    }
    monkeypatch.setattr(market, 'get_market_prices', lambda location, crop: rows[crop])
    points = market.price_history('Maharashtra', ['Wheat', 'Onion'])
    assert points == [
        {'date': '2024-06-03', 'Wheat': 2100.0, 'Onion': 1500.0},
        {'date': '2024-06-04', 'Wheat': 2250.0},
    ]


def test_news_returns_articles(app, requests_mock):
    requests_mock.get(news.NEWS_URL, json={'status': 'success', 'results': [
        {'title': 'Monsoon arrives early', 'link': 'https://example.com/a', 'description': 'Good for kharif',
         'pubDate': '2024-06-01 10:00:00', 'image_url': None, 'source_id': 'agrinews', 'extra': 'x'},
    ]})
    with app.app_context():
        articles = news.get_kheti_samachar('hi')

    assert articles == [{
        'title': 'Monsoon arrives early', 'link': 'https://example.com/a', 'description': 'Good for kharif',
        'pubDate': '2024-06-01 10:00:00', 'image_url': None, 'source_id': 'agrinews',
    }]
    query = requests_mock.last_request.qs
    assert query['language'] == ['hi']
    assert query['country'] == ['in']


def test_news_api_error_status(app, requests_mock):
    requests_mock.get(news.NEWS_URL, json={'status': 'error', 'results': {'message': 'bad key'}})
    with app.app_context(), pytest.raises(NewsError):
        news.get_kheti_samachar('en')


def test_news_rejects_unsupported_language(app):
    with app.app_context(), pytest.raises(NewsError) as exc:
        news.get_kheti_samachar('fr')
    assert exc.value.status_code == 400


def test_forecast_tie_goes_to_later_condition(app, requests_mock):
    items = [
        forecast_item('2024-06-03', 9, 24, 30, 'Clouds', '04d'),
        forecast_item('2024-06-03', 12, 22, 33, 'Rain', '10d'),
    ]
    requests_mock.get(weather.FORECAST_URL, json={'list': items})
    with app.app_context():
        day = weather.get_daily_forecast('Pune', 'key')[0]
    assert day['condition'] == 'Rain'
    assert day['icon'] == '10d'


def test_weather_non_json_body(app, requests_mock):
    requests_mock.get(weather.CURRENT_URL, text='<html>gateway</html>')
    with app.app_context(), pytest.raises(WeatherError):
        weather.get_current_weather('Pune', 'key')


def test_news_non_json_body(app, requests_mock):
    requests_mock.get(news.NEWS_URL, text='<html>maintenance</html>')
    with app.app_context(), pytest.raises(NewsError):
        news.get_kheti_samachar('en')
