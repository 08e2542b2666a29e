from ekheti.services import market, news, weather
from test_services import CURRENT_PAYLOAD


def test_index(client):
    assert client.get('/').get_json() == {'name': 'eKheti', 'user': None}


def test_current_weather_remembers_location(auth_client, requests_mock):
    requests_mock.get(weather.CURRENT_URL, json=CURRENT_PAYLOAD)
    response = auth_client.get('/api/weather/current?location=Pune')
    assert response.status_code == 200
    assert response.get_json()['location'] == 'Pune, IN'
    assert auth_client.get('/auth/me').get_json()['user']['location'] == 'Pune'

    # falls back to the saved location
    assert auth_client.get('/api/weather/current').status_code == 200
    assert requests_mock.last_request.qs['q'] == ['pune']


def test_current_weather_by_coordinates(auth_client, requests_mock):
    requests_mock.get(weather.CURRENT_URL, json=CURRENT_PAYLOAD)
    response = auth_client.get('/api/weather/current?lat=18.5&lon=73.8')
    assert response.status_code == 200
    assert requests_mock.last_request.qs['lat'] == ['18.5']


def test_weather_needs_location(auth_client):
    response = auth_client.get('/api/weather/current')
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Please provide a location.'}


def test_weather_upstream_failure(auth_client, requests_mock):
    requests_mock.get(weather.FORECAST_URL, status_code=500, text='error')
    response = auth_client.get('/api/weather/forecast?location=Pune')
    assert response.status_code == 502
    assert response.get_json() == {'error': 'Failed to fetch daily forecast.'}


def test_yearly_weather(auth_client):
    report = auth_client.get('/api/weather/yearly').get_json()
    assert len(report) == 12
    assert set(report[0]) == {'month', 'temperature', 'rainfall', 'humidity'}


def test_reverse_geocode(auth_client, requests_mock):
    requests_mock.get(weather.CURRENT_URL, json={'name': 'Nashik', 'sys': {'country': 'IN'}})
    assert auth_client.get('/api/location/reverse?lat=20&lon=73.8').get_json() == {'location': 'Nashik, IN'}
    assert auth_client.get('/api/location/reverse?lat=20').status_code == 400


def test_news(auth_client, requests_mock):
    requests_mock.get(news.NEWS_URL, json={'status': 'success', 'results': []})
    assert auth_client.get('/api/news?language=hi').get_json() == {'articles': []}
    assert auth_client.get('/api/news?language=de').status_code == 400


def test_market_prices(auth_client, requests_mock):
    requests_mock.get(market.MARKET_URL, json={'records': [
        {'commodity': 'Onion', 'variety': 'Red', 'market': 'Lasalgaon', 'min_price': '1200',
         'max_price': '1800', 'modal_price': '1500', 'arrival_date': '03/06/2024'},
    ]})
    response = auth_client.get('/api/market-prices?location=Maharashtra&crop=Onion')
    assert response.status_code == 200
    assert response.get_json()['prices'][0]['market'] == 'Lasalgaon'


def test_market_prices_requires_state(auth_client):
    response = auth_client.get('/api/market-prices')
    assert response.status_code == 400
    assert 'location' in response.get_json()['errors']


def test_market_price_history(auth_client, monkeypatch):
    monkeypatch.setattr(market, 'get_market_prices', lambda location, crop: [
        {'modalPrice': 100.0 if crop == 'Wheat' else 50.0, 'arrivalDate': '01/06/2024'}])
    response = auth_client.get('/api/market-prices/history?location=Punjab&crop=Wheat&crop=Maize')
    assert response.get_json() == {
        'crops': ['Wheat', 'Maize'],
        'points': [{'date': '2024-06-01', 'Wheat': 100.0, 'Maize': 50.0}],
    }
