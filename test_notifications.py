from ekheti.notifications.alerts import check_weather_alerts
from ekheti.services import market, weather
from test_services import CURRENT_PAYLOAD, forecast_item


def test_reminders_sorted_by_date_per_list(auth_client):
    auth_client.post('/api/notifications/reminders/farming', json={'task': 'Spray neem oil', 'date': '2024-07-10'})
    auth_client.post('/api/notifications/reminders/farming', json={'task': 'Buy urea', 'date': '2024-07-01'})
    auth_client.post('/api/notifications/reminders/fruit', json={'task': 'Prune mango', 'date': '2024-06-15'})

    farming = auth_client.get('/api/notifications/reminders/farming').get_json()['reminders']
    assert [r['task'] for r in farming] == ['Buy urea', 'Spray neem oil']
    fruit = auth_client.get('/api/notifications/reminders/fruit').get_json()['reminders']
    assert [r['task'] for r in fruit] == ['Prune mango']
    assert auth_client.get('/api/notifications/reminders/crop').get_json() == {'reminders': []}


def test_reminder_requires_task_and_date(auth_client):
    response = auth_client.post('/api/notifications/reminders/crop', json={'task': ''})
    assert response.status_code == 400
    assert set(response.get_json()['errors']) == {'task', 'date'}


def test_unknown_reminder_list(auth_client):
    assert auth_client.get('/api/notifications/reminders/garden').status_code == 404


def test_delete_reminder(auth_client):
    reminder = auth_client.post('/api/notifications/reminders/farming',
                                json={'task': 'Irrigate', 'date': '2024-07-01'}).get_json()
    assert auth_client.delete(f"/api/notifications/reminders/{reminder['id']}").status_code == 200
    assert auth_client.get('/api/notifications/reminders/farming').get_json() == {'reminders': []}


def test_price_alerts_check(auth_client, monkeypatch):
    auth_client.post('/api/notifications/price-alerts', json={'crop': 'Wheat', 'threshold': 2000, 'condition': 'above'})
    auth_client.post('/api/notifications/price-alerts', json={'crop': 'Onion', 'threshold': 1000, 'condition': 'below'})

    prices = {'Wheat': [{'modalPrice': 2100.0}, {'modalPrice': 2300.0}], 'Onion': [{'modalPrice': 1400.0}]}
    monkeypatch.setattr(market, 'get_market_prices', lambda location, crop: prices[crop])

    results = auth_client.get('/api/notifications/price-alerts/check?location=Maharashtra').get_json()['results']
    assert [(r['alert']['crop'], r['currentPrice'], r['triggered']) for r in results] == [
        ('Wheat', 2200.0, True),
        ('Onion', 1400.0, False),
    ]


def test_price_alert_condition_validated(auth_client):
    response = auth_client.post('/api/notifications/price-alerts',
                                json={'crop': 'Wheat', 'threshold': 2000, 'condition': 'equal'})
    assert response.status_code == 400


def test_weather_alert_settings_default_off(auth_client):
    assert auth_client.get('/api/notifications/weather-alerts').get_json() == {
        'rain': False, 'frost': False, 'highWind': False}
    saved = auth_client.post('/api/notifications/weather-alerts', json={'rain': True, 'high_wind': True})
    assert saved.get_json() == {'rain': True, 'frost': False, 'highWind': True}
    assert auth_client.get('/api/notifications/weather-alerts').get_json()['highWind'] is True


def test_weather_alerts_check(auth_client, requests_mock):
    auth_client.post('/api/notifications/weather-alerts', json={'rain': True, 'frost': True, 'high_wind': True})
    requests_mock.get(weather.CURRENT_URL, json=CURRENT_PAYLOAD)
    requests_mock.get(weather.FORECAST_URL, json={'list': [
        forecast_item('2024-06-03', 12, 20, 30, 'Clear'),
        forecast_item('2024-06-04', 12, 21, 29, 'Thunderstorm'),
    ]})

    body = auth_client.get('/api/notifications/weather-alerts/check?location=Pune').get_json()
    assert body['location'] == 'Pune, IN'
    assert [a['type'] for a in body['alerts']] == ['rain']
    assert 'Tuesday' in body['alerts'][0]['message']


class Settings:
    def __init__(self, rain=False, frost=False, high_wind=False):
        self.rain, self.frost, self.high_wind = rain, frost, high_wind


def test_frost_and_wind_thresholds():
    current = {'temp_min': 5, 'windSpeed': 40}
    forecast = [{'date': '2024-01-10', 'dayOfWeek': 'Wednesday', 'temp_min': 2, 'temp_max': 14,
                 'condition': 'Clear', 'icon': '01d'}]
    alerts = check_weather_alerts(Settings(frost=True, high_wind=True), current, forecast)
    assert [a['type'] for a in alerts] == ['frost', 'highWind']

    assert check_weather_alerts(Settings(), current, forecast) == []
    calm = {'temp_min': 5, 'windSpeed': 39}
    mild = [dict(forecast[0], temp_min=3)]
    assert check_weather_alerts(Settings(frost=True, high_wind=True), calm, mild) == []
