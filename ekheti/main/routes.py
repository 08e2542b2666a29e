"""
Dashboard data: weather, location lookup, news and market prices.
"""
from flask import jsonify, request, current_app
from flask_login import current_user, login_required

from ekheti.errors import WeatherError
from ekheti.extensions import db
from ekheti.forms import MarketPriceForm, form_errors
from ekheti.main import bp
from ekheti.services import market, news, weather


def _weather_key():
    api_key = current_app.config.get('OPENWEATHERMAP_API_KEY')
    if not api_key:
        raise WeatherError('OpenWeatherMap API key is not configured.')
    return api_key


def _requested_location():
    """?lat=&lon= wins over ?location=, which falls back to the user's saved location."""
    lat = request.args.get('lat', type=float)
    lon = request.args.get('lon', type=float)
    if lat is not None and lon is not None:
        return (lat, lon)
    location = request.args.get('location') or current_user.location
    if not location:
        raise WeatherError('Please provide a location.', status_code=400)
    return location


def _remember_location(location):
    if isinstance(location, str) and location != current_user.location:
        current_user.location = location
        db.session.commit()


@bp.route('/')
def index():
    return jsonify({
        'name': 'eKheti',
        'user': current_user.to_dict() if current_user.is_authenticated else None,
    })


@bp.route('/api/weather/current')
@login_required
def current_weather():
    location = _requested_location()
    data = weather.get_current_weather(location, _weather_key())
    _remember_location(location)
    return jsonify(data)


@bp.route('/api/weather/forecast')
@login_required
def daily_forecast():
    location = _requested_location()
    return jsonify(weather.get_daily_forecast(location, _weather_key()))


@bp.route('/api/weather/yearly')
@login_required
def yearly_weather():
    return jsonify(weather.yearly_report())


@bp.route('/api/location/reverse')
@login_required
def reverse_geocode():
    lat = request.args.get('lat', type=float)
    lon = request.args.get('lon', type=float)
    if lat is None or lon is None:
        return jsonify({'error': 'lat and lon are required'}), 400
    city = weather.get_city_name_from_coords((lat, lon), _weather_key())
    return jsonify({'location': city})


@bp.route('/api/news')
@login_required
def kheti_samachar():
    language = request.args.get('language', 'en')
    return jsonify({'articles': news.get_kheti_samachar(language)})


@bp.route('/api/market-prices')
@login_required
def market_prices():
    form = MarketPriceForm(formdata=request.args)
    if not form.validate():
        return form_errors(form)
    prices = market.get_market_prices(form.location.data, form.crop.data or 'All')
    return jsonify({'prices': prices})


@bp.route('/api/market-prices/history')
@login_required
def market_price_history():
    location = request.args.get('location')
    crops = request.args.getlist('crop') or market.POPULAR_CROPS[:3]
    if not location:
        return jsonify({'error': 'Please select a state.'}), 400
    return jsonify({'crops': crops, 'points': market.price_history(location, crops)})
