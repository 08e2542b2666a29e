"""
Reminders, market price alerts and weather alert settings.
"""
from flask import abort, jsonify, request, current_app
from flask_login import current_user, login_required

from ekheti.errors import WeatherError
from ekheti.extensions import db
from ekheti.forms import PriceAlertForm, ReminderForm, WeatherAlertSettingsForm, form_errors
from ekheti.models.notifications import PriceAlert, Reminder, REMINDER_KINDS, WeatherAlertSettings
from ekheti.notifications import bp
from ekheti.notifications.alerts import check_price_alerts, check_weather_alerts
from ekheti.services import weather


def _kind(kind):
    if kind not in REMINDER_KINDS:
        abort(404, description=f'Unknown reminder list: {kind}')
    return kind


@bp.route('/reminders/<kind>')
@login_required
def list_reminders(kind):
    reminders = current_user.reminders.filter_by(kind=_kind(kind)).order_by(Reminder.date, Reminder.id).all()
    return jsonify({'reminders': [r.to_dict() for r in reminders]})


@bp.route('/reminders/<kind>', methods=['POST'])
@login_required
def add_reminder(kind):
    kind = _kind(kind)
    form = ReminderForm()
    if not form.validate_on_submit():
        return form_errors(form)
    reminder = Reminder(user_id=current_user.id, kind=kind, task=form.task.data.strip(), date=form.date.data)
    db.session.add(reminder)
    db.session.commit()
    return jsonify(reminder.to_dict()), 201


@bp.route('/reminders/<int:reminder_id>', methods=['DELETE'])
@login_required
def delete_reminder(reminder_id):
    reminder = current_user.reminders.filter_by(id=reminder_id).first()
    if reminder is None:
        abort(404, description='Reminder not found')
    db.session.delete(reminder)
    db.session.commit()
    return jsonify({'deleted': reminder_id})


@bp.route('/price-alerts')
@login_required
def list_price_alerts():
    alerts = current_user.price_alerts.order_by(PriceAlert.id).all()
    return jsonify({'alerts': [a.to_dict() for a in alerts]})


@bp.route('/price-alerts', methods=['POST'])
@login_required
def add_price_alert():
    form = PriceAlertForm()
    if not form.validate_on_submit():
        return form_errors(form)
    alert = PriceAlert(user_id=current_user.id, crop=form.crop.data.strip(),
                       threshold=form.threshold.data, condition=form.condition.data)
    db.session.add(alert)
    db.session.commit()
    return jsonify(alert.to_dict()), 201


@bp.route('/price-alerts/<int:alert_id>', methods=['DELETE'])
@login_required
def delete_price_alert(alert_id):
    alert = current_user.price_alerts.filter_by(id=alert_id).first()
    if alert is None:
        abort(404, description='Price alert not found')
    db.session.delete(alert)
    db.session.commit()
    return jsonify({'deleted': alert_id})


@bp.route('/price-alerts/check')
@login_required
def check_prices():
    location = request.args.get('location')
    if not location:
        return jsonify({'error': 'Please select a state.'}), 400
    alerts = current_user.price_alerts.order_by(PriceAlert.id).all()
    return jsonify({'results': check_price_alerts(alerts, location)})


@bp.route('/weather-alerts')
@login_required
def weather_alert_settings():
    settings = WeatherAlertSettings.for_user(current_user)
    db.session.commit()
    return jsonify(settings.to_dict())


@bp.route('/weather-alerts', methods=['POST'])
@login_required
def save_weather_alert_settings():
    form = WeatherAlertSettingsForm()
    if not form.validate_on_submit():
        return form_errors(form)
    settings = WeatherAlertSettings.for_user(current_user)
    settings.rain = form.rain.data
    settings.frost = form.frost.data
    settings.high_wind = form.high_wind.data
    db.session.commit()
    return jsonify(settings.to_dict())


@bp.route('/weather-alerts/check')
@login_required
def check_weather():
    location = request.args.get('location') or current_user.location
    if not location:
        return jsonify({'error': 'Please provide a location.'}), 400
    api_key = current_app.config.get('OPENWEATHERMAP_API_KEY')
    if not api_key:
        raise WeatherError('OpenWeatherMap API key is not configured.')

    settings = WeatherAlertSettings.for_user(current_user)
    db.session.commit()
    current = weather.get_current_weather(location, api_key)
    forecast = weather.get_daily_forecast(location, api_key)
    return jsonify({'location': current['location'], 'alerts': check_weather_alerts(settings, current, forecast)})
