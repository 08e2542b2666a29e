"""
Advisory, disease detection, crop simulation and calculator endpoints.
"""
from flask import abort, jsonify, request, current_app
from flask_login import current_user, login_required

from ekheti import calculators
from ekheti.advisory import bp
from ekheti.ai.advisory import integrate_weather_data_for_advisory
from ekheti.ai.disease import analyze_image
from ekheti.ai.media import checked_image_uri, image_data_uri
from ekheti.ai.simulation import simulate_crop_profitability
from ekheti.extensions import db
from ekheti.forms import AdvisoryForm, CalculatorForm, DiseaseImageForm, SimulationForm, form_errors
from ekheti.models.advisory import SavedAdvisory
from ekheti.utils import reply_language

ITEM_TYPES = {'crop': 'Crop', 'fruit': 'Fruit'}


def _item_type(value):
    item_type = ITEM_TYPES.get(value.lower())
    if item_type is None:
        abort(404, description=f'Unknown item type: {value}')
    return item_type


@bp.route('/advisory/<item_type>', methods=['GET'])
@login_required
def saved_advisory(item_type):
    """The last advisory this user received for crops or fruits."""
    item_type = _item_type(item_type)
    return jsonify({'advisory': SavedAdvisory.recall(current_user, item_type),
                    'location': current_user.location})


@bp.route('/advisory/<item_type>', methods=['POST'])
@login_required
def get_advisory(item_type):
    item_type = _item_type(item_type)
    form = AdvisoryForm()
    if not form.validate_on_submit():
        return form_errors(form)

    output = integrate_weather_data_for_advisory(
        crop_type=form.crop_type.data,
        soil_details=form.soil_details.data,
        current_stage=form.current_stage.data,
        location=form.location.data,
        advisory=f'Provide general farming advice for {form.crop_type.data}.',
        language=reply_language(),
    )
    result = {'advisory': output.integrated_advisory}
    if output.weather is not None:
        result['weather'] = output.weather.to_json()
    else:
        result['warning'] = 'Could not fetch weather data. The advisory is based on general information.'

    SavedAdvisory.remember(current_user, item_type, result)
    current_user.location = form.location.data
    db.session.commit()
    return jsonify(result)


@bp.route('/disease-detection/<item_type>', methods=['POST'])
@login_required
def disease_detection(item_type):
    item_type = _item_type(item_type)
    form = DiseaseImageForm()
    if not form.validate_on_submit():
        return form_errors(form)

    max_size = current_app.config['MAX_IMAGE_SIZE']
    if form.photo.data:
        photo_data_uri = image_data_uri(form.photo.data.read(), max_size)
    else:
        photo_data_uri = checked_image_uri(form.photo_data_uri.data, max_size)

    analysis = analyze_image(item_type, photo_data_uri, language=reply_language())
    current_app.logger.info('%s disease detection: %s', item_type, analysis.disease_name)
    return jsonify(analysis.to_json())


@bp.route('/crop-simulation', methods=['POST'])
@login_required
def crop_simulation():
    form = SimulationForm()
    if not form.validate_on_submit():
        return form_errors(form)

    result = simulate_crop_profitability(
        land_size_in_acres=form.land_size.data,
        crop_name=form.crop_name.data,
        input_costs=form.input_costs.data,
        location=form.location.data,
    )
    return jsonify(result.to_json())


@bp.route('/calculators/items')
@login_required
def calculator_items():
    item_type = request.args.get('type')
    items = {name: {'type': calculators.ITEMS[name]['type'],
                    'pests': list(calculators.ITEMS[name]['pesticides']),
                    'hasSeedRate': bool(calculators.ITEMS[name]['seed_rate'])}
             for name in calculators.items_for(item_type)}
    return jsonify({'items': items, 'units': list(calculators.LAND_UNITS)})


@bp.route('/calculators/<kind>', methods=['POST'])
@login_required
def calculate(kind):
    form = CalculatorForm()
    if not form.validate_on_submit():
        return form_errors(form)

    item, land_size, unit = form.item.data, form.land_size.data, form.unit.data
    if kind == 'fertilizer':
        result = calculators.calculate_fertilizer(item, land_size, unit)
    elif kind == 'pesticide':
        result = calculators.calculate_pesticide(item, form.pest.data, land_size, unit)
    elif kind == 'seed':
        result = calculators.calculate_seed(item, land_size, unit)
    else:
        abort(404, description=f'Unknown calculator: {kind}')
    return jsonify(result)
