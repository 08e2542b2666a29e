"""
Fertilizer, pesticide and seed calculators for the crop and fruit pages.
"""
from ekheti.errors import CalculatorError

# Acres per unit
LAND_UNITS = {
    'acre': 1,
    'hectare': 2.47105,
    'sqmeter': 0.000247105,
    'sqfeet': 0.0000229568,
}

WATER_PER_ACRE = 150  # litres of spray solution

ITEMS = {
    'wheat': {
        'type': 'crop',
        'npk': '20-20-20',
        'fertilizer': {'urea': 50, 'dap': 25, 'potash': 20},
        'pesticides': {
            'rust': {'name': 'Propiconazole', 'dosage': 1},
            'aphids': {'name': 'Imidacloprid', 'dosage': 0.5},
        },
        'seed_rate': 40,
    },
    'rice': {
        'type': 'crop',
        'npk': '15-15-15',
        'fertilizer': {'urea': 45, 'dap': 20, 'potash': 15},
        'pesticides': {
            'blast': {'name': 'Tricyclazole', 'dosage': 0.6},
            'stem-borer': {'name': 'Cartap Hydrochloride', 'dosage': 1},
        },
        'seed_rate': 20,
    },
    'mango': {
        'type': 'fruit',
        'npk': '10-10-10',
        'fertilizer': {'urea': 30, 'dap': 15, 'potash': 30},
        'pesticides': {
            'powdery-mildew': {'name': 'Hexaconazole', 'dosage': 1},
            'fruit-fly': {'name': 'Spinosad', 'dosage': 0.3},
        },
        'seed_rate': 0,
    },
    'apple': {
        'type': 'fruit',
        'npk': '12-15-12',
        'fertilizer': {'urea': 35, 'dap': 20, 'potash': 25},
        'pesticides': {
            'scab': {'name': 'Myclobutanil', 'dosage': 0.5},
            'codling-moth': {'name': 'Deltamethrin', 'dosage': 0.7},
        },
        'seed_rate': 0,
    },
}


def items_for(item_type=None):
    """Item names, optionally only crops or only fruits."""
    return [name for name, item in ITEMS.items() if item_type in (None, item['type'])]


def _item(name):
    item = ITEMS.get((name or '').lower())
    if item is None:
        raise CalculatorError(f"Unknown crop or fruit: {name}")
    return item


def to_acres(land_size, unit='acre'):
    if unit not in LAND_UNITS:
        raise CalculatorError(f"Unknown land unit: {unit}")
    if land_size is None or land_size <= 0:
        raise CalculatorError("Land size must be a positive number.")
    return land_size * LAND_UNITS[unit]


def calculate_fertilizer(item_name, land_size, unit='acre'):
    item = _item(item_name)
    acres = to_acres(land_size, unit)
    result = {name: round(rate * acres, 2) for name, rate in item['fertilizer'].items()}
    result['npk'] = item['npk']
    return result


def calculate_pesticide(item_name, pest, land_size, unit='acre'):
    item = _item(item_name)
    pesticide = item['pesticides'].get(pest)
    if pesticide is None:
        raise CalculatorError(f"Unknown pest or disease for {item_name}: {pest}")
    water = WATER_PER_ACRE * to_acres(land_size, unit)
    return {
        'pesticide': pesticide['name'],
        'water': round(water, 2),
        'pesticideAmount': round(water * pesticide['dosage'], 2),
    }


def calculate_seed(item_name, land_size, unit='acre'):
    item = _item(item_name)
    if not item['seed_rate']:
        raise CalculatorError(f"No seed rate available for {item_name}.")
    return {'seed': round(item['seed_rate'] * to_acres(land_size, unit), 2)}
