import pytest

from ekheti import calculators
from ekheti.errors import CalculatorError


def test_fertilizer_per_acre():
    assert calculators.calculate_fertilizer('wheat', 2) == {'urea': 100, 'dap': 50, 'potash': 40, 'npk': '20-20-20'}


def test_fertilizer_converts_hectares():
    result = calculators.calculate_fertilizer('Rice', 1, 'hectare')
    assert result['urea'] == pytest.approx(111.2, abs=0.01)
    assert result['npk'] == '15-15-15'


def test_pesticide_water_and_dosage():
    result = calculators.calculate_pesticide('mango', 'fruit-fly', 2)
    assert result == {'pesticide': 'Spinosad', 'water': 300, 'pesticideAmount': 90}


def test_seed_rate_for_crops_only():
    assert calculators.calculate_seed('rice', 3) == {'seed': 60}
    with pytest.raises(CalculatorError):
        calculators.calculate_seed('apple', 3)


def test_small_units():
    result = calculators.calculate_seed('wheat', 10000, 'sqmeter')
    assert result['seed'] == pytest.approx(98.84, abs=0.01)


@pytest.mark.parametrize('call', [
    lambda: calculators.calculate_fertilizer('banana', 1),
    lambda: calculators.calculate_fertilizer('wheat', 0),
    lambda: calculators.calculate_fertilizer('wheat', 1, 'bigha'),
    lambda: calculators.calculate_pesticide('wheat', 'blast', 1),
])
def test_invalid_inputs(call):
    with pytest.raises(CalculatorError) as exc:
        call()
    assert exc.value.status_code == 400


def test_items_by_type():
    assert calculators.items_for('crop') == ['wheat', 'rice']
    assert calculators.items_for('fruit') == ['mango', 'apple']
