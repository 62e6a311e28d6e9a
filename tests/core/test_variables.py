"""
Tests for VariableDescriptor, MissingSpec and the value helpers.
"""

import pytest

from comparemeans.core.exceptions import ValidationError
from comparemeans.core.variables import (
    MissingSpec,
    VariableDescriptor,
    as_number,
    format_value,
    values_equal,
)


class TestMissingSpec:

    def test_none_is_empty(self):
        assert MissingSpec.from_dict(None).is_empty

    def test_discrete_and_range(self):
        spec = MissingSpec.from_dict({'discrete': [99, 'NA'], 'range': {'min': -9, 'max': -1}})
        assert spec.discrete == (99, 'NA')
        assert spec.range == (-9.0, -1.0)

    def test_scalar_discrete_wrapped(self):
        assert MissingSpec.from_dict({'discrete': 99}).discrete == (99,)

    def test_inverted_range_rejected(self):
        with pytest.raises(ValidationError, match='min'):
            MissingSpec.from_dict({'range': {'min': 5, 'max': 1}})


class TestVariableDescriptor:

    def test_from_dict(self):
        var = VariableDescriptor.from_dict({
            'name': 'dose',
            'label': 'Dose group',
            'measure': 'nominal',
            'values': [{'value': 1, 'label': 'Low'}],
        })
        assert var.name == 'dose'
        assert var.display_name == 'Dose group'
        assert not var.is_numeric_type
        assert var.value_label(1) == 'Low'
        assert var.value_label('1') == 'Low'
        assert var.value_label(2) is None

    def test_measure_defaults_to_unknown(self):
        assert VariableDescriptor.from_dict({'name': 'x'}).measure == 'unknown'

    @pytest.mark.parametrize('measure', ['scale', 'date'])
    def test_numeric_types(self, measure):
        assert VariableDescriptor.from_dict({'name': 'x', 'measure': measure}).is_numeric_type

    def test_missing_name(self):
        with pytest.raises(ValidationError, match='name'):
            VariableDescriptor.from_dict({'measure': 'scale'})

    def test_unknown_measure(self):
        with pytest.raises(ValidationError, match='measure'):
            VariableDescriptor.from_dict({'name': 'x', 'measure': 'interval'})

    def test_display_name_falls_back_to_name(self):
        assert VariableDescriptor(name='x').display_name == 'x'

    def test_to_dict_round_trips_wire_keys(self):
        raw = {'name': 'x', 'measure': 'scale', 'missing': {'discrete': [9]}}
        out = VariableDescriptor.from_dict(raw).to_dict()
        assert out['name'] == 'x'
        assert out['missing'] == {'discrete': [9]}


class TestValueHelpers:

    @pytest.mark.parametrize('value, expected', [
        (1, 1.0), ('2.5', 2.5), (' 3 ', 3.0), ('', None), ('abc', None),
        (None, None), (True, None), (float('nan'), None), (float('inf'), None),
    ])
    def test_as_number(self, value, expected):
        assert as_number(value) == expected

    def test_values_equal_numeric(self):
        assert values_equal('1', 1.0)
        assert not values_equal(1, 2)

    def test_values_equal_text(self):
        assert values_equal('a', 'a')
        assert not values_equal('a', 'A')

    def test_format_value(self):
        assert format_value(1.0) == '1'
        assert format_value(2.5) == '2.5'
        assert format_value('x') == 'x'
