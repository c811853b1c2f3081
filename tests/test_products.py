import datetime as dt
from collections import OrderedDict

import pytest

from tethysapp.vegetation_insights.exceptions import ProductNotFound
from tethysapp.vegetation_insights.gee.products import PRODUCTS, DEFAULT_PRODUCT, build_catalog


def test_lookup_every_registered_product(catalog):
    for name in PRODUCTS:
        product = catalog.lookup(name)
        assert product.name == name
        assert product.source_ref.collection == PRODUCTS[name]['collection']
        assert product.source_ref.band == PRODUCTS[name]['band']


def test_lookup_unknown_product(catalog):
    with pytest.raises(ProductNotFound) as excinfo:
        catalog.lookup('Soil Moisture')

    assert 'Soil Moisture' in str(excinfo.value)
    assert 'NDVI' in str(excinfo.value)


def test_product_not_found_is_a_key_error(catalog):
    with pytest.raises(KeyError):
        catalog.lookup('Soil Moisture')


def test_list_names_in_insertion_order(catalog):
    names = catalog.list_names()

    assert names == (
        'Evapotranspiration',
        'Leaf Area Index',
        'Fraction of Photosynthetically Active Radiation',
        'NDVI',
        'Land Surface Temperature',
        'Mean Air Temperature',
        'Precipitation',
    )
    assert len(set(names)) == len(names)
    assert names == catalog.list_names()


def test_default_product(catalog):
    assert catalog.default == DEFAULT_PRODUCT
    assert DEFAULT_PRODUCT in catalog


def test_date_range_is_parsed(catalog):
    product = catalog.lookup('NDVI')

    assert product.date_range == (dt.date(2019, 1, 1), dt.date(2019, 12, 31))
    assert product.date_range_str == ('2019-01-01', '2019-12-31')


def test_products_are_immutable(catalog):
    product = catalog.lookup('NDVI')

    with pytest.raises(AttributeError):
        product.scale_factor = 1

    assert isinstance(product.visualization.palette, tuple)


def test_vis_params(catalog):
    vis_params = catalog.lookup('Precipitation').visualization.to_vis_params()
    assert vis_params == {'min': 0, 'max': 0.02, 'palette': ['white', 'blue']}


def _entry(**overrides):
    entry = {
        'collection': 'MODIS/061/MOD13A1',
        'band': 'NDVI',
        'date_range': ('2019-01-01', '2019-12-31'),
        'vis_params': {'min': 0, 'max': 1, 'palette': ['white', 'green']},
        'label': 'Test',
        'scale_factor': 1,
    }
    entry.update(overrides)
    return entry


@pytest.mark.parametrize('overrides, message', [
    ({'scale_factor': 0}, 'scale factor'),
    ({'vis_params': {'min': 1, 'max': 1, 'palette': ['white']}}, '"min"'),
    ({'vis_params': {'min': 0, 'max': 1, 'palette': []}}, 'palette'),
    ({'date_range': ('2019-12-31', '2019-01-01')}, 'start date'),
    ({'date_range': ('2019/01/01', '2019-12-31')}, 'YYYY-MM-DD'),
])
def test_invalid_entries_are_rejected(overrides, message):
    with pytest.raises(ValueError, match=message):
        build_catalog(OrderedDict([('Test', _entry(**overrides))]), default=None)


def test_unknown_default_is_rejected():
    with pytest.raises(ProductNotFound):
        build_catalog(OrderedDict([('Test', _entry())]), default='NDVI')


def test_catalog_without_default():
    catalog = build_catalog(OrderedDict([('Test', _entry())]), default=None)

    assert catalog.default is None
    assert len(catalog) == 1
    assert [p.name for p in catalog] == ['Test']
