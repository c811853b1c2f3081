import pandas as pd
import pytest


def test_ndvi_chart_value(scaling):
    assert scaling.scale_factor_for('NDVI') == 10000
    assert scaling.scale_value('NDVI', 4500) == pytest.approx(0.45)


def test_ndvi_legend(scaling):
    assert scaling.legend_range('NDVI') == pytest.approx((-0.2, 1.0))
    assert scaling.legend_ticks('NDVI') == ['-0.20', '0.40', '1.00']


def test_land_surface_temperature(scaling):
    assert scaling.scale_factor_for('Land Surface Temperature') == 200
    assert f"{scaling.scale_value('Land Surface Temperature', 15000):.2f}" == '75.00'
    assert scaling.legend_ticks('Land Surface Temperature') == ['65.00', '73.75', '82.50']


def test_unscaled_products(scaling):
    assert scaling.scale_value('Mean Air Temperature', 290) == 290
    assert scaling.legend_ticks('Precipitation') == ['0.00', '0.01', '0.02']


def test_no_data_passes_through(scaling):
    assert scaling.scale_value('NDVI', None) is None
    assert scaling.scale_values('NDVI', [None, 10000]) == [None, 1]


def test_scale_series(scaling):
    scaled = scaling.scale_values('Evapotranspiration', pd.Series([10, 25]))
    assert scaled.tolist() == [1.0, 2.5]


def test_chart_and_legend_share_factor(catalog, scaling):
    for product in catalog:
        factor = scaling.scale_factor_for(product.name)
        vmin, vmax = scaling.legend_range(product.name)

        assert factor == product.scale_factor
        assert vmin == pytest.approx(scaling.scale_value(product.name, product.visualization.min))
        assert vmax == pytest.approx(scaling.scale_value(product.name, product.visualization.max))


def test_scaled_legend_increases(catalog, scaling):
    for name in catalog.list_names():
        vmin, vmax = scaling.legend_range(name)
        assert vmin < vmax, name


def test_scale_plain_sequence(scaling):
    scaled = scaling.scale_values('NDVI', (4500, None))

    assert isinstance(scaled, list)
    assert scaled == [pytest.approx(0.45), None]


def test_scale_series_with_missing_values(scaling):
    scaled = scaling.scale_values('NDVI', pd.Series([4500, None], dtype='float64'))

    assert isinstance(scaled, pd.Series)
    assert scaled.iloc[0] == pytest.approx(0.45)
    assert pd.isna(scaled.iloc[1])
