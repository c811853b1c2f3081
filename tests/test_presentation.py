import pytest

from tethysapp.vegetation_insights.exceptions import QueryFailed, NoSelection, ProductNotFound
from tethysapp.vegetation_insights.presentation import PresentationAdapter
from tethysapp.vegetation_insights.selection import SelectionController


@pytest.fixture
def adapter(controller, gateway):
    return PresentationAdapter(controller, gateway=gateway)


def test_show_product(adapter, gateway):
    update = adapter.show_product('NDVI')
    regions = update['regions']

    assert update['generation'] == 1
    assert regions['map_layer'] == {
        'url': 'https://earthengine.googleapis.com/tiles/{z}/{x}/{y}',
        'label': 'Normalized Difference Vegetation Index',
    }
    assert regions['legend']['ticks'] == ['-0.20', '0.40', '1.00']
    assert regions['legend']['color_bar_url'] == 'https://earthengine.googleapis.com/thumbnails/legend'
    assert regions['chart'] is None
    assert regions['marker'] is None
    assert regions['notice'] is None

    layer_request = gateway.get_composite_tile_url.call_args[0][0]
    assert layer_request.source_ref.band == 'NDVI'
    gateway.get_color_ramp_thumbnail_url.assert_called_once_with(layer_request.visualization.palette)


def test_show_product_unknown(adapter):
    with pytest.raises(ProductNotFound):
        adapter.show_product('Soil Moisture')


def test_show_product_query_failed(adapter, gateway):
    gateway.get_composite_tile_url.side_effect = QueryFailed('Earth Engine memory limit exceeded')

    update = adapter.show_product('NDVI')

    # The previous layer stays, the legend, chart and marker of the previous product are cleared
    assert update['regions'] == {
        'legend': None,
        'chart': None,
        'marker': None,
        'notice': {
            'level': 'warning',
            'message': 'Earth Engine memory limit exceeded',
            'dismissable': True,
            'product': 'NDVI',
        },
    }
    assert 'map_layer' not in update['regions']


def test_show_product_legend_failure_clears_legend(adapter, gateway):
    adapter.show_product('Land Surface Temperature')
    gateway.get_color_ramp_thumbnail_url.side_effect = QueryFailed('Thumbnail failed.')

    update = adapter.show_product('NDVI')

    assert update['regions']['legend'] is None
    assert update['regions']['notice']['product'] == 'NDVI'
    assert adapter.controller.active_product.name == 'NDVI'


def test_show_point_scales_chart_values(adapter):
    adapter.show_product('NDVI')
    update = adapter.show_point(-121.74, 38.54)
    regions = update['regions']

    figure = regions['chart']
    series = figure['data'][0]

    assert list(series.y) == pytest.approx([0.45, 0.5])
    assert series.marker.color == '#ce7e45'
    assert figure['layout']['title']['text'] == 'Normalized Difference Vegetation Index Time Series'
    assert regions['marker']['geometry']['coordinates'] == [-121.74, 38.54]
    assert regions['notice'] is None


def test_show_point_land_surface_temperature(adapter, gateway):
    adapter.show_product('Land Surface Temperature')
    update = adapter.show_point(0, 0)

    assert list(update['regions']['chart']['data'][0].y) == pytest.approx([22.5, 25.0])


def test_show_point_query_failed(adapter, gateway):
    gateway.get_time_series.side_effect = QueryFailed('Computation timed out.')

    update = adapter.show_point(0, 0)

    assert update['regions'] == {
        'notice': {'level': 'warning', 'message': 'Computation timed out.', 'dismissable': True}
    }


def test_show_point_without_selection(catalog, gateway):
    adapter = PresentationAdapter(SelectionController(catalog, select_default=False), gateway=gateway)

    with pytest.raises(NoSelection):
        adapter.show_point(0, 0)

    gateway.get_time_series.assert_not_called()


def test_show_point_discards_stale_chart(controller, gateway):
    adapter = PresentationAdapter(controller, gateway=gateway)
    adapter.show_product('NDVI')
    query = gateway.get_time_series.side_effect

    def select_while_querying(chart_request):
        # The user picks another product before the NDVI time series resolves
        controller.product_changed('Leaf Area Index')
        return query(chart_request)

    gateway.get_time_series.side_effect = select_while_querying

    assert adapter.show_point(0, 0) is None
    assert controller.active_product.name == 'Leaf Area Index'
