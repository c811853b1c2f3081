"""
Assembles the named regions of the viewer (map layer, legend, chart, marker and notice) from selection requests.
"""
import logging
import geojson

from .exceptions import QueryFailed
from .gee import methods as gee
from .helpers import generate_figure

log = logging.getLogger(f'tethys.apps.{__name__}')

MAP_LAYER = 'map_layer'
LEGEND = 'legend'
CHART = 'chart'
MARKER = 'marker'
NOTICE = 'notice'


class PresentationAdapter:
    """
    Runs the Earth Engine queries for a SelectionController and returns region updates.

    Each update is a dict with the generation it belongs to and a "regions" dict. A region mapped to None
    is cleared; a region absent from the dict is left as is.
    """

    def __init__(self, controller, gateway=gee):
        self.controller = controller
        self.gateway = gateway

    def show_product(self, name):
        """
        Select a product and build its map layer and legend. Clears the chart and marker of the previous product.

        Raises:
            ProductNotFound: if the name is not in the catalog.
        """
        layer_request, legend_request = self.controller.product_changed(name)
        regions = {CHART: None, MARKER: None, NOTICE: None}

        try:
            regions[MAP_LAYER] = self.build_layer(layer_request)
            regions[LEGEND] = self.build_legend(legend_request)
        except QueryFailed as e:
            # The previous layer stays on the map, but its legend no longer describes the active product
            regions = {LEGEND: None, CHART: None, MARKER: None, NOTICE: self.build_notice(e, product=name)}

        return self._update(layer_request.generation, regions)

    def show_point(self, lon, lat):
        """
        Chart the active product at a location and mark it on the map.

        Returns:
            dict: the region update, or None if a newer product was selected while the time series was computed.

        Raises:
            NoSelection: if no product is active.
            ValueError: if the location is invalid.
        """
        chart_request, marker_request = self.controller.map_clicked(lon, lat)

        try:
            regions = {
                CHART: self.build_chart(chart_request),
                MARKER: self.build_marker(marker_request),
                NOTICE: None,
            }
        except QueryFailed as e:
            regions = {NOTICE: self.build_notice(e)}

        regions = self.controller.accept(chart_request, regions)

        if regions is None:
            return None

        return self._update(chart_request.generation, regions)

    def build_layer(self, layer_request):
        return {
            'url': self.gateway.get_composite_tile_url(layer_request),
            'label': layer_request.label,
        }

    def build_legend(self, legend_request):
        scaling = self.controller.scaling
        return {
            'title': 'Legend',
            'ticks': scaling.legend_ticks(legend_request.product_name),
            'color_bar_url': self.gateway.get_color_ramp_thumbnail_url(legend_request.visualization.palette),
        }

    def build_chart(self, chart_request):
        """
        Query the time series of the request and build a plotly figure with values in display units.
        """
        time_series = self.gateway.get_time_series(chart_request)
        value_column = time_series.columns[1]
        time_series[value_column] = self.controller.scaling.scale_values(
            chart_request.product_name, time_series[value_column]
        )

        log.debug(f'Time Series: {time_series}')

        return generate_figure(
            figure_title=f'{chart_request.label} Time Series',
            time_series=time_series,
            color=chart_request.color,
        )

    @staticmethod
    def build_marker(marker_request):
        return geojson.Feature(
            geometry=geojson.Point(marker_request.point),
            properties={'name': 'Selected Location', 'color': 'black'},
        )

    @staticmethod
    def build_notice(error, product=None):
        notice = {'level': 'warning', 'message': str(error), 'dismissable': True}

        if product is not None:
            notice['product'] = product

        return notice

    @staticmethod
    def _update(generation, regions):
        return {'generation': generation, 'regions': regions}
