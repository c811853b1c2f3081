import json

from django.http import HttpResponseNotAllowed
from tethys_sdk.routing import controller
from tethys_sdk.gizmos import SelectInput, MapView, MVView, PlotlyView

from .. import handlers
from ..app import App
from ..gee.products import build_catalog, DEFAULT_POINT, DEFAULT_ZOOM
from .home import PORTAL_TITLE, PORTAL_DESCRIPTION, CREDITS

catalog = build_catalog()


@controller(url='viewer')
def viewer(request):
    """
    Controller for the app viewer page.
    """
    selection_controller = handlers.start_session(request, catalog)

    product_select = SelectInput(
        name='product',
        display_text='Product',
        options=[(name, name) for name in catalog.list_names()],
        initial=[catalog.default],
    )

    map_view = MapView(
        height='100%',
        width='100%',
        controls=[
            'ZoomSlider', 'Rotate', 'FullScreen',
            {'ZoomToExtent': {
                'projection': 'EPSG:4326',
                'extent': [-180, -90, 180, 90]
            }}
        ],
        basemap=[
            {'ESRI': {'layer': 'World_Imagery'}},
            'OpenStreetMap',
            'CartoDB',
        ],
        view=MVView(
            projection='EPSG:4326',
            center=list(DEFAULT_POINT),
            zoom=DEFAULT_ZOOM,
            maxZoom=18,
            minZoom=2
        ),
    )

    context = {
        'title': PORTAL_TITLE,
        'description': PORTAL_DESCRIPTION,
        'credits': CREDITS,
        'product_select': product_select,
        'map_view': map_view,
        'default_product': catalog.default,
        'default_point': json.dumps(list(DEFAULT_POINT)),
        'generation': selection_controller.generation,
    }

    return App.render(request, 'viewer.html', context)


@controller(url='viewer/select-product')
def select_product(request):
    """
    Controller to handle product selection. Returns the map layer and legend of the selected product.
    """
    if request.method != 'POST':
        return HttpResponseNotAllowed(['POST'])

    return handlers.select_product(request, catalog)


@controller(url='viewer/get-time-series-plot')
def get_time_series_plot(request):
    """
    Controller to handle map clicks. Renders the time series plot of the active product at the clicked location.
    """
    if request.method != 'POST':
        return HttpResponseNotAllowed(['POST'])

    context = handlers.time_series_plot(request, catalog)
    figure = context.pop('figure', None)

    if figure is not None:
        context['plot_view'] = PlotlyView(figure, height='200px', width='100%')

    return App.render(request, 'plot.html', context)
