import logging
import ee
from ee.ee_exception import EEException
import pandas as pd
from . import params as gee_account
from ..exceptions import QueryFailed

log = logging.getLogger(f'tethys.apps.{__name__}')

_initialized = False


def initialize():
    """
    Initialize the Earth Engine client once per process.
    """
    global _initialized

    if _initialized:
        return

    if gee_account.service_account:
        try:
            credentials = ee.ServiceAccountCredentials(gee_account.service_account, gee_account.private_key)
            ee.Initialize(credentials, project=gee_account.project)
            log.info('Successfully initialized GEE using service account.')
            _initialized = True
        except EEException:
            log.warning('Unable to initialize GEE using service account. If installing ignore this warning.')
    else:
        try:
            ee.Initialize(project=gee_account.project)
            _initialized = True
        except EEException:
            log.warning('Unable to initialize GEE with local credentials. If installing ignore this warning.')


def _filtered_collection(source_ref, date_range):
    start, end = (d.strftime('%Y-%m-%d') for d in date_range)
    # filterDate excludes the end date, advance one day to keep the range inclusive
    return ee.ImageCollection(source_ref.collection) \
        .filterDate(start, ee.Date(end).advance(1, 'day')) \
        .select(source_ref.band)


def get_composite_tile_url(layer_request):
    """
    Get tile url for the mean composite of a product over its date range.

    Args:
        layer_request (LayerRequest): the layer to render.

    Returns:
        str: XYZ tile url format.
    """
    source_ref = layer_request.source_ref
    vis_params = layer_request.visualization.to_vis_params()

    log.debug(f'Image Collection Name: {source_ref.collection}')
    log.debug(f'Band Selector: {source_ref.band}')
    log.debug(f'Vis Params: {vis_params}')

    initialize()

    try:
        composite = _filtered_collection(source_ref, layer_request.date_range).mean()
        map_id = composite.getMapId(vis_params)
        return map_id['tile_fetcher'].url_format

    except EEException as e:
        log.exception('An error occurred while attempting to retrieve the image collection asset.')
        raise QueryFailed(f'Unable to load the {layer_request.label} layer: {e}') from e


def get_time_series(chart_request):
    """
    Derive the time series of a product at a point.

    Args:
        chart_request (ChartRequest): the point, product and reduction to chart.

    Returns:
        pandas.DataFrame: columns "Time" (milliseconds since epoch) and the product label, raw values.
    """
    source_ref = chart_request.source_ref
    lon, lat = chart_request.point
    band = source_ref.band

    log.debug(f'Computing Time Series for {source_ref.collection} {band} at ({lon}, {lat})')

    initialize()

    try:
        ee_geometry = ee.Geometry.Point([lon, lat])
        collection = _filtered_collection(source_ref, chart_request.date_range)
        the_reducer = getattr(ee.Reducer, chart_request.reducer)()

        def get_index(image):
            index_value = image.reduceRegion(the_reducer, ee_geometry, chart_request.scale).get(band)
            date = image.get('system:time_start')
            index_image = ee.Image().set('indexValue', [ee.Number(date), index_value])
            return index_image

        index_collection = collection.map(get_index)
        values = index_collection.aggregate_array('indexValue').getInfo()
        log.debug('Values acquired.')

    except EEException as e:
        log.exception('An error occurred while attempting to retrieve the time series.')
        raise QueryFailed(f'Unable to retrieve the {chart_request.label} time series: {e}') from e

    return pd.DataFrame(values or [], columns=['Time', chart_request.label])


def get_color_ramp_thumbnail_url(palette, bbox=(0, 0, 1, 0.1), dimensions='100x10'):
    """
    Get the url of a horizontal color bar image for a palette, used as the legend swatch.
    """
    params = {
        'bbox': list(bbox),
        'dimensions': dimensions,
        'format': 'png',
        'min': 0,
        'max': 1,
        'palette': list(palette),
    }

    initialize()

    try:
        return ee.Image.pixelLonLat().select(0).getThumbURL(params)

    except EEException as e:
        log.exception('An error occurred while attempting to render the legend color bar.')
        raise QueryFailed(f'Unable to render the legend: {e}') from e
