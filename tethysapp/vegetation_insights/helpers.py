import datetime as dt
import logging
import pandas as pd
from plotly import graph_objs as go

log = logging.getLogger(f'tethys.apps.{__name__}')

VALID_ORIENT_VALUES = ('dict', 'list', 'split', 'records', 'index')


def generate_figure(figure_title, time_series, color=None):
    """
    Generate a figure from a time series Pandas DataFrame.

    Args:
        figure_title(str): Title of the figure.
        time_series(pandas.DataFrame): time series with epoch milliseconds in the first column and values in the second.
        color(str): hex color of the markers, with or without leading "#".

    Returns:
        dict: plotly figure with "data" and "layout".
    """
    column_name = time_series.columns[1]
    marker = {'size': 4}

    # Earth Engine palettes use bare hex codes
    if color and _is_hex(color):
        color = f'#{color}'

    if color:
        marker['color'] = color

    series_plot = go.Scatter(
        x=pd.to_datetime(time_series.iloc[:, 0], unit='ms'),
        y=time_series.iloc[:, 1],
        name=column_name,
        mode='markers',
        marker=marker,
    )

    figure = {
        'data': [series_plot],
        'layout': {
            'title': {
                'text': figure_title,
                'pad': {
                    'b': 5,
                },
            },
            'xaxis': {
                'title': 'Date',
                'tickformat': '%m-%y',
                'nticks': 7,
            },
            'yaxis': {'title': column_name if not time_series.empty else 'No Data'},
            'showlegend': False,
            'margin': {
                'l': 40,
                'r': 10,
                't': 80,
                'b': 10
            }
        }
    }

    return figure


def _is_hex(color):
    try:
        int(color, 16)
    except ValueError:
        return False
    return len(color) in (3, 6)


def compute_dates_for_product(product):
    """
    Compute default dates and valid date range for given product.

    Args:
        product (ProductDefinition): The product definition from the catalog.

    Returns:
        dict<default_start_date,default_end_date,beg_valid_date_range,end_valid_date_range>: dict with date strings formatted: %Y-%m-%d.
    """
    beg_valid_date_range, end_valid_date_range = product.date_range_str

    product_dates = {
        'default_start_date': beg_valid_date_range,
        'default_end_date': end_valid_date_range,
        'beg_valid_date_range': beg_valid_date_range,
        'end_valid_date_range': end_valid_date_range
    }

    return product_dates


def parse_time_series_params(data, catalog):
    """
    Validate the parameters of a time series REST request.

    Args:
        data (dict): request parameters.
        catalog (ProductCatalog): the product catalog.

    Returns:
        dict<product,lon,lat,date_range,scale,orient>: validated parameters.

    Raises:
        ValueError: with a message describing the first invalid parameter.
    """
    product_name = data.get('product', None)
    lon_str = data.get('lon', None)
    lat_str = data.get('lat', None)
    start_date_str = data.get('start_date', None)
    end_date_str = data.get('end_date', None)
    scale_str = data.get('scale', 500)
    orient = data.get('orient', 'list')

    # product
    if not product_name or product_name not in catalog:
        valid_product_str = '", "'.join(catalog.list_names())
        raise ValueError(f'The "product" parameter is required. Valid products include: "{valid_product_str}".')

    product = catalog.lookup(product_name)

    # location
    try:
        lon = float(lon_str)
        lat = float(lat_str)
    except (TypeError, ValueError):
        raise ValueError('The "lon" and "lat" parameters are required and must be valid numbers.')

    if not -180 <= lon <= 180 or not -90 <= lat <= 90:
        raise ValueError(f'The location ({lon}, {lat}) is not valid. "lon" must be between -180 and 180 '
                         f'and "lat" between -90 and 90.')

    # dates
    product_dates = compute_dates_for_product(product)

    if not start_date_str:
        start_date_str = product_dates['default_start_date']

    if not end_date_str:
        end_date_str = product_dates['default_end_date']

    try:
        start_date = dt.datetime.strptime(start_date_str, '%Y-%m-%d').date()
        end_date = dt.datetime.strptime(end_date_str, '%Y-%m-%d').date()
    except ValueError:
        raise ValueError('Invalid date format. Please use "YYYY-MM-DD".')

    beg_valid_date_range, end_valid_date_range = product.date_range

    if start_date < beg_valid_date_range or start_date > end_valid_date_range:
        raise ValueError(
            f'The date {start_date_str} is not a valid "start_date" for "{product_name}". '
            f'It must occur between {product_dates["beg_valid_date_range"]} '
            f'and {product_dates["end_valid_date_range"]}.'
        )

    if end_date < beg_valid_date_range or end_date > end_valid_date_range:
        raise ValueError(
            f'The date {end_date_str} is not a valid "end_date" for "{product_name}". '
            f'It must occur between {product_dates["beg_valid_date_range"]} '
            f'and {product_dates["end_valid_date_range"]}.'
        )

    if start_date > end_date:
        raise ValueError(
            f'The "start_date" must occur before the "end_date". Dates given: '
            f'start_date = {start_date_str}; end_date = {end_date_str}.'
        )

    # orient
    if orient not in VALID_ORIENT_VALUES:
        valid_orient_str = '", "'.join(VALID_ORIENT_VALUES)
        raise ValueError(
            f'The value "{orient}" is not valid for parameter "orient". '
            f'Must be one of: "{valid_orient_str}". Defaults to "list" '
            f'if not given.'
        )

    # scale
    try:
        scale = float(scale_str)
    except (TypeError, ValueError):
        raise ValueError(f'The "scale" parameter must be a valid number, but "{scale_str}" was given.')

    if scale <= 0:
        raise ValueError(f'The "scale" parameter must be positive, but "{scale_str}" was given.')

    return {
        'product': product,
        'lon': lon,
        'lat': lat,
        'date_range': (start_date, end_date),
        'scale': scale,
        'orient': orient,
    }
