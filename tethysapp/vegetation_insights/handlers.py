"""
Request handling behind the viewer and REST controllers.

Selection state lives in the Django session. The browser numbers its product selections and sends the
number with each request, so a selection arriving after a newer one is ignored. Time series results are
dropped when the session generation moved on while Earth Engine was computing them.
"""
import dataclasses
import logging

import geojson
from django.http import JsonResponse, HttpResponseBadRequest, HttpResponseServerError

from .exceptions import NoSelection, ProductNotFound, QueryFailed
from .gee import methods as gee
from .helpers import parse_time_series_params
from .presentation import PresentationAdapter, CHART, MARKER, NOTICE
from .selection import SelectionController

log = logging.getLogger(f'tethys.apps.{__name__}')

SESSION_KEY = 'vegetation_insights_selection'
SELECTION_NUMBER_KEY = 'vegetation_insights_selection_number'


def load_controller(request, catalog):
    """
    Restore the selection of the current session.
    """
    return SelectionController.from_state(catalog, request.session.get(SESSION_KEY))


def save_controller(request, selection_controller):
    request.session[SESSION_KEY] = selection_controller.dump_state()


def start_session(request, catalog):
    """
    Reset the selection of the session to the default product.
    """
    selection_controller = SelectionController(catalog)
    save_controller(request, selection_controller)
    request.session[SELECTION_NUMBER_KEY] = 0
    return selection_controller


def session_generation(request):
    """
    Get the generation of the session as loaded at the start of this request.
    """
    return (request.session.get(SESSION_KEY) or {}).get('generation', 0)


def stored_session_data(request):
    """
    Get the session data as currently saved, including saves made by concurrent requests.
    """
    return request.session.load()


def stored_generation(request):
    return (stored_session_data(request).get(SESSION_KEY) or {}).get('generation', 0)


def select_product(request, catalog, gateway=gee):
    """
    Select the posted product and build its map layer and legend.

    Returns:
        JsonResponse: "success", the session "generation" (on every branch), and "regions" or "error".
    """
    response_data = {'success': False, 'generation': session_generation(request)}

    try:
        log.debug(f'POST: {request.POST}')

        product = request.POST.get('product', None)
        number = request.POST.get('selection', None)

        if number is not None:
            number = int(number)
            latest = max(request.session.get(SELECTION_NUMBER_KEY, 0),
                         stored_session_data(request).get(SELECTION_NUMBER_KEY, 0))

            if number <= latest:
                log.debug(f'Ignoring selection {number}, selection {latest} was already handled.')
                response_data['stale'] = True
                return JsonResponse(response_data)

            request.session[SELECTION_NUMBER_KEY] = number

        selection_controller = load_controller(request, catalog)
        update = PresentationAdapter(selection_controller, gateway=gateway).show_product(product)
        save_controller(request, selection_controller)

        notice = update['regions'].get(NOTICE)

        response_data.update({
            'success': notice is None,
            'generation': update['generation'],
            'regions': update['regions'],
        })

        if notice:
            response_data['error'] = notice['message']

    except ProductNotFound as e:
        response_data['error'] = str(e)

    except ValueError:
        response_data['error'] = 'The "selection" parameter must be an integer.'

    except Exception as e:
        log.exception('An unexpected error occurred while selecting a product.')
        response_data['error'] = f'Error Processing Request: {e}'

    return JsonResponse(response_data)


def time_series_plot(request, catalog, gateway=gee):
    """
    Chart the active product at the posted location.

    Returns:
        dict: template context with "success", "stale", the session "generation" and either "error" or
            the plotly "figure" and GeoJSON "marker".
    """
    context = {'success': False, 'stale': False, 'generation': session_generation(request)}

    try:
        log.debug(f'POST: {request.POST}')

        lon = request.POST.get('lon', None)
        lat = request.POST.get('lat', None)
        generation = request.POST.get('generation', None)

        if lon is None or lat is None:
            raise ValueError('Please click on the map to select a location.')

        selection_controller = load_controller(request, catalog)

        if generation is not None and not selection_controller.is_current(int(generation)):
            raise ValueError('The selected product has changed. Please click the map again.')

        update = PresentationAdapter(selection_controller, gateway=gateway).show_point(lon, lat)

        # A newer product may have been selected by another request while the time series was computed
        if update is None or update['generation'] != stored_generation(request):
            log.debug('Discarding time series plot for a previous product selection.')
            context['stale'] = True
            return context

        save_controller(request, selection_controller)

        regions = update['regions']
        notice = regions.get(NOTICE)

        if notice:
            context['error'] = notice['message']
        else:
            context.update({
                'success': True,
                'figure': regions[CHART],
                'marker': geojson.dumps(regions[MARKER]),
            })

    except NoSelection as e:
        context['error'] = str(e)

    except ValueError as e:
        context['error'] = str(e)

    except Exception:
        context['error'] = 'An unexpected error has occurred. Please try again.'
        log.exception('An unexpected error occurred.')

    return context


def time_series_api(data, catalog, gateway=gee):
    """
    Answer a REST time series request.

    Args:
        data (QueryDict): request parameters.
        catalog (ProductCatalog): the product catalog.

    Returns:
        HttpResponse: JSON time series in display units, or an error response.
    """
    try:
        params = parse_time_series_params(data, catalog)
    except ValueError as e:
        return HttpResponseBadRequest(str(e))

    product = params['product']

    # Each request gets its own selection, independent of any viewer session
    selection_controller = SelectionController(catalog, select_default=False)
    selection_controller.product_changed(product.name)
    chart_request, _ = selection_controller.map_clicked(params['lon'], params['lat'])
    chart_request = dataclasses.replace(chart_request, date_range=params['date_range'], scale=params['scale'])

    try:
        time_series = gateway.get_time_series(chart_request)
    except QueryFailed as e:
        return HttpResponseServerError(str(e))
    except Exception:
        log.exception('An unexpected error occurred during execution of get_time_series.')
        return HttpResponseServerError('An unexpected error occurred. Please review your parameters and try again.')

    value_column = time_series.columns[1]
    time_series[value_column] = selection_controller.scaling.scale_values(product.name, time_series[value_column])
    time_series = time_series.astype(object).where(time_series.notna(), None)

    start_date, end_date = params['date_range']

    # compose response object.
    response_data = {
        'time_series': time_series.to_dict(orient=params['orient']),
        'parameters': {
            'product': product.name,
            'collection': product.source_ref.collection,
            'band': product.source_ref.band,
            'lon': params['lon'],
            'lat': params['lat'],
            'start_date': start_date.strftime('%Y-%m-%d'),
            'end_date': end_date.strftime('%Y-%m-%d'),
            'reducer': chart_request.reducer,
            'scale': params['scale'],
            'scale_factor': product.scale_factor,
            'orient': params['orient'],
        }
    }

    return JsonResponse(response_data)
