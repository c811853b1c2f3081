import logging
from tethys_sdk.routing import controller

from ..app import App

log = logging.getLogger(f'tethys.apps.{__name__}')

PORTAL_TITLE = 'Global Vegetation and Climate Insights Portal'
PORTAL_DESCRIPTION = (
    'Explore dynamic visualization and analysis of global vegetation and climate indicators such as NDVI, '
    'Evapotranspiration, and more. This portal allows for comprehensive environmental monitoring and insight.'
)
CREDITS = {
    'authors': 'Authors: Mohammadreza Narimani, Nicholas Richmond',
    'lab': 'Digital Agriculture Laboratory of the University of California, Davis',
    'link_text': 'Visit Digital Agriculture Lab',
    'link_url': 'https://digitalag.ucdavis.edu/',
}


@controller
def home(request):
    """
    Controller for the app home page.
    """
    context = {
        'title': PORTAL_TITLE,
        'description': PORTAL_DESCRIPTION,
        'credits': CREDITS,
    }
    return App.render(request, 'home.html', context)


@controller
def about(request):
    """
    Controller for the app about page.
    """
    context = {'credits': CREDITS}
    return App.render(request, 'about.html', context)
