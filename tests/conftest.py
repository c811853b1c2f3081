from unittest import mock

import django
import pandas as pd
import pytest
from django.conf import settings

from tethysapp.vegetation_insights.gee.products import build_catalog
from tethysapp.vegetation_insights.gee.scaling import ScalingPolicy
from tethysapp.vegetation_insights.selection import SelectionController


def pytest_configure(config):
    # Sessions are kept in the local memory cache so concurrent saves are visible to SessionStore.load()
    if not settings.configured:
        settings.configure(
            SECRET_KEY='vegetation-insights-tests',
            CACHES={'default': {'BACKEND': 'django.core.cache.backends.locmem.LocMemCache'}},
            SESSION_ENGINE='django.contrib.sessions.backends.cache',
        )
        django.setup()


@pytest.fixture
def catalog():
    return build_catalog()


@pytest.fixture
def scaling(catalog):
    return ScalingPolicy(catalog)


@pytest.fixture
def controller(catalog):
    return SelectionController(catalog)


@pytest.fixture
def gateway():
    """
    Stand-in for the Earth Engine gateway module.
    """
    fake = mock.Mock()
    fake.get_composite_tile_url.return_value = 'https://earthengine.googleapis.com/tiles/{z}/{x}/{y}'
    fake.get_color_ramp_thumbnail_url.return_value = 'https://earthengine.googleapis.com/thumbnails/legend'
    fake.get_time_series.side_effect = lambda chart_request: pd.DataFrame(
        [[1546300800000, 4500], [1547683200000, 5000]],
        columns=['Time', chart_request.label],
    )
    return fake
