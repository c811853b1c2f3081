import datetime as dt
from collections import OrderedDict
from dataclasses import dataclass
from typing import Tuple

from ..exceptions import ProductNotFound

GREEN_PALETTE = [
    'ffffff', 'ce7e45', 'df923d', 'f1b555', 'fcd163', '99b718', '74a901', '66a000',
    '529400', '3e8601', '207401', '056201', '004c00', '023b01', '012e01', '011d01',
    '011301'
]

TEMPERATURE_PALETTE = [
    '040274', '040281', '0502a3', '0502b8', '0502ce', '0502e6',
    '0602ff', '235cb1', '307ef3', '269db1', '30c8e2', '32d3ef',
    '3be285', '3ff38f', '86e26f', '3ae237', 'b5e22e', 'd6e21f',
    'fff705', 'ffd611', 'ffb613', 'ff8b13', 'ff6e08', 'ff500d',
    'ff0000', 'de0101', 'c21301', 'a71001', '911003'
]

PRODUCTS = OrderedDict([
    ('Evapotranspiration', {
        'collection': 'MODIS/061/MOD16A2GF',
        'band': 'ET',
        'date_range': ('2019-01-01', '2019-12-31'),
        'vis_params': {
            'min': 0,
            'max': 300,
            'palette': [
                'ffffff', 'fcd163', '99b718', '66a000', '3e8601', '207401', '056201', '004c00', '011301'
            ],
        },
        'label': 'Evapotranspiration (kg/m²/8day)',
        'scale_factor': 10,
    }),
    ('Leaf Area Index', {
        'collection': 'MODIS/061/MOD15A2H',
        'band': 'Lai_500m',
        'date_range': ('2019-01-01', '2019-12-31'),
        'vis_params': {
            'min': 0,
            'max': 100,
            'palette': GREEN_PALETTE,
        },
        'label': 'Leaf Area Index (Area Fraction)',
        'scale_factor': 100,
    }),
    ('Fraction of Photosynthetically Active Radiation', {
        'collection': 'MODIS/061/MOD15A2H',
        'band': 'Fpar_500m',
        'date_range': ('2019-01-01', '2019-12-31'),
        'vis_params': {
            'min': 0,
            'max': 100,
            'palette': GREEN_PALETTE,
        },
        'label': 'Fraction of Photosynthetically Active Radiation (%)',
        'scale_factor': 1,
    }),
    ('NDVI', {
        'collection': 'MODIS/061/MOD13A1',
        'band': 'NDVI',
        'date_range': ('2019-01-01', '2019-12-31'),
        'vis_params': {
            'min': -2000,
            'max': 10000,
            'palette': GREEN_PALETTE,
        },
        'label': 'Normalized Difference Vegetation Index',
        'scale_factor': 10000,
    }),
    ('Land Surface Temperature', {
        'collection': 'MODIS/061/MOD11A1',
        'band': 'LST_Day_1km',
        'date_range': ('2019-01-01', '2019-12-31'),
        'vis_params': {
            'min': 13000.0,
            'max': 16500.0,
            'palette': TEMPERATURE_PALETTE,
        },
        'label': 'Land Surface Temperature (Daytime (F))',
        'scale_factor': 200,
    }),
    ('Mean Air Temperature', {
        'collection': 'ECMWF/ERA5/DAILY',
        'band': 'mean_2m_air_temperature',
        'date_range': ('2019-01-01', '2019-12-31'),
        'vis_params': {
            'min': 250,
            'max': 320,
            'palette': ['blue', 'green', 'yellow', 'red'],
        },
        'label': 'Mean 2m Air Temperature (K)',
        'scale_factor': 1,
    }),
    ('Precipitation', {
        'collection': 'ECMWF/ERA5/DAILY',
        'band': 'total_precipitation',
        'date_range': ('2019-01-01', '2019-12-31'),
        'vis_params': {
            'min': 0,
            'max': 0.02,
            'palette': ['white', 'blue'],
        },
        'label': 'Total Daily Precipitation (m)',
        'scale_factor': 1,
    }),
])

DEFAULT_PRODUCT = 'Fraction of Photosynthetically Active Radiation'

# Lon/lat of the location charted when the viewer first loads
DEFAULT_POINT = (-103.46, 44.58)
DEFAULT_ZOOM = 3


@dataclass(frozen=True)
class SourceRef:
    collection: str
    band: str


@dataclass(frozen=True)
class Visualization:
    min: float
    max: float
    palette: Tuple[str, ...]

    def to_vis_params(self):
        """
        Visualization parameters in the form expected by ee.Image.getMapId.
        """
        return {'min': self.min, 'max': self.max, 'palette': list(self.palette)}


@dataclass(frozen=True)
class ProductDefinition:
    name: str
    source_ref: SourceRef
    date_range: Tuple[dt.date, dt.date]
    visualization: Visualization
    display_label: str
    scale_factor: float

    @property
    def date_range_str(self):
        """
        Date range as %Y-%m-%d strings, as accepted by ee.ImageCollection.filterDate.
        """
        return tuple(d.strftime('%Y-%m-%d') for d in self.date_range)


def product_from_dict(name, entry):
    """
    Build a ProductDefinition from one entry of the PRODUCTS table.

    Args:
        name (str): Display name of the product.
        entry (dict): Product configuration.

    Returns:
        ProductDefinition: the validated product definition.
    """
    vis_params = entry['vis_params']
    start_str, end_str = entry['date_range']

    try:
        start = dt.datetime.strptime(start_str, '%Y-%m-%d').date()
        end = dt.datetime.strptime(end_str, '%Y-%m-%d').date()
    except ValueError:
        raise ValueError(f'Invalid date range for "{name}". Please use "YYYY-MM-DD".')

    if start > end:
        raise ValueError(f'The start date of "{name}" must occur before its end date.')

    visualization = Visualization(
        min=vis_params['min'],
        max=vis_params['max'],
        palette=tuple(vis_params.get('palette', ())),
    )

    if not visualization.palette:
        raise ValueError(f'A color palette is required for "{name}".')

    scale_factor = entry.get('scale_factor', 1)

    if scale_factor <= 0:
        raise ValueError(f'The scale factor of "{name}" must be positive, but {scale_factor} was given.')

    # Legend bounds are shown scaled, so the unscaled range must already be increasing
    if visualization.min >= visualization.max:
        raise ValueError(f'The visualization "min" of "{name}" must be less than its "max".')

    return ProductDefinition(
        name=name,
        source_ref=SourceRef(collection=entry['collection'], band=entry['band']),
        date_range=(start, end),
        visualization=visualization,
        display_label=entry.get('label', name),
        scale_factor=scale_factor,
    )


class ProductCatalog:
    """
    Read-only table of the products offered in the product selector.
    """

    def __init__(self, products, default=None):
        self._products = OrderedDict()

        for product in products:
            if product.name in self._products:
                raise ValueError(f'Duplicate product name "{product.name}".')
            self._products[product.name] = product

        if default is not None and default not in self._products:
            raise ProductNotFound(default, self._products.keys())

        self._default = default

    @property
    def default(self):
        return self._default

    def lookup(self, name):
        """
        Get the product registered under the given name.

        Raises:
            ProductNotFound: if the name is not registered.
        """
        try:
            return self._products[name]
        except KeyError:
            raise ProductNotFound(name, self._products.keys()) from None

    def list_names(self):
        return tuple(self._products.keys())

    def __contains__(self, name):
        return name in self._products

    def __iter__(self):
        return iter(self._products.values())

    def __len__(self):
        return len(self._products)


def build_catalog(entries=None, default=DEFAULT_PRODUCT):
    """
    Build the product catalog from the static configuration table.

    Args:
        entries (OrderedDict): mapping of product name to configuration. Defaults to PRODUCTS.
        default (str): name of the product selected when the viewer loads, or None.

    Returns:
        ProductCatalog: the catalog.
    """
    if entries is None:
        entries = PRODUCTS

    return ProductCatalog(
        [product_from_dict(name, entry) for name, entry in entries.items()],
        default=default,
    )
