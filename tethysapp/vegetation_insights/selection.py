"""
Selection state of the viewer and the requests it issues when the user changes product or clicks the map.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .exceptions import NoSelection
from .gee.products import ProductDefinition, SourceRef, Visualization
from .gee.scaling import ScalingPolicy

log = logging.getLogger(f'tethys.apps.{__name__}')

CHART_REDUCER = 'mean'
CHART_SCALE = 500  # meters


@dataclass(frozen=True)
class LayerRequest:
    generation: int
    source_ref: SourceRef
    date_range: tuple
    visualization: Visualization
    label: str


@dataclass(frozen=True)
class LegendRequest:
    generation: int
    product_name: str
    visualization: Visualization
    scale_factor: float


@dataclass(frozen=True)
class ChartRequest:
    generation: int
    product_name: str
    source_ref: SourceRef
    date_range: tuple
    point: Tuple[float, float]
    scale_factor: float
    label: str
    color: str
    reducer: str = CHART_REDUCER
    scale: int = CHART_SCALE


@dataclass(frozen=True)
class MarkerRequest:
    generation: int
    point: Tuple[float, float]


@dataclass
class SelectionState:
    active_product: Optional[ProductDefinition] = None
    last_clicked_point: Optional[Tuple[float, float]] = None
    generation: int = 0


class SelectionController:
    """
    Tracks the active product and clicked point of one viewer session.

    Every product change starts a new generation. Requests are tagged with the generation that issued
    them so results arriving after a newer product selection can be discarded with accept().
    """

    def __init__(self, catalog, scaling=None, state=None, select_default=True):
        self.catalog = catalog
        self.scaling = scaling or ScalingPolicy(catalog)
        self.state = state or SelectionState()

        if state is None and select_default and catalog.default is not None:
            self.state.active_product = catalog.lookup(catalog.default)

    @property
    def active_product(self):
        return self.state.active_product

    @property
    def generation(self):
        return self.state.generation

    def product_changed(self, name):
        """
        Make the named product active.

        Returns:
            tuple(LayerRequest, LegendRequest): requests for the new map layer and legend.

        Raises:
            ProductNotFound: if the name is not in the catalog.
        """
        product = self.catalog.lookup(name)

        self.state.active_product = product
        self.state.last_clicked_point = None
        self.state.generation += 1

        log.debug(f'Product changed to "{name}" (generation {self.state.generation}).')

        layer_request = LayerRequest(
            generation=self.state.generation,
            source_ref=product.source_ref,
            date_range=product.date_range,
            visualization=product.visualization,
            label=product.display_label,
        )

        legend_request = LegendRequest(
            generation=self.state.generation,
            product_name=product.name,
            visualization=product.visualization,
            scale_factor=self.scaling.scale_factor_for(product.name),
        )

        return layer_request, legend_request

    def map_clicked(self, lon, lat):
        """
        Inspect the active product at the given location.

        Returns:
            tuple(ChartRequest, MarkerRequest): requests for the time series chart and the point marker.

        Raises:
            NoSelection: if no product is active.
            ValueError: if the coordinates are out of range.
        """
        product = self.state.active_product

        if product is None:
            raise NoSelection()

        lon, lat = float(lon), float(lat)

        if not -180 <= lon <= 180 or not -90 <= lat <= 90:
            raise ValueError(f'Invalid location ({lon}, {lat}). Longitude must be within [-180, 180] '
                             f'and latitude within [-90, 90].')

        point = (lon, lat)
        self.state.last_clicked_point = point

        palette = product.visualization.palette
        chart_request = ChartRequest(
            generation=self.state.generation,
            product_name=product.name,
            source_ref=product.source_ref,
            date_range=product.date_range,
            point=point,
            scale_factor=self.scaling.scale_factor_for(product.name),
            label=product.display_label,
            color=palette[1] if len(palette) > 1 else palette[0],
        )

        return chart_request, MarkerRequest(generation=self.state.generation, point=point)

    def is_current(self, request_or_generation):
        generation = getattr(request_or_generation, 'generation', request_or_generation)
        return generation == self.state.generation

    def accept(self, request, result):
        """
        Return the result of a request, or None if a newer selection has been made since it was issued.
        """
        if not self.is_current(request):
            log.debug(f'Discarding stale result of generation {request.generation} '
                      f'(current generation {self.state.generation}).')
            return None
        return result

    def dump_state(self):
        """
        Serialize the state for storage in the session.
        """
        product = self.state.active_product
        point = self.state.last_clicked_point

        return {
            'active_product': product.name if product else None,
            'last_clicked_point': list(point) if point else None,
            'generation': self.state.generation,
        }

    @classmethod
    def from_state(cls, catalog, data, scaling=None):
        """
        Restore a controller from the output of dump_state(). A missing state starts with the default product.
        """
        if not data:
            return cls(catalog, scaling=scaling)

        product_name = data.get('active_product')
        point = data.get('last_clicked_point')

        state = SelectionState(
            active_product=catalog.lookup(product_name) if product_name else None,
            last_clicked_point=tuple(point) if point else None,
            generation=int(data.get('generation', 0)),
        )

        return cls(catalog, scaling=scaling, state=state)
