import pandas as pd


class ScalingPolicy:
    """
    Converts raw band values to display units.

    Earth Engine returns sensor-native encodings (e.g. NDVI x 10000). The chart and the legend
    both go through this class so that a product's values and its legend bounds are always
    divided by the same factor.
    """

    def __init__(self, catalog):
        self.catalog = catalog

    def scale_factor_for(self, product_name):
        return self.catalog.lookup(product_name).scale_factor

    def scale_value(self, product_name, raw_value):
        """
        Scale a single raw value. None (no data) is passed through.
        """
        if raw_value is None:
            return None
        return raw_value / self.scale_factor_for(product_name)

    def scale_values(self, product_name, raw_values):
        """
        Scale a sequence or pandas.Series of raw values.
        """
        factor = self.scale_factor_for(product_name)

        if isinstance(raw_values, pd.Series):
            return raw_values.divide(factor)

        return [None if v is None else v / factor for v in raw_values]

    def legend_range(self, product_name):
        """
        Get the scaled (min, max) legend bounds of a product.
        """
        product = self.catalog.lookup(product_name)
        factor = product.scale_factor
        return product.visualization.min / factor, product.visualization.max / factor

    def legend_ticks(self, product_name):
        """
        Get the min, midpoint and max labels of a product legend, formatted with two decimals.
        """
        vmin, vmax = self.legend_range(product_name)
        return [f'{vmin:.2f}', f'{(vmin + vmax) / 2:.2f}', f'{vmax:.2f}']
