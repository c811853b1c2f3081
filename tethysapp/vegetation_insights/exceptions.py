class VegetationInsightsError(Exception):
    """
    Base class for errors raised by the Vegetation Insights app.
    """


class ProductNotFound(VegetationInsightsError, KeyError):
    """
    Raised when a product name is not registered in the catalog.
    """
    def __init__(self, name, valid_names=()):
        self.name = name
        self.valid_names = tuple(valid_names)
        super().__init__(name)

    def __str__(self):
        valid_str = '", "'.join(self.valid_names)
        return f'Unknown product "{self.name}". Valid products include: "{valid_str}".'


class QueryFailed(VegetationInsightsError):
    """
    Raised when a request to Google Earth Engine fails.
    """


class NoSelection(VegetationInsightsError):
    """
    Raised when the map is clicked before a product has been selected.
    """
    def __str__(self):
        return 'Please select a product before inspecting a location.'
