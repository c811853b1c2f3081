from tethys_sdk.base import TethysAppBase


class App(TethysAppBase):
    """
    Tethys app class for Vegetation Insights.
    """

    name = 'Vegetation Insights'
    description = 'Global vegetation and climate indicators from Google Earth Engine, with time series at any location.'
    package = 'vegetation_insights'  # WARNING: Do not change this value
    index = 'home'
    icon = f'{package}/images/icon.gif'
    root_url = 'vegetation-insights'
    color = '#273c75'
    tags = 'Earth Engine,NDVI,Evapotranspiration,Land Surface Temperature'
    enable_feedback = False
    feedback_emails = []
