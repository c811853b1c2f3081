from setuptools import setup, find_namespace_packages
from tethys_apps.app_installation import find_all_resource_files
from tethys_apps.base.app_base import TethysAppBase

# -- Apps Definition -- #
app_package = 'vegetation_insights'
release_package = f'{TethysAppBase.package_namespace}-{app_package}'

# -- Python Dependencies -- #
dependencies = [
    'tethys-platform',
    'djangorestframework',
    'earthengine-api',
    'geojson',
    'pandas',
    'plotly',
]

test_dependencies = [
    'pytest',
]

# -- Get Resource File -- #
resource_files = find_all_resource_files(
    app_package, TethysAppBase.package_namespace
)

with open('README.md', 'r') as f:
    long_description = f.read()

setup(
    name=release_package,
    version='1.0.0',
    description='Global vegetation and climate indicators from Google Earth Engine, as a Tethys App.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Digital Agriculture Laboratory, University of California, Davis',
    author_email='',
    url='https://digitalag.ucdavis.edu/',
    license='BSD-3-Clause',
    packages=find_namespace_packages(include=[TethysAppBase.package_namespace, f'{TethysAppBase.package_namespace}.*']),
    package_data={'': resource_files},
    include_package_data=True,
    zip_safe=False,
    install_requires=dependencies,
    extras_require={'test': test_dependencies},
)
