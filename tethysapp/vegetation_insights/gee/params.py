import os

# Leave the service account empty to use the local credentials created by "earthengine authenticate"
service_account = os.environ.get('VEGETATION_INSIGHTS_EE_SERVICE_ACCOUNT', '')
private_key = os.environ.get('VEGETATION_INSIGHTS_EE_PRIVATE_KEY', '')
project = os.environ.get('VEGETATION_INSIGHTS_EE_PROJECT', '') or None
