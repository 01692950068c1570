from pagewright_api.app import create_app as create_app
