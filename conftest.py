import logging

logging.disable(logging.INFO)

# import * so all fixtures can be used accross the project
from vecadmin.tests.client_fixtures import *
