'''
This module provides functions related to configuration data
@author: Thomas Wanderer
'''

# plcconn Imports
from plcconn.data.inifile import loadEndpoint, plcconnConfiguration
