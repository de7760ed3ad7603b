'''
This module reads PLC endpoint definitions from INI files
@author: Thomas Wanderer
'''

# Imports
import os
from configparser import ConfigParser, Error as ConfigParserError
from typing import Dict, Union, Optional

# plcconn Imports
from plcconn import models
from plcconn.utils import logging
from plcconn.utils.types import TypeChecker as checker
from plcconn.utils.exceptions import plcconnBaseException
from plcconn.defaults.constants import SECTION


# The model token validating an endpoint
TOKEN = 'plc.endpoint'


def _coerce(key: str, value: str) -> Union[str, int, float]:
    '''
    Converts the raw INI string into the type the endpoint schema expects
    '''
    value = value.strip()
    if key == 'port' and checker.is_integer(value):
        return int(value)
    if key == 'timeout':
        if checker.is_integer(value):
            return int(value)
        if checker.is_float(value):
            return float(value)
    return value


def loadEndpoint(path: str, section: Optional[str]=SECTION) -> Dict[str, Union[str, int, float]]:
    '''
    Reads the endpoint (address, port and timeout) defined in an INI file section.
    Missing keys are filled with the defaults of the endpoint model.
    Example:
        [plc]
        address = 192.168.1.1
        port = 1025
        timeout = 5
    :param str path: The INI file
    :param str section: The section name
    :returns: The validated endpoint
    :rtype: dict
    '''
    logger = logging.getLogger()
    section = section or SECTION
    if not os.path.isfile(path):
        raise plcconnConfiguration(f'File "{path}" does not exist')

    # Read the file
    parser = ConfigParser(interpolation=None)
    try:
        parser.read(path, encoding='utf-8')
    except ConfigParserError as e:
        raise plcconnConfiguration(f'File "{path}" cannot be parsed ({e})') from e
    if not parser.has_section(section):
        raise plcconnConfiguration(f'Section "{section}" not defined in "{path}"')

    # Fill in defaults and convert the values
    endpoint = models.getDefaultValue(TOKEN)
    endpoint.update({key: _coerce(key, value) for key, value in parser.items(section)})

    # Validate
    valid, result = models.isValidValue(TOKEN, endpoint)
    if not valid:
        raise plcconnConfiguration(f'Section "{section}" in "{path}" is invalid: {result}')
    logger.debug(f'Loaded endpoint "{endpoint["address"]}:{endpoint["port"]}" from "{path}"')
    return endpoint


class plcconnConfiguration(plcconnBaseException):
    '''
    Gets thrown when a configuration cannot be read or is invalid
    '''
    template = 'Invalid configuration ({error})'
