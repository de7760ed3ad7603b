'''
The plcconn console sending one message to a PLC and printing its response
@author: Thomas Wanderer
'''

# Imports
import sys
import argparse
from typing import List, Optional

# plcconn Imports
from plcconn import models
from plcconn.defaults import constants
from plcconn.utils import logging, aio
from plcconn.utils.types import TypeChecker as checker
from plcconn.utils.exceptions import ExceptionHandler, plcconnBaseException
from plcconn.data.inifile import loadEndpoint, plcconnConfiguration, TOKEN
from plcconn.transport import TCPPlcClient, AsyncTCPPlcClient


def hexdata(value: str) -> bytes:
    '''
    Argument type converting hexadecimal digits like "01 02 0a ff" to bytes
    '''
    if not checker.is_hex(value):
        raise argparse.ArgumentTypeError(f'"{value}" is not a hexadecimal byte sequence')
    return bytes.fromhex(''.join(value.split()))


def getParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='plcconn',
        description='Send a message to a PLC and print its response:',
        add_help=True
        )
    parser.add_argument(
        'data',
        type=hexdata,
        metavar='HEXDATA',
        help='The message as hexadecimal bytes (e.g. "01020304")'
        )
    parser.add_argument(
        '--config',
        type=str,
        metavar='FILE',
        help='Read the PLC endpoint from an INI file',
        default=None
        )
    parser.add_argument(
        '--section',
        type=str,
        metavar='NAME',
        help=f'The INI section defining the PLC endpoint (Default={constants.SECTION})',
        default=constants.SECTION
        )
    parser.add_argument(
        '--address',
        type=str,
        metavar='HOST',
        help=f'The PLC address (Default={models.getDefaultValue(f"{TOKEN}.address")})'
        )
    parser.add_argument(
        '--port',
        type=int,
        metavar='INT',
        help=f'The PLC port (Default={models.getDefaultValue(f"{TOKEN}.port")})'
        )
    parser.add_argument(
        '--timeout',
        type=float,
        metavar='SECONDS',
        help=f'Timeout for connecting and for the exchange (Default={models.getDefaultValue(f"{TOKEN}.timeout")})'
        )
    parser.add_argument(
        '--length',
        type=int,
        metavar='BYTES',
        help='Print only the first bytes of the response'
        )
    parser.add_argument(
        '--async',
        dest='asynchronous',
        action='store_true',
        help='Use the asyncio client',
        default=False
        )
    parser.add_argument(
        '--verbosity',
        type=int,
        metavar='INT',
        help=f'Regulate the output verbosity (Default={constants.VERBOSITY})',
        default=constants.VERBOSITY
        )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Set the debug mode',
        default=False
        )
    return parser


def main(argv: Optional[List[str]]=None) -> int:
    arguments = getParser().parse_args(argv)

    # Set debug mode and verbosity based on arguments
    if arguments.debug:
        constants.MODE = 'debug'
    if arguments.verbosity in range(1, 6):
        constants.VERBOSITY = arguments.verbosity

    # Create the logger (only after we updated the constants.MODE and constants.VERBOSITY)
    logger = logging.getLogger(level=logging.getVerbosityLevel(constants.VERBOSITY))

    # Set Error handler (Only after we set the constants.MODE)
    constants.ERROR = ExceptionHandler(constants.MODE, logger)

    try:
        # Build the endpoint from the configuration and arguments
        if arguments.config:
            endpoint = loadEndpoint(arguments.config, arguments.section)
        else:
            endpoint = models.getDefaultValue(TOKEN)
        for key in ('address', 'port', 'timeout'):
            if getattr(arguments, key) is not None:
                endpoint[key] = getattr(arguments, key)
        valid, result = models.isValidValue(TOKEN, endpoint)
        if not valid:
            raise plcconnConfiguration(result)

        # Exchange the message
        if arguments.asynchronous:
            response = aio.run(AsyncTCPPlcClient(**endpoint).openWriteClose(arguments.data))
        else:
            response = TCPPlcClient(**endpoint).openWriteClose(arguments.data)
    except plcconnBaseException as e:
        logger.error(e.message)
        return 1

    if arguments.length is not None:
        response = response[:arguments.length]
    print(response.hex())
    return 0


# Main
if __name__ == '__main__':
    sys.exit(main())
