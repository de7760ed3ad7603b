'''
plcconn: A thread-safe TCP client exchanging request/response messages with a PLC
over a single persistent connection.
@author: Thomas Wanderer
'''

# plcconn Imports
from plcconn.defaults.constants import VERSION as __version__, RESBUF_MAX_RLEN
from plcconn.transport import (
    PlcClient,
    TCPPlcClient,
    AsyncTCPPlcClient,
    MemoryPlcClient,
    plcconnNilInstance,
    plcconnInvalidArgument,
    plcconnSocketCreation,
    plcconnSocketShutdown,
    plcconnMessageExchange,
    plcconnMessageWriter,
    plcconnMessageReader
    )
from plcconn.utils.exceptions import plcconnBaseException
from plcconn.data import loadEndpoint, plcconnConfiguration
