'''
This module provides clients exchanging request/response messages with a PLC
@author: Thomas Wanderer
'''

# plcconn Imports
from plcconn.transport.client.base import PlcClient
from plcconn.transport.client.tcp import TCPPlcClient
from plcconn.transport.client.aio import AsyncTCPPlcClient
from plcconn.transport.client.memory import MemoryPlcClient, MemoryTransport
from plcconn.transport.exceptions import (
    plcconnNilInstance,
    plcconnInvalidArgument,
    plcconnSocketCreation,
    plcconnSocketShutdown,
    plcconnMessageExchange,
    plcconnMessageWriter,
    plcconnMessageReader
    )
