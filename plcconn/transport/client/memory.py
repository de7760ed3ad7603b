'''
This module provides a PLC client based on an in-memory fake transport.
Use it to test code depending on a PlcClient without any network I/O.
@author: Thomas Wanderer
'''

# Imports
from typing import Callable, List, Optional, Union

# plcconn Imports
from plcconn.transport.client.base import PlcClient


class MemoryTransport:
    '''
    An ephemeral connection to the fake PLC holding the last request
    '''

    def __init__(self) -> None:
        self.request: Optional[bytes] = None
        self.closed = False


class MemoryPlcClient(PlcClient):
    '''
    A client whose PLC is a responder function mapping a request to its response.
    By default the request gets echoed. A responder may raise an OSError to make the
    read of the exchange fail. The flags "reachable", "writable" and "closable" let
    dialing, writing and closing fail instead.
    All dials, sent messages and closes are recorded for later inspection.
    '''

    def __init__(
            self,
            address: str='memory',
            port: int=0,
            timeout: Union[int, float]=1,
            responder: Optional[Callable[[bytes], bytes]]=None,
            reachable: bool=True
            ) -> None:

        super().__init__(address, port, timeout)
        self.responder  = responder or (lambda msg: msg)
        self.reachable  = reachable
        self.writable   = True
        self.closable   = True
        self.dials      = 0
        self.closes     = 0
        self.sent: List[bytes] = []

    def _dial(self, timeout: Union[int, float]) -> MemoryTransport:
        if not self.reachable:
            raise ConnectionRefusedError(f'Fake PLC "{self.address}:{self.port}" is not reachable')
        self.dials += 1
        return MemoryTransport()

    def _send(self, transport: MemoryTransport, msg: bytes, deadline: float) -> None:
        self._remaining(deadline)
        if transport.closed or not self.writable:
            raise BrokenPipeError('Fake PLC does not accept data')
        transport.request = msg
        self.sent.append(msg)

    def _receive(self, transport: MemoryTransport, buffer: bytearray, deadline: float) -> int:
        self._remaining(deadline)
        response = bytes(self.responder(transport.request))[:len(buffer)]
        buffer[:len(response)] = response
        return len(response)

    def _shutdown(self, transport: MemoryTransport) -> None:
        transport.closed = True
        self.closes += 1
        if not self.closable:
            raise OSError('Fake PLC failed to close')
