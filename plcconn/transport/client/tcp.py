'''
This module defines a PLC client communicating via TCP sockets
@author: Thomas Wanderer
'''

try:
    # Imports
    import socket
    from typing import Optional, Callable, Tuple, Union

    # plcconn Imports
    from plcconn.transport.client.base import PlcClient
except ImportError as e:
    from plcconn.utils.exceptions import plcconnModuleImport
    raise plcconnModuleImport(e)


class TCPPlcClient(PlcClient):
    '''
    A client connecting to a PLC via TCP socket.
    how to use:
        client = TCPPlcClient('192.168.1.1', 1025, 5)
        response = client.openWriteClose(b'\\x01\\x02\\x03\\x04')

    By default the socket is created by "socket.create_connection". Pass a
    dialer with the same signature to provide pre-created or custom sockets.
    '''

    def __init__(
            self,
            address: str,
            port: int,
            timeout: Union[int, float],
            dialer: Optional[Callable[[Tuple[str, int], Optional[float]], socket.socket]]=None
            ) -> None:

        super().__init__(address, port, timeout)
        self.dialer = dialer or socket.create_connection

    def _dial(self, timeout: Union[int, float]) -> socket.socket:
        # A non-positive timeout leaves the establishment unbounded
        sock = self.dialer((self.address, self.port), timeout if timeout and timeout > 0 else None)
        try:
            if sock.family in (socket.AF_INET, socket.AF_INET6):
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
        except OSError:
            sock.close()
            raise
        return sock

    def _send(self, transport: socket.socket, msg: bytes, deadline: float) -> None:
        transport.settimeout(self._remaining(deadline))
        transport.sendall(msg)

    def _receive(self, transport: socket.socket, buffer: bytearray, deadline: float) -> int:
        transport.settimeout(self._remaining(deadline))
        return transport.recv_into(buffer)

    def _shutdown(self, transport: socket.socket) -> None:
        transport.close()
