'''
A local TCP listener standing in for a PLC in laboratory cases
@author: Thomas Wanderer
'''

# Imports
import socket
import threading
import time
from typing import Callable

# plcconn Imports
from plcconn.defaults.constants import RESBUF_MAX_RLEN


class MockListener:
    '''
    Listens on an ephemeral loopback port and hands every accepted
    connection to the handler in its own thread
    '''

    def __init__(self, handler: Callable[[socket.socket], None]) -> None:
        self.handler = handler
        self.accepted = 0
        self._stopped = threading.Event()
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._socket.bind(('127.0.0.1', 0))
        self._socket.listen(8)
        self._socket.settimeout(0.1)
        self.address, self.port = self._socket.getsockname()[:2]
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def _serve(self) -> None:
        while not self._stopped.is_set():
            try:
                conn, _ = self._socket.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            self.accepted += 1
            threading.Thread(target=self._handle, args=(conn,), daemon=True).start()

    def _handle(self, conn: socket.socket) -> None:
        with conn:
            conn.settimeout(5)
            try:
                self.handler(conn)
            except OSError:
                pass

    def waitForConnections(self, amount: int=1, timeout: float=2) -> bool:
        deadline = time.monotonic() + timeout
        while self.accepted < amount and time.monotonic() < deadline:
            time.sleep(0.01)
        return self.accepted >= amount

    def close(self) -> None:
        self._stopped.set()
        self._socket.close()
        self._thread.join(1)


def respond(reply: bytes=b'response') -> Callable[[socket.socket], None]:
    '''
    Reads one request, sends the reply and hangs up
    '''
    def handler(conn: socket.socket) -> None:
        if conn.recv(RESBUF_MAX_RLEN):
            conn.sendall(reply)
    return handler


def echo(prefix: bytes=b'ack:') -> Callable[[socket.socket], None]:
    '''
    Answers every request on the connection with the prefixed request
    '''
    def handler(conn: socket.socket) -> None:
        while True:
            data = conn.recv(RESBUF_MAX_RLEN)
            if not data:
                return
            conn.sendall(prefix + data)
    return handler


def silent(conn: socket.socket) -> None:
    '''
    Reads everything but never answers until the peer hangs up
    '''
    while conn.recv(RESBUF_MAX_RLEN):
        pass


def hangup(conn: socket.socket) -> None:
    '''
    Closes the connection right away
    '''
    return


def closedPort() -> int:
    '''
    Returns a loopback port nobody listens on
    '''
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


def countingDialer(calls: list) -> Callable:
    '''
    Returns a dialer recording each connection attempt
    '''
    def dialer(address, timeout):
        calls.append(address)
        return socket.create_connection(address, timeout)
    return dialer
