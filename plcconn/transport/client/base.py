'''
This module defines the base PLC client. Subclass from this class
and implement its transport template methods to create a custom client.
@author: Thomas Wanderer
'''

try:
    # Imports
    import time
    import threading
    from typing import TypeVar, Optional, Union, Any

    # plcconn Imports
    from plcconn.utils import logging
    from plcconn.utils.types import TypeChecker as checker
    from plcconn.defaults.constants import RESBUF_MAX_RLEN, SECTION
    from plcconn.data.inifile import loadEndpoint
    from plcconn.transport.exceptions import (
        plcconnNilInstance,
        plcconnInvalidArgument,
        plcconnSocketCreation,
        plcconnSocketShutdown,
        plcconnMessageWriter,
        plcconnMessageReader
        )
except ImportError as e:
    from plcconn.utils.exceptions import plcconnModuleImport
    raise plcconnModuleImport(e)


PC = TypeVar('PC', bound='PlcClient')


class PlcClient:
    '''
    A generic client exchanging request/response messages with a PLC over a single
    persistent connection. The connection is dialed lazily and reused until it gets
    closed. All operations touching the connection hold one exclusive lock for their
    whole duration, so concurrent callers queue up instead of interleaving their I/O.

    An exchange writes the request and then reads the response exactly once into a
    buffer of RESBUF_MAX_RLEN bytes. Both the write and the read share a single deadline
    of "now + timeout". The buffer is returned as a whole: Longer responses are truncated,
    shorter responses are padded with zero bytes.

    The public operations are plain functions and may be invoked via the class on
    an absent instance, e.g. "PlcClient.connect(None)", which raises plcconnNilInstance.

    Subclasses bind the client to a transport by implementing the template methods
    "_dial", "_send", "_receive" and "_shutdown". These raise OSError on failure.
    '''

    # An identifier name for this client (Used for logging purposes). By default set to the class-name
    name: str=None

    # The transport connection (None as long as we are disconnected)
    _transport: Any=None

    def __init__(self, address: str, port: int, timeout: Union[int, float]) -> None:
        self.logger     = logging.getLogger()
        self.timeout    = timeout
        self._address   = address
        self._port      = port
        self._lock      = threading.Lock()

        if not self.name:
            self.name = self.__class__.__name__

    @property
    def address(self) -> str:
        '''The PLC host name or IP address'''
        return self._address

    @property
    def port(self) -> int:
        '''The PLC TCP port'''
        return self._port

    @classmethod
    def fromConfig(cls, path: str, section: Optional[str]=SECTION, **kwargs) -> PC:
        '''
        Creates a client for the endpoint defined in a section of an INI file
        '''
        return cls(**loadEndpoint(path, section), **kwargs)

    def __enter__(self) -> PC:
        self.connect()
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        return f'<{self.name} {self.address}:{self.port}>'

    def connect(self) -> None:
        '''
        Opens the connection. An already open connection is kept and reused
        without checking if it is still alive.
        '''
        if self is None:
            raise plcconnNilInstance('Cannot connect')
        with self._lock:
            self._connect()

    def write(self, msg: bytes) -> bytes:
        '''
        Sends a message and returns the response buffer. Connects first if required.
        A failed write leaves the connection open.
        '''
        if self is None:
            raise plcconnNilInstance('Cannot write')
        if not checker.is_bytes(msg):
            raise plcconnInvalidArgument(f'Message must be bytes, not "{msg.__class__.__name__}"')
        if len(msg) == 0:
            raise plcconnInvalidArgument('Message is empty')
        with self._lock:
            self._connect()
            return self._exchange(bytes(msg))

    def isConnected(self) -> bool:
        '''
        Tells if a connection is held. This does not probe the peer.
        '''
        if self is None:
            return False
        with self._lock:
            return self._transport is not None

    def setTimeoutSecond(self, timeout: Union[int, float]) -> None:
        '''
        Sets the timeout used by subsequent connects and exchanges. Not synchronized.
        '''
        self.timeout = timeout

    def close(self) -> None:
        '''
        Closes the connection. The client is disconnected afterwards even if the
        transport reports an error while closing.
        '''
        if self is None:
            raise plcconnNilInstance('Cannot close')
        with self._lock:
            self._close()

    def openWriteClose(self, msg: bytes) -> bytes:
        '''
        Connects, exchanges one message and closes the connection again.
        A connect or write error is raised, the close happens in any case.
        '''
        if self is None:
            raise plcconnNilInstance('Cannot open, write and close')
        self.connect()
        try:
            return self.write(msg)
        finally:
            try:
                self.close()
            except plcconnSocketShutdown as e:
                self.logger.warning(f'{self.name} ignored close failure after exchange ({e})')

    def _connect(self) -> None:
        if self._transport is None:
            try:
                transport = self._dial(self.timeout)
            except OSError as e:
                raise plcconnSocketCreation(e) from e
            self._transport = transport
            self.logger.debug(f'{self.name} established connection to "{self.address}:{self.port}"')

    def _exchange(self, msg: bytes) -> bytes:
        deadline = time.monotonic() + self.timeout
        try:
            self._send(self._transport, msg, deadline)
        except OSError as e:
            raise plcconnMessageWriter(e) from e
        buffer = bytearray(RESBUF_MAX_RLEN)
        try:
            size = self._receive(self._transport, buffer, deadline)
        except OSError as e:
            raise plcconnMessageReader(e) from e
        if size == 0:
            raise plcconnMessageReader(EOFError('Connection closed by peer'))
        self.logger.debug(f'{self.name} exchanged {len(msg)} bytes for {size} bytes')
        return bytes(buffer)

    def _close(self) -> None:
        if self._transport is not None:
            transport = self._transport
            self._transport = None
            try:
                self._shutdown(transport)
            except OSError as e:
                raise plcconnSocketShutdown(e) from e
            finally:
                self.logger.debug(f'{self.name} closed connection to "{self.address}:{self.port}"')

    @staticmethod
    def _remaining(deadline: float) -> float:
        '''
        Returns the seconds left until the deadline or raises a TimeoutError once it passed
        '''
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise TimeoutError('I/O deadline exceeded')
        return remaining

    def _dial(self, timeout: Union[int, float]) -> Any:
        '''
        Template method: Establish and return a new transport connection
        '''
        raise NotImplementedError

    def _send(self, transport: Any, msg: bytes, deadline: float) -> None:
        '''
        Template method: Write the whole message before the deadline
        '''
        raise NotImplementedError

    def _receive(self, transport: Any, buffer: bytearray, deadline: float) -> int:
        '''
        Template method: Read once into the buffer before the deadline and return the amount of bytes read
        '''
        raise NotImplementedError

    def _shutdown(self, transport: Any) -> None:
        '''
        Template method: Close a transport connection
        '''
        raise NotImplementedError
