'''
This module defines a PLC client communicating via asyncio TCP streams
@author: Thomas Wanderer
'''

try:
    # Imports
    import asyncio
    from typing import TypeVar, Optional, Union

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


AC = TypeVar('AC', bound='AsyncTCPPlcClient')


class AsyncTCPPlcClient:
    '''
    The asyncio counterpart of the TCPPlcClient. It can be used as async
    contextmanager and offers the same operations as coroutines, except for
    "setTimeoutSecond" which stays a plain method. Concurrent tasks sharing one
    client queue up on an asyncio lock, so exchanges never interleave.
    Run it on a loop created by "plcconn.utils.aio.get_loop" to profit from uvloop.
    '''

    # An identifier name for this client (Used for logging purposes). By default set to the class-name
    name: str=None

    # The stream pair of the connection (None as long as we are disconnected)
    _reader: asyncio.StreamReader=None
    _writer: asyncio.StreamWriter=None

    def __init__(self, address: str, port: int, timeout: Union[int, float]) -> None:
        self.logger     = logging.getLogger()
        self.timeout    = timeout
        self._address   = address
        self._port      = port
        self._lock      = asyncio.Lock()

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
    def fromConfig(cls, path: str, section: Optional[str]=SECTION) -> AC:
        '''
        Creates a client for the endpoint defined in a section of an INI file
        '''
        return cls(**loadEndpoint(path, section))

    async def __aenter__(self) -> AC:
        await self.connect()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f'<{self.name} {self.address}:{self.port}>'

    async def connect(self) -> None:
        '''
        Opens the connection or keeps an already open one
        '''
        if self is None:
            raise plcconnNilInstance('Cannot connect')
        async with self._lock:
            await self._connect()

    async def write(self, msg: bytes) -> bytes:
        '''
        Sends a message and returns the response buffer. Connects first if required.
        '''
        if self is None:
            raise plcconnNilInstance('Cannot write')
        if not checker.is_bytes(msg):
            raise plcconnInvalidArgument(f'Message must be bytes, not "{msg.__class__.__name__}"')
        if len(msg) == 0:
            raise plcconnInvalidArgument('Message is empty')
        async with self._lock:
            await self._connect()
            return await self._exchange(bytes(msg))

    async def isConnected(self) -> bool:
        if self is None:
            return False
        async with self._lock:
            return self._writer is not None

    def setTimeoutSecond(self, timeout: Union[int, float]) -> None:
        self.timeout = timeout

    async def close(self) -> None:
        '''
        Closes the connection. The client is disconnected afterwards in any case.
        '''
        if self is None:
            raise plcconnNilInstance('Cannot close')
        async with self._lock:
            await self._close()

    async def openWriteClose(self, msg: bytes) -> bytes:
        '''
        Connects, exchanges one message and closes the connection again
        '''
        if self is None:
            raise plcconnNilInstance('Cannot open, write and close')
        await self.connect()
        try:
            return await self.write(msg)
        finally:
            try:
                await self.close()
            except plcconnSocketShutdown as e:
                self.logger.warning(f'{self.name} ignored close failure after exchange ({e})')

    async def _connect(self) -> None:
        if self._writer is None:
            timeout = self.timeout
            try:
                reader, writer = await asyncio.wait_for(
                    asyncio.open_connection(self.address, self.port),
                    timeout if timeout and timeout > 0 else None
                    )
            except (OSError, asyncio.TimeoutError) as e:
                raise plcconnSocketCreation(e) from e
            self._reader, self._writer = reader, writer
            self.logger.debug(f'{self.name} established connection to "{self.address}:{self.port}"')

    async def _exchange(self, msg: bytes) -> bytes:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout
        try:
            self._writer.write(msg)
            await asyncio.wait_for(self._writer.drain(), max(deadline - loop.time(), 0))
        except (OSError, asyncio.TimeoutError) as e:
            raise plcconnMessageWriter(e) from e
        try:
            data = await asyncio.wait_for(self._reader.read(RESBUF_MAX_RLEN), max(deadline - loop.time(), 0))
        except (OSError, asyncio.TimeoutError) as e:
            raise plcconnMessageReader(e) from e
        if not data:
            raise plcconnMessageReader(EOFError('Connection closed by peer'))
        self.logger.debug(f'{self.name} exchanged {len(msg)} bytes for {len(data)} bytes')
        return data.ljust(RESBUF_MAX_RLEN, b'\x00')

    async def _close(self) -> None:
        if self._writer is not None:
            writer = self._writer
            self._reader = None
            self._writer = None
            try:
                writer.close()
                await writer.wait_closed()
            except OSError as e:
                raise plcconnSocketShutdown(e) from e
            finally:
                self.logger.debug(f'{self.name} closed connection to "{self.address}:{self.port}"')
