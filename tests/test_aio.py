'''
This laboratory checks the functionality of the plcconn asyncio client and loop utilities
@author: Thomas Wanderer
'''

# Imports
import unittest
import asyncio
import logging
import sys

# Test imports
from tests.listener import MockListener, respond, echo, silent, closedPort

# plcconn Imports
from plcconn.utils import aio
from plcconn.defaults.constants import RESBUF_MAX_RLEN
from plcconn.transport import (
    AsyncTCPPlcClient,
    plcconnNilInstance,
    plcconnInvalidArgument,
    plcconnSocketCreation,
    plcconnMessageReader
    )


# Setup logger
logger = logging.getLogger()
logger.setLevel(logging.DEBUG)
if not logger.hasHandlers():
    logger.addHandler(logging.StreamHandler(sys.stdout))


class LoopUtilities(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        logger.info(f'Starting unittest: {cls.__name__}')

    @classmethod
    def tearDownClass(cls):
        logger.info(f'Ending unittest: {cls.__name__}')

    def testGetLoop(self):
        loop = aio.get_loop()
        try:
            if aio.uvloop:
                self.assertIsInstance(loop, aio.uvloop.Loop, 'uvloop should be preferred when installed')
            self.assertIsNotNone(loop.get_exception_handler())
        finally:
            loop.close()

    def testGetLoopFactory(self):
        loop = aio.get_loop(asyncio.new_event_loop)
        try:
            self.assertIsInstance(loop, asyncio.AbstractEventLoop)
        finally:
            loop.close()

    def testRun(self):
        async def compute():
            await asyncio.sleep(0)
            return 42
        self.assertEqual(aio.run(compute()), 42)

    def testLoopCreationFailure(self):
        def factory():
            raise RuntimeError('no loop')
        with self.assertRaises(aio.plcconnAsyncLoopCreation):
            aio.get_loop(factory)


class AsyncClient(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        logger.info(f'Starting unittest: {cls.__name__}')

    @classmethod
    def tearDownClass(cls):
        logger.info(f'Ending unittest: {cls.__name__}')

    def testConnectAndClose(self):
        async def scenario(port):
            client = AsyncTCPPlcClient('127.0.0.1', port, 1)
            states = [await client.isConnected()]
            await client.connect()
            await client.connect()
            states.append(await client.isConnected())
            await client.close()
            await client.close()
            states.append(await client.isConnected())
            return states

        with MockListener(silent) as listener:
            states = aio.run(scenario(listener.port))
            self.assertTrue(listener.waitForConnections(1))
            self.assertEqual(listener.accepted, 1, 'Connecting twice must reuse the connection')
        self.assertEqual(states, [False, True, False])

    def testConnectUnreachable(self):
        async def scenario():
            client = AsyncTCPPlcClient('127.0.0.1', closedPort(), 1)
            try:
                await client.connect()
            finally:
                self.assertFalse(await client.isConnected())

        with self.assertRaises(plcconnSocketCreation):
            aio.run(scenario())

    def testWrite(self):
        async def scenario(port):
            async with AsyncTCPPlcClient('127.0.0.1', port, 1) as client:
                return await client.write(b'hello')

        with MockListener(respond()) as listener:
            response = aio.run(scenario(listener.port))
        self.assertEqual(response[:8], b'response')
        self.assertEqual(response[8:], bytes(RESBUF_MAX_RLEN - 8))

    def testWriteEmptyMessage(self):
        client = AsyncTCPPlcClient('127.0.0.1', closedPort(), 1)
        with self.assertRaises(plcconnInvalidArgument):
            aio.run(client.write(b''))

    def testWriteTimeout(self):
        async def scenario(port):
            client = AsyncTCPPlcClient('127.0.0.1', port, 1)
            client.setTimeoutSecond(0.3)
            try:
                with self.assertRaises(plcconnMessageReader):
                    await client.write(b'hello')
                return await client.isConnected()
            finally:
                await client.close()

        with MockListener(silent) as listener:
            self.assertTrue(aio.run(scenario(listener.port)), 'A failed exchange must not close the connection')

    def testOpenWriteClose(self):
        async def scenario(port):
            client = AsyncTCPPlcClient('127.0.0.1', port, 1)
            response = await client.openWriteClose(b'hello')
            return response, await client.isConnected()

        with MockListener(respond()) as listener:
            response, connected = aio.run(scenario(listener.port))
        self.assertEqual(response[:8], b'response')
        self.assertFalse(connected)

    def testSerializedWrites(self):
        async def scenario(port):
            async with AsyncTCPPlcClient('127.0.0.1', port, 2) as client:
                return await asyncio.gather(*[client.write(f'request-{i}'.encode()) for i in range(8)])

        with MockListener(echo()) as listener:
            responses = aio.run(scenario(listener.port))
            self.assertEqual(listener.accepted, 1)
        for i, response in enumerate(responses):
            self.assertEqual(response.rstrip(b'\x00'), f'ack:request-{i}'.encode())

    def testNilInstance(self):
        with self.assertRaises(plcconnNilInstance):
            aio.run(AsyncTCPPlcClient.connect(None))
        with self.assertRaises(plcconnNilInstance):
            aio.run(AsyncTCPPlcClient.close(None))
        with self.assertRaises(plcconnNilInstance):
            aio.run(AsyncTCPPlcClient.openWriteClose(None, b'hello'))
        self.assertFalse(aio.run(AsyncTCPPlcClient.isConnected(None)))
