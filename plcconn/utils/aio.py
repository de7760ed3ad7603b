'''
This module provides concurrency related utility methods based on asyncio
@author: Thomas Wanderer
'''

# Imports
import sys
import asyncio
try:
    import uvloop
except ImportError:
    uvloop = None
from typing import Any, Callable, Coroutine, Optional

# plcconn Imports
from plcconn.utils.exceptions import plcconnBaseException


def get_loop(factory: Optional[Callable[[], asyncio.AbstractEventLoop]]=None) -> asyncio.AbstractEventLoop:
    '''
    Returns a new loop for the current context (thread/process).
    The loop is created by the optionally passed loop factory. If no factory is provided this
    tries to create a fast uvloop (dependent on availability) or one with the default implementation.
    '''
    try:
        if callable(factory):
            loop = factory()
        elif uvloop:
            loop = uvloop.new_event_loop()
        else:
            loop = asyncio.new_event_loop()
    except Exception as e:
        raise plcconnAsyncLoopCreation(e)

    def handle_exception(loop, context):
        e_message = context.get('message')
        e_error = context.get('exception')
        e_trace = e_error.__traceback__ if e_error else None
        e_error = plcconnAsyncLoopException(e_error or e_message)
        sys.excepthook(type(e_error), e_error, e_trace)
    if not loop.get_exception_handler():
        loop.set_exception_handler(handle_exception)
    return loop


def run(coroutine: Coroutine, factory: Optional[Callable[[], asyncio.AbstractEventLoop]]=None) -> Any:
    '''
    Runs a coroutine until it completes on a new loop and closes the loop afterwards
    '''
    loop = get_loop(factory)
    try:
        asyncio.set_event_loop(loop)
        return loop.run_until_complete(coroutine)
    finally:
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
        finally:
            asyncio.set_event_loop(None)
            loop.close()


class plcconnAsyncLoopCreation(plcconnBaseException):
    '''
    Gets thrown when the loop factory (or uvloop) fails to create a loop
    '''
    template = 'Cannot create Asyncio loop ({error})'


class plcconnAsyncLoopException(plcconnBaseException):
    '''
    Wraps an exception reported by a loop callback or task, so the global exception hook reports it
    '''

    def template(self, error):
        name = error if isinstance(error, str) else error.__class__.__name__
        return f'Async loop reported "{name}" ({error})'
