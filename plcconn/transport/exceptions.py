'''
This module defines module related custom exceptions based on
the plcconnBaseException
@author: Thomas Wanderer
'''

# Imports
from plcconn.utils.exceptions import plcconnBaseException


class plcconnNilInstance(plcconnBaseException):
    '''
    Gets thrown when a client operation is invoked without a client instance
    '''
    template = 'Client instance is nil ({error})'


class plcconnInvalidArgument(plcconnBaseException):
    '''
    Gets thrown when a client operation receives an unusable argument
    '''
    template = 'Invalid argument ({error})'


class plcconnSocketCreation(plcconnBaseException):
    '''
    Gets thrown when the transport module cannot connect a socket
    '''
    template = 'Cannot connect transport socket ({error})'


class plcconnSocketShutdown(plcconnBaseException):
    '''
    Gets thrown when the transport module cannot close a socket
    '''
    template = 'Cannot close transport socket ({error})'


class plcconnMessageExchange(plcconnBaseException):
    '''
    Gets thrown when a request/response exchange with the PLC fails
    '''
    template = 'Cannot exchange message with transport connection ({error})'


class plcconnMessageWriter(plcconnMessageExchange):
    '''
    Gets thrown when the transport module cannot send a message
    '''
    template = 'Cannot write message to transport connection ({error})'


class plcconnMessageReader(plcconnMessageExchange):
    '''
    Gets thrown when the transport module cannot read a response
    '''
    template = 'Cannot read message from transport connection ({error})'
