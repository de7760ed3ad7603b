'''
A utility class for exception handling and the base of all plcconn exceptions.
@author: Thomas Wanderer
'''

# Imports
import sys
import traceback
from types import TracebackType
from typing import Union, Callable, Type, Optional

# plcconn Imports
from . import logging


class ExceptionHandler:
    '''
    Installs itself as global exception hook and reports uncaught exceptions
    through the plcconn logger. The strategy is selected by name (Usually the
    constants.MODE), unknown names fall back to the default strategy:
        default: Exception name and text
        product: The rendered plcconn message only, without any internals
        debug:   Message, cause and (in DEBUG level) the full traceback
    Fatal exceptions (e.g. a missing dependency) terminate the program with exit code 1.
    '''
    # Logger
    logger = None

    def __init__(self, handler: Optional[str]=None, logger: Optional[logging.Logger]=None) -> None:
        self.__class__.logger = logger or logging.getLogger()

        # Get the strategy
        name = (handler or 'default').lower()
        method = getattr(self.__class__, f'{name}_handler', None)
        if not callable(method):
            self.logger.error(f'Exception handler "{handler}" is not implemented')
            name, method = 'default', self.default_handler
        self.method = method

        # Finally set this as global exception handler
        replaced = isinstance(getattr(sys.excepthook, '__self__', None), ExceptionHandler)
        sys.excepthook = self.hook
        self.logger.debug(f'{"Changed" if replaced else "Setup"} exception handler "{name.upper()}"')

    def hook(self, error_type: Type[BaseException], error: BaseException, error_trace: Optional[TracebackType]) -> None:
        try:
            self.method(error_type, error, error_trace)
        except Exception as e:
            self.logger.error(f'Cannot handle exception ({e})')
        finally:
            if getattr(error, 'fatal', False):
                sys.exit(1)

    @staticmethod
    def default_handler(error_type, error, error_trace) -> None:
        logger = ExceptionHandler.logger or logging.getLogger()
        logger.error(f'{error_type.__name__}: "{error}"')

    @staticmethod
    def product_handler(error_type, error, error_trace) -> None:
        logger = ExceptionHandler.logger or logging.getLogger()
        if isinstance(error, plcconnBaseException):
            logger.error(error.message)
        else:
            logger.error(f'Unexpected exception "{error_type.__name__}" occurred!')

    @staticmethod
    def debug_handler(error_type, error, error_trace) -> None:
        logger = ExceptionHandler.logger or logging.getLogger()
        logger.error(f'{error_type.__name__}: {error}')
        if error.__cause__ is not None:
            logger.error(f'Caused by {error.__cause__.__class__.__name__}: {error.__cause__}')
        if logger.level == logging.DEBUG:
            traceback.print_exception(error_type, error, error_trace, chain=True)


class plcconnBaseException(Exception):
    '''
    The base class for all plcconn exceptions.
    The error (a text or the low-level exception) is kept as "error", the text
    rendered by the class template as "message".
    '''
    # A template string with an "{error}" field or a method rendering the message
    template: Union[str, Callable] = None

    # A flag causing the program to halt when fatal is True
    fatal: bool = False

    def __init__(self, error) -> None:
        super().__init__(error)
        self.error = error
        try:
            if isinstance(self.template, str):
                self.message = self.template.format(error=error)
            elif callable(self.template):
                self.message = self.template(error)
            else:
                self.message = str(error)
        except Exception as e:
            self.message = f'{self.__class__.__name__} without message ({e})'

    def __str__(self) -> str:
        return self.message


class plcconnModuleImport(plcconnBaseException):
    '''
    Gets thrown when a module dependency of plcconn is not installed
    '''
    fatal = True

    def template(self, error: ImportError) -> str:
        if getattr(error, 'name', None):
            return f'Missing module dependency ({error.name}): Please install via "pip install {error.name}"'
        return f'Missing module dependency ({error})'
