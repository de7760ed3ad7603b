'''
A utility class providing static methods for data type checks.
The preferred way of type checking is to simply use variables in try
blocks and catch type non-conformity in except blocks. But for cases where
prior type checking is the better approach, this utility class provides a set of
type checking methods.
@author: Thomas Wanderer
'''

# Imports
import string
from typing import Any


class TypeChecker:

    @staticmethod
    def is_integer(obj: Any) -> bool:
        '''
        Checks if a number is an integer or if a string represents an integer
        '''
        if type(obj) == str:
            return obj.strip().isdigit()
        else:
            return isinstance(obj, int) and not isinstance(obj, bool)

    @staticmethod
    def is_float(obj: Any) -> bool:
        '''
        Checks if a number is a float or a string represents a float
        '''
        if type(obj) == str:
            obj = obj.strip()
            return obj.count('.') == 1 and obj.replace('.', '').isdigit()
        else:
            return isinstance(obj, float)

    @staticmethod
    def is_bytes(obj: Any) -> bool:
        '''
        Checks if an object is a bytes-like sequence which can be written to a socket
        '''
        return isinstance(obj, (bytes, bytearray, memoryview))

    @staticmethod
    def is_hex(obj: Any) -> bool:
        '''
        Checks if a string represents a sequence of hexadecimal encoded bytes (e.g. "01 02 ff")
        '''
        if type(obj) != str:
            return False
        digits = ''.join(obj.split())
        return len(digits) > 0 and len(digits) % 2 == 0 and all(c in string.hexdigits for c in digits)
