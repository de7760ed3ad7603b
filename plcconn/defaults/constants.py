'''
This is a central file for defining package default constant values used across plcconn modules.
@author: Thomas Wanderer
'''


# Possible values: 'product', 'staging', 'development', 'debug'
MODE: str = 'product'

# Translates to level "logging.WARN = 30"
VERBOSITY: int = 3

# A Semantic Versioning number
VERSION: str = '0.1.0'

# The name of the package logger
NAME: str = 'plcconn'

# Maximum size of a PLC response (Receive buffer capacity in bytes)
RESBUF_MAX_RLEN: int = 256

# Default INI section holding a PLC endpoint
SECTION: str = 'plc'

# Set by script
ERROR = None
