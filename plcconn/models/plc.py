'''
Defaults
@author: Thomas Wanderer
'''

endpoint = {
    'type': 'object',
    'properties': {
        'address': {
            'type': 'string',
            'description': 'The PLC host name or IP address',
            'default': 'localhost',
            'minLength': 1
            },
        'port': {
            'type': 'integer',
            'description': 'The PLC TCP port',
            'default': 1025,
            'minimum': 1,
            'maximum': 65535
            },
        'timeout': {
            'type': 'number',
            'description': 'Seconds allowed for connecting and for each request/response exchange',
            'default': 5,
            'exclusiveMinimum': 0
            }
        },
    'required': [
        'address',
        'port',
        'timeout'
        ],
    'additionalProperties': False
    }
