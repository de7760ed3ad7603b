'''
Module methods to retrieve default values from their JSON schema
and to validate values against their JSON schema.
A token addresses a schema by "<model module>.<schema>[.<property>...]",
for instance "plc.endpoint" or "plc.endpoint.port".
@author: Thomas Wanderer
'''

try:
    # Imports
    import textwrap
    from pydoc import locate
    from typing import Any, Optional, Tuple
    from jsonschema import validate
    from jsonschema.exceptions import ValidationError, SchemaError

    # plcconn Imports
    from plcconn.utils import logging
except ImportError as e:
    from plcconn.utils.exceptions import plcconnModuleImport
    raise plcconnModuleImport(e)


# Utility methods
def _buildDefaultValue(schema: dict) -> Any:
    '''
    This private method builds a default data structure
    object from the provided value schema.
    :param object schema: The JSON schema definition
    :returns object: The default data structure or ``None``
    '''
    # If the schema describes a list, we will just return an empty list
    if schema.get('type') == 'array':
        return []

    # If the schema describes an object, we will traverse the schema to get default values for each required property
    elif schema.get('type') == 'object':
        properties = schema.get('properties') or {}
        possible = properties.keys()
        required = schema.get('required')
        if required:
            possible = [p for p in possible if p in required]
        return {key: _buildDefaultValue(properties[key] or {}) for key in possible}

    # Else return the default value of a simple type
    else:
        return schema.get('default')


def _getSchema(token: str) -> Optional[dict]:
    '''
    Resolves a token to the (sub-)schema it refers to or ``None`` if not defined
    '''
    domain, _, key = str(token).partition('.')
    module = locate(f'{__package__}.{domain}') if domain else None
    if module is None or not key:
        return None

    # Traverse through the property schemas for each key token
    tokens = key.split('.')
    schema = getattr(module, tokens.pop(0), None)
    for t in tokens:
        if not isinstance(schema, dict):
            return None
        schema = (schema.get('properties') or {}).get(t)
    return schema if isinstance(schema, dict) else None


# Get Value functions
def getDefaultValue(token: str) -> Any:
    '''
    Returns a default value for the token if found in the model schema. Please refer to
    http://json-schema.org/documentation.html or
    https://spacetelescope.github.io/understanding-json-schema for more insights on JSON schema.
    :param str token: The key token default value if found
    :returns: The default value for this token or ``None`` if not found
    '''
    schema = _getSchema(token)
    if schema is None:
        logging.getLogger().warning(f'Default value for token "{token}" not defined')
        return None
    return _buildDefaultValue(schema)


def getValidatedValue(token: str, value: Any, exception: bool=False) -> Any:
    '''
    Returns the provided value if it passed a validation against the token's
    model schema or ``None`` if the validation failed. With "exception" set,
    the ValidationError is returned instead of ``None``.
    A token without schema cannot be validated and passes the value unchanged.
    :param str token: The token
    :param value: The value
    :returns value: The provided value if valid or ``None`` if validation failed
    '''
    logger = logging.getLogger()
    try:
        schema = _getSchema(token)
        if schema is None:
            raise UserWarning(f'No validation schema found for token "{token}". Define schema in "{__package__}"')
        validate(value, schema)
    except UserWarning as uw:
        logger.debug(uw)
    except SchemaError as se:
        logger.warning(f'Validation schema for token "{token}" is malformed ({se.message})')
    except ValidationError as ve:
        if not exception:
            logger.warning(f'Schema "{token}" validation with value "{textwrap.shorten(str(value), 40, placeholder="...")}" failed ({ve.message})')
        # Make sure a "None" will be returned on Validation errors in any case
        value = ve if exception else None
    return value


# Validation function
def isValidValue(token: str, value: Any) -> Tuple[bool, Any]:
    '''
    Checks if the provided value passes a validation check against the token's
    model schema.
    :param str token: The token
    :param value: The value
    :returns: Validation result and the value or a validation failure cause instead
    :rtype tuple:
    '''
    result = getValidatedValue(token, value, exception=True)
    if isinstance(result, ValidationError):
        return False, result.message
    else:
        return True, value
