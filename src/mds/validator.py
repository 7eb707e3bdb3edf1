'''
Type validation for MDS documents.

A valid document is either a string or an object whose keys are strings and
whose values are themselves valid documents. Each value is checked against a
flat JSON schema with `jsonschema` while the tree is walked with an explicit
stack, so arbitrarily deep documents can be validated.
'''

from jsonschema import Draft7Validator

from .errors import UnsupportedValueType

VALUE_SCHEMA = {
    '$schema': 'http://json-schema.org/draft-07/schema#',
    'type': ['string', 'object'],
    'propertyNames': {
        'type': 'string'
    },
}

_validator = Draft7Validator(VALUE_SCHEMA)  # pylint: disable=invalid-name

def validate(value):
    '''
    Raise `UnsupportedValueType` if `value` holds anything other than
    leaves and nodes.

    Values are visited depth first in document order and validation
    stops at the first violation found.
    '''

    stack = [([], value)]

    while stack:
        (path, item) = stack.pop()

        # iter_errors is lazy so only the first error is ever computed
        error = next(_validator.iter_errors(item), None)
        if error is not None:
            raise UnsupportedValueType(error.instance, path)

        if isinstance(item, dict):
            # reversed so the first child is visited first
            for (k, v) in reversed(list(item.items())):
                stack.append((path + [k], v))

def is_valid(value):
    '''
    Test if `value` holds only leaves and nodes.
    '''

    try:
        validate(value)
    except UnsupportedValueType:
        return False
    else:
        return True
