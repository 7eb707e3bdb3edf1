'''
JSON Merge Patch (RFC 7396) for MDS documents.

Both functions walk documents with an explicit stack rather than by
recursion, so nesting depth is bounded by memory and not by the
interpreter recursion limit.
'''

from copy import deepcopy

def copy_value(value):
    '''
    Make a deep copy of the JSON-like `value`.

    Objects and arrays are rebuilt; anything else is handed to `deepcopy`.
    Object key order is preserved.
    '''

    holder = [None]
    stack = [(holder, 0, value)]

    while stack:
        (parent, key, item) = stack.pop()

        if isinstance(item, dict):
            result = {}
            for (k, v) in item.items():
                # placeholder fixes the key order
                result[k] = None
                stack.append((result, k, v))
        elif isinstance(item, list):
            result = [None] * len(item)
            for (i, v) in enumerate(item):
                stack.append((result, i, v))
        else:
            result = deepcopy(item)

        parent[key] = result

    return holder[0]

def merge_patch(target, patch):
    '''
    Return the result of applying the merge patch `patch` to `target`.

    Neither argument is modified. If `patch` is not an object it replaces
    `target` outright. Otherwise each of its keys is merged recursively
    into `target`, which is treated as an empty object if it is not
    one already. A `None` value removes its key from the result and
    removing a key that does not exist is not an error.

    Keys of `target` keep their position, including keys whose values
    are replaced. Keys added by `patch` are appended in patch order.

    The result shares any subtrees of `target` that `patch` does not
    touch.
    '''

    holder = [None]
    stack = [(holder, 0, target, patch)]

    while stack:
        (parent, key, target, patch) = stack.pop()

        if not isinstance(patch, dict):
            parent[key] = copy_value(patch)
            continue

        if isinstance(target, dict):
            result = dict(target)
        else:
            # the previous value is discarded
            result = {}

        for (k, value) in patch.items():
            if value is None:
                result.pop(k, None)
            else:
                existing = result.get(k)
                # placeholder appends a new key in patch order
                result[k] = existing
                stack.append((result, k, existing, value))

        parent[key] = result

    return holder[0]
