''' Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads` and :func:`json.dumps`. The choice
    can be forced by setting the ``TSPACE_JSON`` environment variable to one
    of 'msgspec', 'orjson', or 'json' prior to the first import.
'''

import os

# The business about conditionally importing the libraries is intended to
# avoid importing less efficient libraries if they are not available. With
# the right build process this could be determined at build time, instead
# of at run time.

msgspec = None
orjson = None
json = None

backend = os.environ.get('TSPACE_JSON', '').lower()

if backend not in ('', 'msgspec', 'orjson', 'json'):
    raise ImportError('unknown TSPACE_JSON backend: ' + repr(backend))

if backend in ('', 'msgspec'):
    try:
        import msgspec
    except ImportError:
        if backend == 'msgspec':
            raise

if msgspec is None and backend in ('', 'orjson'):
    try:
        import orjson
    except ImportError:
        if backend == 'orjson':
            raise

if msgspec is None and orjson is None:
    import json


# The msgspec 'encode' operation returns bytes, as does orjson.dumps. To
# maintain alignment all 'dumps' methods need to do so as well.

def json_dumps(*args, **kwargs):
    return json.dumps(*args, **kwargs).encode()

if msgspec is not None:
    backend = 'msgspec'
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
    DecodeError = msgspec.DecodeError
elif orjson is not None:
    backend = 'orjson'
    dumps = orjson.dumps
    loads = orjson.loads
    DecodeError = orjson.JSONDecodeError
else:
    backend = 'json'
    dumps = json_dumps
    loads = json.loads
    DecodeError = json.JSONDecodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
