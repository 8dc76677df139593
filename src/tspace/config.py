""" Runtime settings for the tuple-space protocol and its transports. Every
    setting is read from the environment at call time, falling back to the
    documented default; this allows a test harness or a daemon wrapper to
    adjust the behavior without touching any configuration files.
"""

import os


defaults = dict()
defaults['TSPACE_ADDRESS'] = '127.0.0.1'
defaults['TSPACE_TIMEOUT'] = 5.0
defaults['TSPACE_MIN_PORT'] = 10079
defaults['TSPACE_MAX_PORT'] = 13679


def _lookup(name, cast):

    try:
        value = os.environ[name]
    except KeyError:
        return defaults[name]

    try:
        value = cast(value)
    except ValueError:
        raise ValueError("invalid value for %s: %s" % (name, repr(value)))

    return value


def address():
    """ Return the default address a :class:`tspace.transport.zmq.Server`
        will bind to, as set by ``TSPACE_ADDRESS``.
    """

    return _lookup('TSPACE_ADDRESS', str)


def timeout():
    """ Return the number of seconds a client will wait for a response, as
        set by ``TSPACE_TIMEOUT``.
    """

    value = _lookup('TSPACE_TIMEOUT', float)

    if value <= 0:
        raise ValueError('TSPACE_TIMEOUT must be positive, not ' + repr(value))

    return value


def port_range():
    """ Return a (minimum, maximum) tuple describing the range of ports a
        server will search when it is not given a specific port.
    """

    minimum = _lookup('TSPACE_MIN_PORT', int)
    maximum = _lookup('TSPACE_MAX_PORT', int)

    if minimum > maximum:
        raise ValueError("empty port range: %d-%d" % (minimum, maximum))

    return (minimum, maximum)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
