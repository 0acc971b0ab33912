#!/usr/bin/python
'''
Graph identifiers
-----------------

Identifier is a five-field tuple naming a monitored metric source, the same
way collectd names its data files: host, plugin, plugin instance, type and
type instance. Any field may be empty.

An identifier used as a graph selector may contain wildcards instead of
literal values. Textual tokens ``/any/`` and ``/all/`` (case-insensitive)
are converted to :data:`ANY` and :data:`ALL` as soon as they are assigned to
an identifier's field, so matching never needs to parse them again.

   * :data:`ANY` matches every value, and graph instances are distinguished
     by the matched value
   * :data:`ALL` matches every value, and all the matches are collapsed into
     a single graph instance

.. autodata:: ANY

.. autodata:: ALL

.. autodata:: FIELDS

.. autodata:: REPLACE_ALL

.. autodata:: REPLACE_ANY

.. autoclass:: Identifier
   :members:
   :member-order: groupwise

.. autoclass:: Wildcard
   :members:

.. autofunction:: with_selector

.. autofunction:: compare

.. autofunction:: matches

.. autofunction:: is_wildcard

.. autofunction:: from_file

.. autofunction:: from_dict

.. autofunction:: from_json

'''
#-----------------------------------------------------------------------------

import json
import urllib.parse

#-----------------------------------------------------------------------------

FIELDS = ("host", "plugin", "plugin_instance", "type", "type_instance")
'''
Names of identifier's fields, in the order used for comparison and
serialization.
'''

REPLACE_ALL = 0x01
'''
Flag for :func:`with_selector()`: replace :data:`ALL` fields with values of
the concrete identifier.
'''

REPLACE_ANY = 0x02
'''
Flag for :func:`with_selector()`: replace :data:`ANY` fields with values of
the concrete identifier.
'''

FILE_SUFFIX = ".rrd"

#-----------------------------------------------------------------------------
# wildcards {{{

class Wildcard(object):
    '''
    Wildcard field value. There are exactly two instances of this class:
    :data:`ANY` and :data:`ALL`.
    '''
    def __init__(self, token):
        self.token = token

    def __repr__(self):
        return "<Wildcard %s>" % (self.token,)

    def __str__(self):
        return self.token

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

ANY = Wildcard("/any/")
'''
Wildcard that differentiates graph instances by matched value.
'''

ALL = Wildcard("/all/")
'''
Wildcard that collapses all matched values into one graph instance.
'''

_WILDCARDS = {
    ANY.token: ANY,
    ALL.token: ALL,
}

def is_wildcard(value):
    '''
    :param value: field value (string or :class:`Wildcard`)
    :return: ``True`` if :obj:`value` is :data:`ANY` or :data:`ALL`

    Check if a field value is a wildcard.
    '''
    return (value is ANY or value is ALL)

def _parse_field(value):
    if value is None:
        return ""
    if isinstance(value, Wildcard):
        return value
    if not isinstance(value, str):
        raise ValueError("identifier field must be a string: %r" % (value,))
    return _WILDCARDS.get(value.lower(), value)

def _field_text(value):
    # wildcards compare and serialize as their tokens
    if isinstance(value, Wildcard):
        return value.token
    return value

def _check_field_name(name):
    if name not in FIELDS:
        raise ValueError("unknown identifier field: %s" % (name,))

# }}}
#-----------------------------------------------------------------------------

class Identifier(object):
    '''
    Five-field identifier of a metric source or a graph selector.

    Fields are accessible as read-write properties. Setting a field to
    ``None`` is the same as setting it to empty string. Setting a field to
    ``/any/`` or ``/all/`` string stores a wildcard.

    Identifiers are comparable (``==``, ``<`` and so on) with
    :func:`compare()` semantics. :attr:`mtime` doesn't take part in
    comparisons.
    '''
    def __init__(self, host = None, plugin = None, plugin_instance = None,
                 type = None, type_instance = None, mtime = 0):
        '''
        :param host: host name
        :param plugin: plugin name
        :param plugin_instance: plugin instance
        :param type: type name
        :param type_instance: type instance
        :param mtime: modification time of the data file
        :type mtime: unix timestamp
        '''
        self._fields = {}
        for (name, value) in zip(FIELDS, (host, plugin, plugin_instance,
                                          type, type_instance)):
            self._fields[name] = _parse_field(value)
        self.mtime = mtime

    def copy(self):
        '''
        Deep copy of the identifier.
        '''
        result = Identifier(mtime = self.mtime)
        result._fields = self._fields.copy()
        return result

    clone = copy

    def __repr__(self):
        return "<Identifier %s>" % (self.to_string(),)

    #-----------------------------------------------------------------
    # field access {{{

    def get_field(self, name):
        '''
        :param name: field name (one of :data:`FIELDS`)
        :return: string or :class:`Wildcard`
        :throws: :exc:`ValueError` on unknown field name

        Get value of a field by its name.
        '''
        _check_field_name(name)
        return self._fields[name]

    def set_field(self, name, value):
        '''
        :param name: field name (one of :data:`FIELDS`)
        :param value: string, :class:`Wildcard` or ``None``
        :throws: :exc:`ValueError` on unknown field name

        Set value of a field by its name.
        '''
        _check_field_name(name)
        self._fields[name] = _parse_field(value)

    def fields(self):
        '''
        :return: tuple of five field values, in :data:`FIELDS` order
        '''
        return tuple(self._fields[name] for name in FIELDS)

    def has_wildcards(self):
        '''
        Check if any of the fields is a wildcard.
        '''
        return any(is_wildcard(v) for v in self._fields.values())

    @property
    def host(self):
        '''
        Host name (read-write).
        '''
        return self._fields["host"]

    @host.setter
    def host(self, value):
        self._fields["host"] = _parse_field(value)

    @property
    def plugin(self):
        '''
        Plugin name (read-write).
        '''
        return self._fields["plugin"]

    @plugin.setter
    def plugin(self, value):
        self._fields["plugin"] = _parse_field(value)

    @property
    def plugin_instance(self):
        '''
        Plugin instance (read-write).
        '''
        return self._fields["plugin_instance"]

    @plugin_instance.setter
    def plugin_instance(self, value):
        self._fields["plugin_instance"] = _parse_field(value)

    @property
    def type(self):
        '''
        Type name (read-write).
        '''
        return self._fields["type"]

    @type.setter
    def type(self, value):
        self._fields["type"] = _parse_field(value)

    @property
    def type_instance(self):
        '''
        Type instance (read-write).
        '''
        return self._fields["type_instance"]

    @type_instance.setter
    def type_instance(self, value):
        self._fields["type_instance"] = _parse_field(value)

    # }}}
    #-----------------------------------------------------------------
    # comparisons {{{

    def _key(self):
        return tuple(_field_text(self._fields[name]) for name in FIELDS)

    def __eq__(self, other):
        if not isinstance(other, Identifier):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        if not isinstance(other, Identifier):
            return NotImplemented
        return self._key() != other._key()

    def __lt__(self, other):
        return compare(self, other) < 0

    def __gt__(self, other):
        return compare(self, other) > 0

    def __le__(self, other):
        return compare(self, other) <= 0

    def __ge__(self, other):
        return compare(self, other) >= 0

    # identifiers are mutable
    __hash__ = None

    # }}}
    #-----------------------------------------------------------------
    # serialization {{{

    def to_string(self):
        '''
        :return: human-readable name of the identifier

        Format is ``host/plugin-plugin_instance/type-type_instance``, with
        empty fields (and their separators) omitted.
        '''
        (host, plugin, plugin_instance, type, type_instance) = \
            [_field_text(v) for v in self.fields()]
        parts = []
        if host != "":
            parts.append(host)
        if plugin_instance != "":
            parts.append("%s-%s" % (plugin, plugin_instance))
        elif plugin != "":
            parts.append(plugin)
        if type_instance != "":
            parts.append("%s-%s" % (type, type_instance))
        elif type != "":
            parts.append(type)
        return "/".join(parts)

    __str__ = to_string

    def to_file(self):
        '''
        :return: relative path of the data file

        Path has the form ``host/plugin-plugin_instance/type-type_instance.rrd``.
        Field values are escaped, so :func:`from_file()` restores the exact
        identifier.
        '''
        (host, plugin, plugin_instance, type, type_instance) = \
            [_escape_path_part(_field_text(v), name in _DASHED_FIELDS)
             for (name, v) in zip(FIELDS, self.fields())]
        plugin_dir = plugin
        if plugin_instance != "":
            plugin_dir += "-" + plugin_instance
        file_name = type
        if type_instance != "":
            file_name += "-" + type_instance
        return "%s/%s/%s%s" % (host, plugin_dir, file_name, FILE_SUFFIX)

    def to_dict(self):
        '''
        Dictionary with all five fields. Empty fields are empty strings.
        '''
        return dict(
            (name, _field_text(self._fields[name])) for name in FIELDS
        )

    def to_json(self):
        '''
        :return: JSON object (string) with all five fields
        '''
        return json.dumps(self.to_dict(), sort_keys = True)

    def to_params(self):
        '''
        :return: URI query fragment
            (``host=...;plugin=...;...;type_instance=...``)

        Build a query string that identifies the graph in web interface.
        '''
        return ";".join(
            "%s=%s" % (name, urllib.parse.quote(_field_text(self._fields[name]), safe = ""))
            for name in FIELDS
        )

    # }}}
    #-----------------------------------------------------------------

#-----------------------------------------------------------------------------
# algorithms {{{

def compare(a, b):
    '''
    :type a: :class:`Identifier`
    :type b: :class:`Identifier`
    :return: ``-1``, ``0`` or ``1``

    Compare two identifiers field by field (in :data:`FIELDS` order),
    case-sensitively. Wildcards are compared as their textual tokens.
    '''
    key_a = a._key()
    key_b = b._key()
    if key_a < key_b:
        return -1
    elif key_a > key_b:
        return 1
    return 0

def matches(selector, ident):
    '''
    :param selector: pattern to check
    :type selector: :class:`Identifier`
    :param ident: identifier to check against :obj:`selector`
    :type ident: :class:`Identifier`
    :rtype: bool

    Check if an identifier matches selector. A field matches if selector's
    field is a wildcard or both fields are equal, ignoring case.
    '''
    for name in FIELDS:
        pattern = selector._fields[name]
        if is_wildcard(pattern):
            continue
        if pattern.lower() != _field_text(ident._fields[name]).lower():
            return False
    return True

def with_selector(selector, ident, flags = REPLACE_ANY):
    '''
    :param selector: selector the new identifier is based on
    :type selector: :class:`Identifier`
    :param ident: concrete identifier
    :type ident: :class:`Identifier`
    :param flags: bitwise OR of :data:`REPLACE_ANY` and :data:`REPLACE_ALL`
    :return: :class:`Identifier`

    Build an identifier from a selector and a concrete identifier (typically
    a data file matching the selector). Literal fields of :obj:`selector` are
    copied. Wildcard fields are replaced with :obj:`ident`'s values when the
    wildcard's kind is selected by :obj:`flags`, otherwise the wildcard is
    copied.

    With the default flags the result is the canonical identifier of a graph
    instance: :data:`ANY` fields hold the concrete values, :data:`ALL` fields
    stay :data:`ALL`.
    '''
    result = Identifier(mtime = ident.mtime)
    for name in FIELDS:
        pattern = selector._fields[name]
        if (pattern is ANY and flags & REPLACE_ANY) or \
           (pattern is ALL and flags & REPLACE_ALL):
            result._fields[name] = ident._fields[name]
        else:
            result._fields[name] = pattern
    return result

# }}}
#-----------------------------------------------------------------------------
# deserialization {{{

# fields followed by "-" and an instance; dashes in instances are left
# alone, so collectd's own file names come out unchanged
_DASHED_FIELDS = ("plugin", "type")

def _escape_path_part(value, escape_dash = False):
    result = urllib.parse.quote(value, safe = "")
    if escape_dash:
        result = result.replace("-", "%2D")
    if result.startswith("."):
        result = "%2E" + result[1:]
    return result

def _unescape_path_part(value):
    return urllib.parse.unquote(value)

def from_file(path):
    '''
    :param path: data file path, relative to data directory
    :return: :class:`Identifier`
    :throws: :exc:`ValueError` if the path doesn't look like
        ``host/plugin[-plugin_instance]/type[-type_instance].rrd``

    Create identifier out of a data file path. This is the reverse of
    :meth:`Identifier.to_file()`, but it also accepts paths written by
    collectd, where instance is anything after the first ``-``.
    '''
    parts = path.split("/")
    if len(parts) != 3 or not parts[2].endswith(FILE_SUFFIX):
        raise ValueError("not a data file path: %s" % (path,))
    (host, plugin_dir, file_name) = parts
    file_name = file_name[:-len(FILE_SUFFIX)]
    (plugin, _sep, plugin_instance) = plugin_dir.partition("-")
    (type, _sep, type_instance) = file_name.partition("-")
    return Identifier(
        host = _unescape_path_part(host),
        plugin = _unescape_path_part(plugin),
        plugin_instance = _unescape_path_part(plugin_instance),
        type = _unescape_path_part(type),
        type_instance = _unescape_path_part(type_instance),
    )

def from_dict(fields, mtime = 0):
    '''
    :param fields: dictionary with (some of) :data:`FIELDS` keys
    :param mtime: modification time of the data file
    :return: :class:`Identifier`

    Create identifier from a dictionary, e.g. one returned by
    :meth:`Identifier.to_dict()`. Missing keys are empty fields, unknown keys
    are ignored.
    '''
    if not isinstance(fields, dict):
        raise ValueError("identifier must be a dictionary")
    result = Identifier(mtime = mtime)
    for name in FIELDS:
        result.set_field(name, fields.get(name))
    return result

def from_json(string):
    '''
    :param string: JSON object, e.g. one produced by
        :meth:`Identifier.to_json()`
    :return: :class:`Identifier`
    '''
    return from_dict(json.loads(string))

# }}}
#-----------------------------------------------------------------------------
# vim:ft=python:foldmethod=marker
