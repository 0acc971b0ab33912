#!/usr/bin/python
'''
Graph instances
---------------

Graph instance is a single renderable graph produced by a graph template.
It has a canonical identifier (template's selector with :data:`ANY` fields
filled with concrete values, see :func:`collection.ident.with_selector()`)
and a list of data files that feed it.

.. autoclass:: GraphInstance
   :members:

'''
#-----------------------------------------------------------------------------

from collection import ident as graph_ident

#-----------------------------------------------------------------------------

class GraphInstance(object):
    '''
    Graph instance, owned by :class:`collection.graph.GraphConfig`.
    '''
    def __init__(self, selector, file):
        '''
        :param selector: selector of the template the instance belongs to
        :type selector: :class:`collection.ident.Identifier`
        :param file: first data file that matched the selector
        :type file: :class:`collection.ident.Identifier`

        Note that :obj:`file` is not added to the instance, it only
        determines the canonical identifier.
        '''
        self._selector = selector.copy()
        self._ident = graph_ident.with_selector(
            selector, file, graph_ident.REPLACE_ANY
        )
        self._files = []

    def __repr__(self):
        return "<GraphInstance %s files=%d>" % (self._ident, len(self._files))

    @property
    def ident(self):
        '''
        Copy of the canonical identifier (read-only).
        '''
        return self._ident.copy()

    @property
    def files(self):
        '''
        List of data files (:class:`collection.ident.Identifier`) this
        instance aggregates, in order of adding (read-only).
        '''
        return list(self._files)

    def add_file(self, file):
        '''
        :param file: data file identifier
        :type file: :class:`collection.ident.Identifier`

        Add a data file to the instance. Adding the same file twice stores
        it twice.
        '''
        self._files.append(file.copy())

    def mtime(self):
        '''
        :return: modification time of the most recently updated data file,
            ``0`` if there are no files
        '''
        return max([f.mtime for f in self._files] + [0])

    #-----------------------------------------------------------------
    # predicates {{{

    def compare_ident(self, ident):
        '''
        :return: ``-1``, ``0`` or ``1``

        Compare canonical identifier with :obj:`ident`
        (:func:`collection.ident.compare()`).
        '''
        return graph_ident.compare(self._ident, ident)

    def matches_ident(self, ident):
        '''
        Check if :obj:`ident` matches canonical identifier, taking wildcards
        into account (:func:`collection.ident.matches()`).
        '''
        return graph_ident.matches(self._ident, ident)

    def matches_field(self, field, value):
        '''
        :param field: field name (see :data:`collection.ident.FIELDS`)
        :param value: value to check
        :rtype: bool

        Check if a field of canonical identifier is equal to :obj:`value`,
        ignoring case. A field aggregated with :data:`collection.ident.ALL`
        matches any value.
        '''
        if value is None:
            return False
        own = self._ident.get_field(field)
        if graph_ident.is_wildcard(own):
            return True
        return (own.lower() == value.lower())

    def matches_string(self, term):
        '''
        :param term: search term
        :rtype: bool

        Check if :obj:`term` is a substring (ignoring case) of any concrete
        field of canonical identifier or of any of the data files.
        '''
        term = term.lower()
        for ident in [self._ident] + self._files:
            for value in ident.fields():
                # collapsed fields have no value of their own
                if graph_ident.is_wildcard(value):
                    continue
                if term in value.lower():
                    return True
        return False

    # }}}
    #-----------------------------------------------------------------

    def describe(self):
        '''
        :return: short description, suitable for listing instances of the
            same graph

        Description lists values of the fields that distinguish the instance
        from its siblings (the ones selected with :data:`ANY`). If there are
        no such fields, canonical identifier's name is returned.
        '''
        values = [
            self._ident.get_field(name)
            for name in graph_ident.FIELDS
            if self._selector.get_field(name) is graph_ident.ANY
        ]
        values = [v for v in values if v != ""]
        if len(values) == 0:
            return self._ident.to_string()
        return " / ".join(values)

    def params(self):
        '''
        URI query fragment identifying the instance
        (:meth:`collection.ident.Identifier.to_params()`).
        '''
        return self._ident.to_params()

    def to_dict(self):
        '''
        Dictionary describing the instance, suitable for JSON.
        '''
        return {
            "ident": self._ident.to_dict(),
            "description": self.describe(),
            "files": [f.to_dict() for f in self._files],
            "mtime": self.mtime(),
        }

#-----------------------------------------------------------------------------
# vim:ft=python:foldmethod=marker
