#!/usr/bin/python
'''
Graph templates
---------------

Graph template (configured graph) is a selector identifier plus display
metadata and a list of render directives. Data files matching the selector
are partitioned into graph instances (:class:`collection.instance.GraphInstance`)
according to wildcards in the selector:

   * each distinct value of an :data:`collection.ident.ANY` field produces
     a separate instance
   * all values of an :data:`collection.ident.ALL` field are aggregated
     into one instance

Search methods take a callback, which is called for every matching instance
as ``callback(graph, instance)``. Callback returning anything else than
``None`` or ``0`` stops the search, and the returned value becomes the result
of the search. Otherwise search returns ``0``.

Graph template and its instances are not protected against concurrent
modification. Caller needs to make sure no search runs while the template is
being modified (:meth:`GraphConfig.add_file()`,
:meth:`GraphConfig.clear_instances()`).

.. autoclass:: GraphConfig
   :members:
   :member-order: groupwise

'''
#-----------------------------------------------------------------------------

import logging

from collection import ident as graph_ident
from collection.instance import GraphInstance

#-----------------------------------------------------------------------------

class GraphConfig(object):
    '''
    Graph template.

    Available attributes:

    .. attribute:: title

       Configured title of the graph or ``None``. See also
       :meth:`get_title()`.

    .. attribute:: vertical_label

       Label for vertical axis or ``None``.

    .. attribute:: show_zero

       Whether the graph should always include zero on vertical axis.

    .. attribute:: is_dynamic

       ``True`` if the template was not configured, but created on the fly
       for data files that no configured template matched.
    '''
    def __init__(self, selector = None, title = None, vertical_label = None,
                 show_zero = False):
        '''
        :param selector: identifier (possibly with wildcards) selecting data
            files for the graph
        :type selector: :class:`collection.ident.Identifier`
        '''
        if selector is not None:
            self._selector = selector.copy()
        else:
            self._selector = None
        self.title = title
        self.vertical_label = vertical_label
        self.show_zero = show_zero
        self.is_dynamic = False
        self._default_title = None
        self._defs = []
        self._instances = []

    def __repr__(self):
        return "<GraphConfig %s instances=%d>" % (
            self._selector, len(self._instances)
        )

    #-----------------------------------------------------------------
    # accessors {{{

    @property
    def selector(self):
        '''
        Copy of the selector identifier (read-only).
        '''
        if self._selector is None:
            return None
        return self._selector.copy()

    @property
    def defs(self):
        '''
        List of render directives (read-only).
        '''
        return list(self._defs)

    @property
    def instances(self):
        '''
        List of graph instances, in order of creation (read-only).
        '''
        return list(self._instances)

    def __len__(self):
        return len(self._instances)

    def __iter__(self):
        return iter(list(self._instances))

    def get_title(self):
        '''
        :return: title of the graph

        Return configured title or, if the title was not configured, name of
        the selector (:meth:`collection.ident.Identifier.to_string()`).
        '''
        if self.title is not None:
            return self.title
        if self._default_title is None:
            self._default_title = self._selector.to_string()
        return self._default_title

    def params(self):
        '''
        URI query fragment identifying the graph
        (:meth:`collection.ident.Identifier.to_params()`).
        '''
        return self._selector.to_params()

    def add_def(self, graph_def):
        '''
        :param graph_def: render directive (typically
            :class:`collection.defs.GraphDef`)
        :throws: :exc:`ValueError` if :obj:`graph_def` is ``None``

        Append a render directive to the graph.
        '''
        if graph_def is None:
            raise ValueError("render directive must not be None")
        self._defs.append(graph_def)

    def rrd_args(self, instance):
        '''
        :param instance: instance of this graph to render
        :type instance: :class:`collection.instance.GraphInstance`
        :return: list of command line arguments
        :throws: :exc:`ValueError` if :obj:`instance` is ``None``

        Build argument list for graphing tool out of the options configured
        for the graph: ``-t <title>``, ``-v <vertical label>``, ``-l 0`` (in
        this order, each pair only if configured).
        '''
        if instance is None:
            raise ValueError("instance must not be None")
        args = []
        if self.title is not None:
            args.extend(["-t", self.title])
        if self.vertical_label is not None:
            args.extend(["-v", self.vertical_label])
        if self.show_zero:
            args.extend(["-l", "0"])
        return args

    # }}}
    #-----------------------------------------------------------------
    # selector matching {{{

    def matches_ident(self, ident):
        '''
        :type ident: :class:`collection.ident.Identifier`
        :rtype: bool

        Check if an identifier matches graph's selector.
        '''
        if ident is None:
            return False
        return graph_ident.matches(self._selector, ident)

    def matches_field(self, field, value):
        '''
        :param field: field name (see :data:`collection.ident.FIELDS`)
        :param value: field value
        :rtype: bool

        Check if selector's field is a wildcard or is equal to :obj:`value`
        (ignoring case). ``None`` value never matches.
        '''
        if value is None:
            return False
        pattern = self._selector.get_field(field)
        if graph_ident.is_wildcard(pattern):
            return True
        return (pattern.lower() == value.lower())

    def compare(self, ident):
        '''
        :return: ``-1``, ``0`` or ``1``

        Compare graph's selector with an identifier
        (:func:`collection.ident.compare()`). Used for ordering graphs.
        '''
        return graph_ident.compare(self._selector, ident)

    # }}}
    #-----------------------------------------------------------------
    # instances {{{

    def add_file(self, file):
        '''
        :param file: data file identifier
        :type file: :class:`collection.ident.Identifier`
        :return: instance the file was added to

        Add a data file to the graph. The file lands in the instance whose
        canonical identifier is equal to the one computed for :obj:`file`. If
        there's no such instance, a new one is appended.

        The file is not checked against graph's selector; it's caller's job.
        '''
        canonical = graph_ident.with_selector(
            self._selector, file, graph_ident.REPLACE_ANY
        )
        instance = self.find_exact(canonical)
        if instance is None:
            instance = GraphInstance(self._selector, file)
            self._instances.append(instance)
            logger = logging.getLogger("graph")
            logger.debug("new instance %s of graph %s",
                         canonical, self._selector)
        instance.add_file(file)
        return instance

    def clear_instances(self):
        '''
        Remove all the instances (e.g. before scanning data files again).
        '''
        self._instances = []

    def foreach_instance(self, callback):
        '''
        :param callback: function ``callback(instance)``
        :return: ``0`` or the first value returned from :obj:`callback` that
            was neither ``None`` nor ``0``

        Call a function for each instance, in order of creation.
        '''
        for instance in list(self._instances):
            status = callback(instance)
            if status:
                return status
        return 0

    def find_exact(self, ident):
        '''
        :type ident: :class:`collection.ident.Identifier`
        :return: :class:`collection.instance.GraphInstance` or ``None``

        Find the instance with canonical identifier equal to :obj:`ident`.
        '''
        if ident is None:
            return None
        for instance in self._instances:
            if instance.compare_ident(ident) == 0:
                return instance
        return None

    def find_matching(self, ident):
        '''
        :type ident: :class:`collection.ident.Identifier`
        :return: :class:`collection.instance.GraphInstance` or ``None``

        Find the first instance whose canonical identifier matches
        :obj:`ident` (:func:`collection.ident.matches()`).
        '''
        if ident is None:
            return None
        for instance in self._instances:
            if instance.matches_ident(ident):
                return instance
        return None

    # }}}
    #-----------------------------------------------------------------
    # search {{{

    def search(self, term, callback):
        '''
        :param term: search term
        :param callback: function ``callback(graph, instance)``
        :return: ``0`` or the value that stopped the search

        Search instances by a free text. If :obj:`term` is a part of graph's
        title, all instances are reported. Otherwise only instances that
        contain the term in their own or their data files' fields
        (:meth:`collection.instance.GraphInstance.matches_string()`) are
        reported.
        '''
        if term is None or callback is None:
            raise ValueError("search term and callback are required")
        term = term.lower()
        title_matches = (term in self.get_title().lower())
        for instance in list(self._instances):
            if not title_matches and not instance.matches_string(term):
                continue
            status = callback(self, instance)
            if status:
                return status
        return 0

    def search_field(self, field, value, callback):
        '''
        :param field: field name (see :data:`collection.ident.FIELDS`)
        :param value: field value
        :param callback: function ``callback(graph, instance)``
        :return: ``0`` or the value that stopped the search

        Report instances whose :obj:`field` is equal to :obj:`value`.

        If selector's field is a literal, either all instances or none are
        reported. If it's a wildcard, each instance is checked
        individually.
        '''
        if value is None or callback is None:
            raise ValueError("field value and callback are required")
        if not self.matches_field(field, value):
            return 0
        check_instances = graph_ident.is_wildcard(self._selector.get_field(field))
        for instance in list(self._instances):
            if check_instances and not instance.matches_field(field, value):
                continue
            status = callback(self, instance)
            if status:
                return status
        return 0

    # }}}
    #-----------------------------------------------------------------

#-----------------------------------------------------------------------------
# vim:ft=python:foldmethod=marker
