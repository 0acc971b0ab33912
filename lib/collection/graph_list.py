#!/usr/bin/python
'''
Graph registry
--------------

Registry of all graph templates known to the process: the ones loaded from
configuration and the ones created on the fly for data files that no
configured template matches. Dynamic templates have selector
``{/any/, /any/, /any/, <type>, /all/}``, so there's one per type of data
file, with an instance for each host and plugin instance.

Registry is not thread-safe. Caller should serialize modifications
(:meth:`GraphList.add_graph()`, :meth:`GraphList.add_file()`,
:meth:`GraphList.clear_instances()`, :meth:`GraphList.update()`) with any
other operation.

.. autoclass:: GraphList
   :members:
   :member-order: groupwise

'''
#-----------------------------------------------------------------------------

import logging

from collection import ident as graph_ident
from collection.graph import GraphConfig
from collection.filesystem import walk_data_dir

#-----------------------------------------------------------------------------

class GraphList(object):
    '''
    Graph templates container.
    '''
    def __init__(self):
        self._graphs = []
        # type => GraphConfig
        self._dynamic = {}

    def __len__(self):
        return len(self._graphs) + len(self._dynamic)

    def __iter__(self):
        return iter(self.graphs())

    def graphs(self):
        '''
        :return: list of :class:`collection.graph.GraphConfig`

        List all graph templates: configured ones first (ordered by their
        selectors), then the dynamic ones (in order of creation).
        '''
        return self._graphs + list(self._dynamic.values())

    def add_graph(self, graph):
        '''
        :type graph: :class:`collection.graph.GraphConfig`

        Register a configured graph template. Templates are kept ordered by
        their selectors; templates with equal selectors are kept in the
        order of adding.
        '''
        if graph is None:
            raise ValueError("graph must not be None")
        selector = graph.selector
        position = len(self._graphs)
        for (i, other) in enumerate(self._graphs):
            if other.compare(selector) > 0:
                position = i
                break
        self._graphs.insert(position, graph)

    def _dynamic_graph(self, file):
        graph = self._dynamic.get(file.type)
        if graph is None:
            selector = graph_ident.Identifier(
                host = graph_ident.ANY,
                plugin = graph_ident.ANY,
                plugin_instance = graph_ident.ANY,
                type = file.type,
                type_instance = graph_ident.ALL,
            )
            graph = GraphConfig(selector)
            graph.is_dynamic = True
            self._dynamic[file.type] = graph
            logger = logging.getLogger("graph_list")
            logger.debug("created dynamic graph for type %s", file.type)
        return graph

    def add_file(self, file):
        '''
        :param file: data file identifier
        :type file: :class:`collection.ident.Identifier`
        :return: number of templates the file was added to

        Add a data file to all configured templates that match it. If none
        matches, the file is added to the dynamic template for its type.
        '''
        count = 0
        for graph in self._graphs:
            if graph.matches_ident(file):
                graph.add_file(file)
                count += 1
        if count == 0:
            self._dynamic_graph(file).add_file(file)
            count = 1
        return count

    def clear_instances(self):
        '''
        Remove instances of all templates and forget dynamic templates.
        '''
        for graph in self._graphs:
            graph.clear_instances()
        self._dynamic = {}

    def update(self, data_dir):
        '''
        :param data_dir: collectd's data directory
        :return: number of data files found

        Rebuild all graph instances from data files.
        '''
        logger = logging.getLogger("graph_list")
        self.clear_instances()
        count = 0
        for file in walk_data_dir(data_dir):
            self.add_file(file)
            count += 1
        logger.info("found %d data files in %s", count, data_dir)
        return count

    #-----------------------------------------------------------------
    # lookup {{{

    def find_graph(self, selector):
        '''
        :type selector: :class:`collection.ident.Identifier`
        :return: :class:`collection.graph.GraphConfig` or ``None``

        Find a template with selector equal to :obj:`selector`.
        '''
        for graph in self.graphs():
            if graph.compare(selector) == 0:
                return graph
        return None

    def find_instance(self, ident):
        '''
        :type ident: :class:`collection.ident.Identifier`
        :return: tuple (:class:`collection.graph.GraphConfig`,
            :class:`collection.instance.GraphInstance`) or ``None``

        Find the first graph instance with canonical identifier equal to
        :obj:`ident`.
        '''
        for graph in self.graphs():
            instance = graph.find_exact(ident)
            if instance is not None:
                return (graph, instance)
        return None

    def find_file(self, file):
        '''
        :type file: :class:`collection.ident.Identifier`
        :return: tuple (:class:`collection.graph.GraphConfig`,
            :class:`collection.instance.GraphInstance`) or ``None``

        Find the first graph instance that aggregates a data file.
        '''
        for graph in self.graphs():
            if not graph.matches_ident(file):
                continue
            canonical = graph_ident.with_selector(graph.selector, file)
            instance = graph.find_exact(canonical)
            if instance is not None:
                return (graph, instance)
        return None

    def foreach_graph(self, callback):
        '''
        :param callback: function ``callback(graph)``
        :return: ``0`` or the first value returned from :obj:`callback` that
            was neither ``None`` nor ``0``
        '''
        for graph in self.graphs():
            status = callback(graph)
            if status:
                return status
        return 0

    def foreach_instance(self, callback):
        '''
        :param callback: function ``callback(graph, instance)``
        :return: ``0`` or the first value returned from :obj:`callback` that
            was neither ``None`` nor ``0``
        '''
        for graph in self.graphs():
            status = graph.foreach_instance(
                lambda instance: callback(graph, instance)
            )
            if status:
                return status
        return 0

    def search(self, term, callback):
        '''
        Run :meth:`collection.graph.GraphConfig.search()` on all templates.
        '''
        for graph in self.graphs():
            status = graph.search(term, callback)
            if status:
                return status
        return 0

    def search_field(self, field, value, callback):
        '''
        Run :meth:`collection.graph.GraphConfig.search_field()` on all
        templates.
        '''
        for graph in self.graphs():
            status = graph.search_field(field, value, callback)
            if status:
                return status
        return 0

    # }}}
    #-----------------------------------------------------------------

#-----------------------------------------------------------------------------
# vim:ft=python:foldmethod=marker
