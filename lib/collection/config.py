#!/usr/bin/python
'''
Graph configuration
-------------------

Graph templates are defined in a YAML (or JSON) file. The file holds a list
of graph blocks, either at the top level or under ``graphs`` key:

.. code-block:: yaml

   graphs:
     - Plugin: cpu
       PluginInstance: /any/
       Type: cpu
       TypeInstance: /all/
       Title: CPU usage
       VerticalLabel: jiffies
       ShowZero: true
       DEF:
         - DSName: value
           Legend: CPU

Keys are case-insensitive. ``Host``, ``Plugin``, ``PluginInstance``,
``Type`` and ``TypeInstance`` make up graph's selector (missing ones are
empty). ``Title`` and ``VerticalLabel`` are strings, ``ShowZero`` is
a boolean. ``DEF`` is a dictionary or a list of dictionaries, stored as
:class:`collection.defs.GraphDef` without interpretation. Other keys are
ignored.

.. autofunction:: load_config

.. autofunction:: parse_config

.. autofunction:: parse_block

'''
#-----------------------------------------------------------------------------

import logging
import yaml

from collection import ident as graph_ident
from collection.graph import GraphConfig
from collection.defs import GraphDef

#-----------------------------------------------------------------------------

SELECTOR_KEYS = {
    "host": "host",
    "plugin": "plugin",
    "plugininstance": "plugin_instance",
    "type": "type",
    "typeinstance": "type_instance",
}

_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")

#-----------------------------------------------------------------------------
# value helpers {{{

def _get_string(value, key, index):
    if not isinstance(value, str):
        # YAML reads unquoted 010, 1.10 or "no" as numbers and booleans
        raise ValueError("graph #%d: %s must be a string (quote it)" % \
                         (index, key))
    return value

def _get_bool(value, key, index):
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return (value != 0)
    if isinstance(value, str):
        if value.lower() in _TRUE:
            return True
        if value.lower() in _FALSE:
            return False
    raise ValueError("graph #%d: %s must be a boolean" % (index, key))

def _get_defs(value, key, index):
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        raise ValueError("graph #%d: %s must be a dictionary or a list" % \
                         (index, key))
    try:
        return [GraphDef(d) for d in value]
    except ValueError as e:
        raise ValueError("graph #%d: %s" % (index, e))

# }}}
#-----------------------------------------------------------------------------

def parse_block(block, index = 0):
    '''
    :param block: single graph block
    :type block: dict
    :param index: position of the block in config (for error messages)
    :return: :class:`collection.graph.GraphConfig`
    :throws: :exc:`ValueError` on invalid block

    Build a graph template out of a configuration block.
    '''
    if not isinstance(block, dict):
        raise ValueError("graph #%d: block must be a dictionary" % (index,))

    logger = logging.getLogger("config")

    selector = graph_ident.Identifier()
    for (key, value) in block.items():
        if not isinstance(key, str):
            raise ValueError("graph #%d: invalid key %r" % (index, key))
        field = SELECTOR_KEYS.get(key.lower())
        if field is not None and value is not None:
            selector.set_field(field, _get_string(value, key, index))

    graph = GraphConfig(selector)
    for (key, value) in block.items():
        lkey = key.lower()
        if lkey in SELECTOR_KEYS:
            continue
        elif lkey == "title":
            graph.title = _get_string(value, key, index)
        elif lkey == "verticallabel":
            graph.vertical_label = _get_string(value, key, index)
        elif lkey == "showzero":
            graph.show_zero = _get_bool(value, key, index)
        elif lkey == "def":
            for graph_def in _get_defs(value, key, index):
                graph.add_def(graph_def)
        else:
            logger.debug("graph #%d: ignoring unknown option %s", index, key)

    return graph

def parse_config(document):
    '''
    :param document: configuration loaded from YAML/JSON
    :return: list of :class:`collection.graph.GraphConfig`
    :throws: :exc:`ValueError` on invalid configuration

    Build graph templates out of a configuration document.
    '''
    if document is None:
        return []
    if isinstance(document, dict):
        document = document.get("graphs", [])
    if not isinstance(document, list):
        raise ValueError("configuration must be a list of graphs")
    return [parse_block(block, i) for (i, block) in enumerate(document)]

def load_config(filename, registry):
    '''
    :param filename: YAML/JSON file with graphs
    :param registry: registry to add graphs to
    :type registry: :class:`collection.graph_list.GraphList`
    :return: number of graphs loaded
    :throws: :exc:`ValueError` on invalid configuration, :exc:`IOError` or
        :exc:`yaml.YAMLError` on unreadable file

    Load graph templates from a file and register them.
    '''
    logger = logging.getLogger("config")
    logger.info("loading graphs from %s", filename)
    with open(filename) as f:
        # JSON is a valid YAML, so one parser is enough
        document = yaml.safe_load(f)
    graphs = parse_config(document)
    for graph in graphs:
        registry.add_graph(graph)
    logger.info("loaded %d graphs", len(graphs))
    return len(graphs)

#-----------------------------------------------------------------------------
# vim:ft=python:foldmethod=marker
