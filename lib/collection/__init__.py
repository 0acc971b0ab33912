#!/usr/bin/python
'''
Graph templates for collectd data
---------------------------------

Package that decides which graphs to draw for collectd's data files.

   * :mod:`collection.ident` -- identifiers of data files and selectors
   * :mod:`collection.graph` -- graph templates and instance partitioning
   * :mod:`collection.instance` -- graph instances
   * :mod:`collection.defs` -- render directives
   * :mod:`collection.config` -- loading templates from YAML/JSON
   * :mod:`collection.graph_list` -- registry of templates
   * :mod:`collection.filesystem` -- data files discovery

'''
#-----------------------------------------------------------------------------
# vim:ft=python:foldmethod=marker
