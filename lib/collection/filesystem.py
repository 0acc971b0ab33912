#!/usr/bin/python
'''
Data files discovery
--------------------

collectd's RRD plugin stores data files in a directory tree
``<data_dir>/host/plugin-plugin_instance/type-type_instance.rrd``. This
module walks such a tree and reports identifiers of found files.

.. autofunction:: walk_data_dir

'''
#-----------------------------------------------------------------------------

import os
import logging

from collection import ident as graph_ident

#-----------------------------------------------------------------------------

def _list_dir(path):
    try:
        return sorted(os.listdir(path))
    except OSError as e:
        logger = logging.getLogger("filesystem")
        logger.warning("can't read directory %s: %s", path, e.strerror)
        return []

def walk_data_dir(data_dir):
    '''
    :param data_dir: collectd's data directory
    :return: generator of :class:`collection.ident.Identifier`

    Walk data directory and yield identifiers of all data files found, with
    :attr:`collection.ident.Identifier.mtime` set. Entries that can't be
    read or that don't look like data files are skipped.

    Files are reported in order of their paths.
    '''
    logger = logging.getLogger("filesystem")

    for host in _list_dir(data_dir):
        host_dir = os.path.join(data_dir, host)
        if not os.path.isdir(host_dir):
            continue
        for plugin in _list_dir(host_dir):
            plugin_dir = os.path.join(host_dir, plugin)
            if not os.path.isdir(plugin_dir):
                continue
            for file_name in _list_dir(plugin_dir):
                if not file_name.endswith(graph_ident.FILE_SUFFIX):
                    continue
                path = os.path.join(plugin_dir, file_name)
                if not os.path.isfile(path):
                    continue
                try:
                    mtime = int(os.stat(path).st_mtime)
                except OSError as e:
                    logger.warning("can't stat %s: %s", path, e.strerror)
                    continue
                try:
                    ident = graph_ident.from_file(
                        "%s/%s/%s" % (host, plugin, file_name)
                    )
                except ValueError:
                    logger.warning("not a data file: %s", path)
                    continue
                ident.mtime = mtime
                yield ident

#-----------------------------------------------------------------------------
# vim:ft=python:foldmethod=marker
