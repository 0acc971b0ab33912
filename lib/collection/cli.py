#!/usr/bin/python
'''
Command line interface
----------------------

Entry point for :file:`bin/collection-graphs` script. The script loads graph
templates, scans collectd's data directory and prints graph instances as
JSON, one per line.

.. autofunction:: create_parser

.. autofunction:: main

'''
#-----------------------------------------------------------------------------

import sys
import json
import argparse
import logging
import yaml

from collection import ident as graph_ident
from collection import config
from collection.graph_list import GraphList
import collection.logging

#-----------------------------------------------------------------------------

DEFAULT_DATA_DIR = "/var/lib/collectd/rrd"

#-----------------------------------------------------------------------------

def create_parser():
    '''
    :rtype: :class:`argparse.ArgumentParser`

    Create command line parser.
    '''
    parser = argparse.ArgumentParser(
        description = "Match collectd data files against graph templates"
    )
    parser.add_argument(
        "--config", dest = "config", required = True,
        help = "YAML/JSON file with graph definitions", metavar = "FILE",
    )
    parser.add_argument(
        "--data-dir", dest = "data_dir", default = DEFAULT_DATA_DIR,
        help = "collectd's data directory (default: %(default)s)",
        metavar = "DIR",
    )
    parser.add_argument(
        "--logging", dest = "logging",
        help = "YAML/JSON file with logging configuration", metavar = "FILE",
    )
    parser.add_argument(
        "--debug", dest = "debug", action = "store_true", default = False,
        help = "log debug messages to STDERR (ignored with --logging)",
    )

    commands = parser.add_subparsers(dest = "command", metavar = "COMMAND")
    commands.required = True
    commands.add_parser("list", help = "list all graph instances")
    search = commands.add_parser("search", help = "search graph instances")
    search.add_argument("term", help = "text to look for")
    field = commands.add_parser(
        "field", help = "list graph instances with field equal to a value"
    )
    field.add_argument("field", choices = graph_ident.FIELDS)
    field.add_argument("value")
    args = commands.add_parser(
        "args", help = "print graphing tool arguments for a data file"
    )
    args.add_argument(
        "path", help = "data file path, relative to data directory"
    )
    return parser

#-----------------------------------------------------------------------------

def _instance_line(graph, instance):
    return json.dumps({
        "graph": graph.get_title(),
        "graph_params": graph.params(),
        "dynamic": graph.is_dynamic,
        "params": instance.params(),
        "instance": instance.to_dict(),
    }, sort_keys = True)

def main(argv = None, output = None):
    '''
    :param argv: command line arguments (defaults to :obj:`sys.argv`)
    :param output: file handle to print results to (defaults to
        :obj:`sys.stdout`)
    :return: exit code

    Run the command line tool.
    '''
    if output is None:
        output = sys.stdout

    options = create_parser().parse_args(argv)
    if options.debug:
        default_logging = collection.logging.log_config_stderr("debug")
    else:
        default_logging = collection.logging.log_config_stderr()
    collection.logging.configure_from_file(options.logging,
                                           default = default_logging)
    logger = logging.getLogger("cli")

    registry = GraphList()
    try:
        config.load_config(options.config, registry)
    except (ValueError, IOError, yaml.YAMLError) as e:
        logger.error("can't load graphs from %s: %s", options.config, e)
        return 1
    registry.update(options.data_dir)

    def print_instance(graph, instance):
        output.write(_instance_line(graph, instance) + "\n")

    if options.command == "list":
        registry.foreach_instance(print_instance)
    elif options.command == "search":
        registry.search(options.term, print_instance)
    elif options.command == "field":
        registry.search_field(options.field, options.value, print_instance)
    elif options.command == "args":
        try:
            file = graph_ident.from_file(options.path)
        except ValueError as e:
            logger.error("%s", e)
            return 1
        found = registry.find_file(file)
        if found is None:
            logger.error("no graph for %s", options.path)
            return 1
        (graph, instance) = found
        output.write(json.dumps(graph.rrd_args(instance)) + "\n")

    return 0

#-----------------------------------------------------------------------------
# vim:ft=python:foldmethod=marker
