#!/usr/bin/python
'''
Logging configuration functions
-------------------------------

Components log to loggers named after themselves (``config``, ``graph``,
``graph_list``, ``filesystem``, ``cli``). Configuration is a dict suitable
for :func:`logging.config.dictConfig()`, possibly loaded from a YAML or JSON
file.

.. autofunction:: configure_from_file

.. autofunction:: log_config_stderr

.. autofunction:: log_config_null

'''
#-----------------------------------------------------------------------------

import logging.config
import yaml
import os

#-----------------------------------------------------------------------------

def configure_from_file(filename, default = None):
    '''
    :param filename: file (JSON or YAML) to read configuration from (may be
        ``None``)
    :param default: configuration to use in case when :obj:`filename` is
        ``None`` or doesn't exist

    Function configures logging according to dict config read from
    :obj:`filename`. If :obj:`filename` is missing and :obj:`default` was
    specified, logging is configured according to that one. If no acceptable
    :obj:`filename` nor :obj:`default` was provided, :exc:`RuntimeError` is
    raised.

    :obj:`default` should be dict config, but as a shorthand, it may be
    ``"stderr"`` or ``"null"``. Logging will be configured then with
    :func:`log_config_stderr()` or :func:`log_config_null()`,
    respectively.
    '''
    if filename is not None and os.path.isfile(filename):
        # JSON is a valid YAML, so we'll stick to this parser, we'll just make
        # sure nothing as fancy as custom classes gets loaded
        with open(filename) as f:
            config = yaml.safe_load(f)
    elif default == "stderr":
        config = log_config_stderr()
    elif default == "null":
        config = log_config_null()
    elif isinstance(default, dict):
        config = default
    else:
        raise RuntimeError('no usable logging configuration specified')
    logging.config.dictConfig(config)

#-----------------------------------------------------------------------------

def log_config_stderr(level = "warning"):
    '''
    :param level: log level
    :return: logging config dictionary

    Function returns logging configuration that prints to *STDERR* logs of
    severity :obj:`level` or higher. Intended to be used with
    :func:`logging.config.dictConfig()`.
    '''
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "root": {
            "level": level.upper(),
            "handlers": ["console"],
        },
        "formatters": {
            "brief_formatter": {
                "format": "[%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "brief_formatter",
                "stream": "ext://sys.stderr",
            },
        },
    }

def log_config_null():
    '''
    :return: logging config dictionary

    Function returns logging configuration that suppresses any logs
    whatsoever. Intended to be used with :func:`logging.config.dictConfig()`.
    '''
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "root": {
            "level": "NOTSET",
            "handlers": ["sink"],
        },
        "handlers": {
            "sink": {
                "class": "logging.NullHandler",
            },
        },
    }

#-----------------------------------------------------------------------------
# vim:ft=python:foldmethod=marker
