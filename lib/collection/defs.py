#!/usr/bin/python
'''
Render directives
-----------------

A graph template carries a list of ``DEF`` blocks from configuration. They
describe which data sources of the underlying files are drawn and how
(legend, colour, stacking and such). This module only stores them; it's up
to the renderer to interpret them.

.. autoclass:: GraphDef
   :members:

'''
#-----------------------------------------------------------------------------

class GraphDef(object):
    '''
    Single ``DEF`` block of a graph template.

    An instance supports read-only dict-like access to the options, with
    case-insensitive keys.
    '''
    def __init__(self, options = None):
        '''
        :param options: options of the block
        :type options: dict(str => anything)
        '''
        if options is None:
            options = {}
        if not isinstance(options, dict):
            raise ValueError("DEF block must be a dictionary")
        # lowercased key => (key as configured, value)
        self._options = {}
        for (key, value) in options.items():
            if not isinstance(key, str):
                raise ValueError("DEF option name must be a string: %r" % (key,))
            self._options[key.lower()] = (key, value)

    def __repr__(self):
        return "<GraphDef %s>" % (
            " ".join(sorted("%s=%s" % (k, v) for (k, v) in self.items()))
        )

    def get(self, name, default = None):
        '''
        Return option's value without raising an exception on undefined key.
        '''
        if name.lower() not in self._options:
            return default
        return self._options[name.lower()][1]

    def __getitem__(self, name):
        if name.lower() not in self._options:
            raise KeyError('no such option: %s' % (name,))
        return self._options[name.lower()][1]

    def __contains__(self, name):
        return (name.lower() in self._options)

    def __len__(self):
        return len(self._options)

    def items(self):
        '''
        Retrieve (key,value) pairs, keys spelled as in configuration.
        '''
        return list(self._options.values())

    def to_dict(self):
        '''
        Convert the instance to dict.
        '''
        return dict(self._options.values())

#-----------------------------------------------------------------------------
# vim:ft=python:foldmethod=marker
