#-----------------------------------------------------------------------------
#
# Sphinx configuration for collection-graphs project
#
#-----------------------------------------------------------------------------

project = u'collection-graphs'

#copyright = u'...'

release = '0.1.0'
version = '0.1'

#-----------------------------------------------------------------------------

extensions = ['sphinx.ext.autodoc']

master_doc = 'index'
source_suffix = '.rst'
exclude_trees = ['html', 'man']

#-----------------------------------------------------------------------------
# configuration specific to Python code
#-----------------------------------------------------------------------------

import sys, os
sys.path.insert(0, os.path.abspath('../lib'))

# ignored prefixes for module index sorting
modindex_common_prefix = ["collection."]

# documentation for constructors: docstring from class, constructor, or both
autoclass_content = 'both'

#-----------------------------------------------------------------------------
# HTML output
#-----------------------------------------------------------------------------

pygments_style = 'sphinx'

#-----------------------------------------------------------------------------
# TROFF/man output
#-----------------------------------------------------------------------------

man_pages = [
    ('manpages/collection-graphs', 'collection-graphs',
     'graph templates matcher for collectd data files',
     [], 1),
]

#-----------------------------------------------------------------------------
# vim:ft=python
