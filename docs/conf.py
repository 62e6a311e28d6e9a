# Sphinx configuration for the comparemeans API reference.
# Build with: sphinx-build -b html docs docs/_build

import os
import sys

sys.path.insert(0, os.path.abspath('..'))

from comparemeans import __version__  # noqa: E402

project = 'comparemeans'
copyright = '2026, comparemeans developers'
author = 'comparemeans developers'
release = __version__
version = '.'.join(__version__.split('.')[:2])

root_doc = 'index'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
]

# Google-style Args/Returns/Raises sections throughout
napoleon_google_docstrings = True
napoleon_numpy_docstrings = False
napoleon_use_rtype = False

autodoc_member_order = 'groupwise'
autodoc_typehints = 'description'
autodoc_default_options = {'show-inheritance': True}
add_module_names = False

exclude_patterns = ['_build']

html_theme = 'furo'
html_title = f'comparemeans {release}'
html_theme_options = {
    'navigation_with_keys': True,
}

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'numpy': ('https://numpy.org/doc/stable/', None),
    'scipy': ('https://docs.scipy.org/doc/scipy/', None),
}
