# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------

import os
import sys

# Add the project root to sys.path so Sphinx can import all packages
sys.path.insert(0, os.path.abspath("../.."))  # conf.py lives in docs/source

project = 'Tile City'
copyright = '2026, Tile City Team'
author = 'Tile City Team'
release = '0.1'

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",    # generate docs from docstrings
    "sphinx.ext.napoleon",   # parse NumPy style docstrings
    "sphinx.ext.viewcode",   # add links to source code
    "sphinx_rtd_dark_mode",
]

templates_path = ['_templates']
exclude_patterns = []

# -- Options for HTML output -------------------------------------------------

html_theme = "sphinx_rtd_theme"
default_dark_mode = True
html_static_path = ['_static']

# -- Mock imports for the docs build --
# pygame needs SDL; the HTTP stack is not needed to read docstrings.
autodoc_mock_imports = ["pygame", "uvicorn"]
