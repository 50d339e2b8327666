# Configuration file for the Sphinx documentation builder.

import os
import sys

# Autodoc imports the package from the src layout
sys.path.insert(0, os.path.abspath("../src"))

from dpkg_licenses import __version__  # noqa: E402

# -- Project information -----------------------------------------------------
project = "dpkg-licenses"
copyright = "2025, dpkg-licenses contributors"
author = "dpkg-licenses contributors"
release = __version__
version = ".".join(__version__.split(".")[:2])

# -- General configuration ---------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "myst_parser",
    "sphinxcontrib.mermaid",
]

napoleon_google_docstring = True
napoleon_numpy_docstring = False

myst_enable_extensions = ["colon_fence"]

source_suffix = {".md": "markdown", ".rst": "restructuredtext"}
root_doc = "index"
exclude_patterns = ["_build"]

intersphinx_mapping = {"python": ("https://docs.python.org/3", None)}

# -- Options for HTML output -------------------------------------------------
html_theme = "sphinx_rtd_theme"
html_title = f"dpkg-licenses {release}"

# -- Autodoc settings --------------------------------------------------------
autodoc_default_options = {
    "members": True,
    "member-order": "bysource",
    "show-inheritance": True,
}
autodoc_typehints = "description"
