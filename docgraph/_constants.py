"""Common literal values used across docgraph.

These constants keep configuration and artifact filenames centralized so the
loader, the site builder, and tests can import the same values without
drifting. Intended for internal use within the docgraph package.

Examples
--------
>>> from docgraph import _constants
>>> _constants.DOC_CONFIG_FILENAME
'.docConfig.json'
>>> _constants.SEARCH_INDEX_FILENAME.endswith(".json")
True
"""

DOC_CONFIG_FILENAME = ".docConfig.json"
SEARCH_INDEX_FILENAME = "searchIndex.json"
SITEMAP_FILENAME = "sitemap.xml"
STYLES_DIRNAME = "styles"
SCRIPTS_DIRNAME = "scripts"
CODE_STYLESHEET_FILENAME = "code.css"
OUTPUT_SUFFIX = ".html"
