"""Common literal values used across learntdd_pages.

These constants keep filenames and route conventions centralized so templates,
builders, and tests can import the same values without drifting. Intended for
internal use within the learntdd_pages package.

Examples
--------
>>> from learntdd_pages import _constants
>>> _constants.ROUTE_MANIFEST
'routes.json'
>>> _constants.PAGE_FILENAME
'index.html'
"""

ROUTE_MANIFEST = "routes.json"
PAGE_FILENAME = "index.html"
HIGHLIGHT_STYLESHEET = "assets/css/highlight.css"
HOME_ROUTE = "/"
EXTERNAL_SCHEMES = ("http://", "https://", "mailto:", "tel:", "data:", "//")
