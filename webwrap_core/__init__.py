"""
webwrap-core: estimate how likely an Android package is a web-wrapped (hybrid) app.
"""

__version__ = "0.1.0"
