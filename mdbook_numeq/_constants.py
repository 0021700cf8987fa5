"""Common literal values used across mdbook_numeq.

These constants keep the preprocessor name, configuration keys and output
templates centralized so the engine, the mdBook adapter and tests can import
the same values without drifting. Intended for internal use within the
mdbook_numeq package.

Examples
--------
>>> from mdbook_numeq import _constants
>>> _constants.TAG_TEMPLATE.format(anchor="eq:euler", display="1.2")
'\\\\htmlId{eq:euler}{} \\\\tag{1.2}'
>>> _constants.LINK_TEMPLATE.format(display="1.2", href="ch1.md", anchor="eq:euler")
'[(1.2)](ch1.md#eq:euler)'
"""

NAME = "numeq"
CONFIG_TABLE = ("preprocessor", NAME)

AUTO_ANCHOR_PREFIX = "numeq"
GLOBAL_SCOPE_SLUG = "global"

TAG_TEMPLATE = "\\htmlId{{{anchor}}}{{}} \\tag{{{display}}}"
LINK_TEMPLATE = "[({display})]({href}#{anchor})"

UNSUPPORTED_RENDERER = "not-supported"
SUPPORTED_MDBOOK_SERIES = ("0.4", "0.5")
