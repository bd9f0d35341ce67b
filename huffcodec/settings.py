"""
settings.py

Format constants and defaults shared across huffcodec.
"""


VERSION = 1
MAGIC = b'HUF'

# Tree grammar markers
LEAF_MARKER = ord("'")
LEFT_MARKER = ord('0')
RIGHT_MARKER = ord('1')

SEPARATOR = b'\n'
MAX_PADDING = 7

DEFAULT_TEXT_ENCODING = 'utf-8'

DEGENERATE_SINGLE_BIT = 'single_bit'
DEGENERATE_REJECT = 'reject'
DEGENERATE_POLICIES = (DEGENERATE_SINGLE_BIT, DEGENERATE_REJECT)
