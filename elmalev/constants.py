"""
Constants for the Elma level format.

The bias constants and markers are format magic numbers. Their literal
values must not change or the game rejects the files.
"""

# Format tags
ELMA_VERSION_TAG = b'POT14'
ACROSS_VERSION_TAG = b'POT06'

# Header layout
VERSION_TAG_SIZE = 5
LINK_LOW_OFFSET = 5  # u16 copy of the low link bits
LINK_OFFSET = 7
INTEGRITY_OFFSET = 11
INTEGRITY_COUNT = 4
NAME_OFFSET = 43
POLYGON_COUNT_OFFSET = 130

# Fixed string widths
NAME_SIZE = 51
LGR_SIZE = 16
GROUND_SIZE = 10
SKY_SIZE = 10
PICTURE_STRING_SIZE = 10
TOP10_NAME_SIZE = 15

# Counts are stored as doubles offset by these
POLYGON_COUNT_BIAS = 0.4643643
OBJECT_COUNT_BIAS = 0.4643643
PICTURE_COUNT_BIAS = 0.2345672

# Markers
EOD_MARKER = 0x0067103A
EOF_MARKER = 0x00845D52

# Record sizes
POLYGON_HEADER_SIZE = 8
VERTEX_SIZE = 16
OBJECT_SIZE = 28
PICTURE_SIZE = 54

# Everything except the polygon/object/picture records:
# 130 header + 3 * 8 counts + 4 EOD + 688 top10 + 4 EOF
FIXED_SIZE = 850

# Top10
TOP10_SIZE = 688
TOP10_TABLE_SIZE = 344
TOP10_MAX_ENTRIES = 10
TOP10_TIMES_OFFSET = 4
TOP10_NAME1_OFFSET = 44
TOP10_NAME2_OFFSET = 194

# Integrity
INTEGRITY_MULTIPLIER = 3247.764325643

# Default level geometry
OBJECT_RADIUS = 0.4
