"""Application-wide constants for PngViewer.

This module contains shared constants used across the decoder and the
viewer application.
"""

# PNG stream framing
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
CHUNK_LENGTH_SIZE = 4
CHUNK_TYPE_SIZE = 4
CHUNK_CRC_SIZE = 4

# IHDR body is always 13 bytes
HEADER_BODY_SIZE = 13

# PLTE holds 1..256 RGB triples
MAX_PALETTE_ENTRIES = 256
MAX_PALETTE_BYTES = MAX_PALETTE_ENTRIES * 3

# Number of bytes shown in an error excerpt
ERROR_EXCERPT_SIZE = 64
ERROR_EXCERPT_ROW = 8

# Zoom steps (1x .. 4x by 0.5)
ZOOM_STEPS = (1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0)
MIN_ZOOM_SCALE = ZOOM_STEPS[0]
MAX_ZOOM_SCALE = ZOOM_STEPS[-1]

# Main window geometry
WINDOW_SIZE = (700, 700)
WINDOW_MIN_SIZE = (200, 400)

# Glyphs shown while no image is loaded
PLACEHOLDER_GLYPHS = ("🌄", "🌅", "🌇", "🌠", "🌉", "🏕️")
