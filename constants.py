# constants.py

"""
Application Constants

This module defines static configuration values for the host window and the
compositing passes. Tunable scene behaviour lives in config.json and
scene_config.py instead.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

# Initial screen dimensions (the window is resizable)
WIDTH = 1600  # Pixels
HEIGHT = 900  # Pixels

# Framerate
FPS = 60  # Frames per second

# Colors (RGB)
BLACK = (0, 0, 0)
BACKGROUND = (10, 10, 20)

# Window Title
TITLE = "Generative Shape Scene"

# Visual Effects
TRAIL_EFFECT_COLOR = (10, 10, 20, 38) # RGBA. Alpha controls trail length (lower = longer).

# Bloom effect settings
BLOOM_RADIUS = 16 # Downscale factor of the glow pass. Larger is more diffuse.
BLOOM_INTENSITY = 90 # The brightness of the glow (0-255).

# Line width of the connection network drawn between nearby shapes.
CONNECTION_LINE_WIDTH = 1 # Pixels
