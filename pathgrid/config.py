import logging

import pygame

# Grid settings
# Number of rows and columns of the editable grid
GRID_ROWS = 20
GRID_COLS = 20

# Screen settings
SCREEN_WIDTH = 1600
SCREEN_HEIGHT = 900
FPS = 60
WINDOW_TITLE = "Pathfinding!"

# Camera settings
# Fraction of half the screen height covered by one grid unit (0.1 => 20 units visible)
INITIAL_ZOOM = 0.1
ZOOM_MIN = 0.01
ZOOM_MAX = 1.0
# Zoom multipliers per mouse wheel notch
ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9

# Input bindings
# Pygame mouse button numbers: 1 = left, 2 = middle
PRIMARY_BUTTON = 1
SECONDARY_BUTTON = 2
MARK_START_KEY = pygame.K_s
MARK_END_KEY = pygame.K_e
QUIT_KEY = pygame.K_ESCAPE

# Colors (RGB floats for OpenGL)
BACKGROUND_COLOR = (0.0, 0.0, 0.0)
WALL_COLOR = (0.9, 0.9, 0.9)
GRID_LINE_COLOR = (1.0, 1.0, 1.0)
HOVER_COLOR = (1.0, 1.0, 0.0)
PATH_COLOR = (0.0, 0.89, 0.19)
EXPLORED_COLOR = (0.12, 0.16, 0.3)
ORIGIN_MARKER_COLOR = (0.9, 0.16, 0.22)
POINTER_MARKER_COLOR = (0.0, 0.47, 0.95)
# Text colors (RGB bytes for pygame.font)
LABEL_TEXT_COLOR = (255, 255, 255)
HUD_TEXT_COLOR = (255, 255, 255)

# Line widths in pixels
GRID_LINE_WIDTH = 1.0
HOVER_LINE_WIDTH = 3.0
PATH_LINE_WIDTH = 4.0
# Marker radius in grid units
MARKER_RADIUS = 0.1

# Text settings
# Start/end labels are rasterized at LABEL_FONT_SIZE and drawn at
# LABEL_WORLD_SCALE grid units per font pixel
LABEL_FONT_SIZE = 50
LABEL_WORLD_SCALE = 0.02
HUD_FONT_SIZE = 20
# HUD offset from the top-left corner (pixels)
HUD_MARGIN = 10

# Shade cells finalized by the last search
SHOW_EXPLORED = True

# Logging
LOG_LEVEL = logging.INFO
