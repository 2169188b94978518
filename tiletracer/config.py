"""
Configuration settings for the tile renderer
"""

# Rendering settings
RENDER_SETTINGS = {
    'width': 512,
    'height': 512,
    'samples_per_pixel': 8,
    'adaptive_sampling': True,
    'tiles_per_row': 8,
    'max_workers': None,  # None lets the executor pick
}

# Shading settings
SHADING_SETTINGS = {
    'light_direction': (-1.0, -1.0, 1.0),
    'ambient': 0.1,
    'background_color': 0xff000000,
}

# Output settings
OUTPUT_SETTINGS = {
    'path': 'render.png',
    'log_level': 'INFO',
}
