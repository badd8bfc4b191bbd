import os
from pathlib import Path

# Window
TITLE = "GLprimer"
WINDOW_SCALE = 0.5          # square window, fraction of desktop height
GL_VERSION = (3, 3)
SWAP_INTERVAL = 0           # no vsync
CLEAR_COLOR = (0.3, 0.3, 0.3, 0.0)

# Assets, relative to GLPRIMER_ASSETS (default: working directory)
ASSET_DIR = Path(os.environ.get("GLPRIMER_ASSETS", "."))
TREX_MESH = ASSET_DIR / "meshes" / "trex.obj"
TREX_TEXTURE = ASSET_DIR / "textures" / "trex.tga"
EARTH_TEXTURE = ASSET_DIR / "textures" / "earth.tga"

# Procedural meshes
SPHERE_RADIUS = 0.4
SPHERE_SEGMENTS = 50
BOX_SIZE = (1.0, 1.0, 1.0)

# Logging
LOG_LEVEL = os.environ.get("GLPRIMER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
