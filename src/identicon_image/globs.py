"""Constantes para el proyecto.

Anything that changes the pixels rendered for an existing code (the vertex table,
the bit layout, the thresholds below) must also bump RENDER_VERSION. Callers fold
the version into their ETags and cache keys.

:created: 2026-10-19
"""

# ===================================================================================
#   Versión
# ===================================================================================

RENDER_VERSION = 1

# ===================================================================================
#   Rejilla de parches
# ===================================================================================

# cada parche es un polígono sobre una rejilla de 5 x 5 vértices (4 x 4 celdas)
PATCH_CELLS = 4
PATCH_GRIDS = PATCH_CELLS + 1

# ===================================================================================
#   Metaparàmetros
# ===================================================================================

# tamaño en pixeles de un parche antes de escalar. 20 -> una fuente de 60 x 60
DEFAULT_PATCH_SIZE = 20

DEFAULT_BACKGROUND = (255, 255, 255)

# dibujar un contorno cuando el relleno está más cerca que esto del fondo
STROKE_DISTANCE = 32.0

# medio ancho del contorno en pixeles enteros. Los centros de pixel a esta distancia
# del borde son contorno
STROKE_HALF_WIDTH = 1

# ===================================================================================
#   Límites de la petición
# ===================================================================================

DEFAULT_IDENTICON_SIZE = 16
MIN_IDENTICON_SIZE = 16
MAX_IDENTICON_SIZE = 64
