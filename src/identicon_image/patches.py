"""La biblioteca fija de 16 formas de parche.

Cada parche es un polígono creado a partir de una lista de vértices en una rejilla de
5 x 5. Los vértices se numeran de 0 a 24, desde la esquina superior izquierda,
de izquierda a derecha y de arriba a abajo.

 0  1  2  3  4
 5  6  7  8  9
10 11 12 13 14
15 16 17 18 19
20 21 22 23 24

Estas tablas son la identidad visual de cada identicon. Cambiar un solo vértice
cambia todas las imágenes existentes, así que cualquier cambio aquí necesita un nuevo
RENDER_VERSION.

:created: 2026-10-19
"""

import dataclasses
from collections.abc import Sequence

from identicon_image.globs import PATCH_CELLS, PATCH_GRIDS

PATCH_SYMMETRIC = 1
PATCH_INVERTED = 2

_PATCH_VERTICES: tuple[tuple[int, ...], ...] = (
    (0, 4, 24, 20, 0),
    (0, 4, 20, 0),
    (2, 24, 20, 2),
    (0, 2, 20, 22, 0),
    (2, 14, 22, 10, 2),
    (0, 14, 24, 22, 0),
    (2, 24, 22, 13, 11, 22, 20, 2),
    (0, 14, 22, 0),
    (6, 8, 18, 16, 6),
    (4, 20, 10, 12, 2, 4),
    (0, 2, 12, 10, 0),
    (10, 14, 22, 10),
    (20, 12, 24, 20),
    (10, 2, 12, 10),
    (0, 2, 10, 0),
    (0, 4, 24, 20, 0),
)

_PATCH_FLAGS: tuple[int, ...] = (
    PATCH_SYMMETRIC,
    0,
    0,
    0,
    PATCH_SYMMETRIC,
    0,
    0,
    0,
    PATCH_SYMMETRIC,
    0,
    0,
    0,
    0,
    0,
    0,
    PATCH_SYMMETRIC | PATCH_INVERTED,
)

NUM_PATCHES = len(_PATCH_VERTICES)

# los únicos parches que pueden ocupar la posición central
CENTER_PATCHES = (0, 4, 8, 15)


@dataclasses.dataclass(frozen=True)
class PatchShape:
    """Un polígono cerrado centrado en el origen.

    :param vertices: vértices en pixeles, con el último igual al primero
    :param flags: PATCH_SYMMETRIC y/o PATCH_INVERTED
    """

    vertices: tuple[tuple[int, int], ...]
    flags: int = 0

    @property
    def symmetric(self) -> bool:
        """Se ve igual bajo cualquier cuarto de vuelta."""
        return bool(self.flags & PATCH_SYMMETRIC)

    @property
    def inverted(self) -> bool:
        """Relleno y fondo están intercambiados por definición."""
        return bool(self.flags & PATCH_INVERTED)

    def get_points(self, shift: int, scale: int = 1) -> list[tuple[int, int]]:
        """Return the vertices moved by shift on both axes, then scaled.

        :param shift: added to x and y. Half the patch size puts the origin at the
            center of a cell whose top left is (0, 0).
        :param scale: multiplier applied after the shift
        :return: a vertex list for ImageDraw
        """
        return [((x + shift) * scale, (y + shift) * scale) for x, y in self.vertices]


def close_vertices(indices: Sequence[int]) -> tuple[int, ...]:
    """Append the first vertex index if the list is open."""
    if indices[0] == indices[-1]:
        return tuple(indices)
    return (*indices, indices[0])


def _new_patch_shape(indices: Sequence[int], flags: int, patch_size: int) -> PatchShape:
    """Escalar los índices de la rejilla a pixeles y centrar en el origen.

    :param indices: índices de vértice en [0, 24]
    :param flags: banderas del parche
    :param patch_size: ancho de un parche en pixeles
    :return: una PatchShape

    La división entera es parte del formato. Con patch_size=20, scale=5 y offset=10,
    los vértices caen en [-10, 10].
    """
    scale = patch_size // PATCH_CELLS
    offset = patch_size // 2
    vertices = tuple(
        ((v % PATCH_GRIDS) * scale - offset, (v // PATCH_GRIDS) * scale - offset)
        for v in close_vertices(indices)
    )
    return PatchShape(vertices, flags)


def get_patch_shapes(patch_size: int) -> tuple[PatchShape, ...]:
    """Crear las 16 formas escaladas a un tamaño de parche.

    :param patch_size: ancho de un parche en pixeles antes de escalar la imagen
    :return: una tupla de 16 PatchShape, en el orden de la tabla
    :raises ValueError: si patch_size no es positivo
    """
    if patch_size <= 0:
        msg = f"Patch size must be positive, got {patch_size}"
        raise ValueError(msg)
    return tuple(
        _new_patch_shape(v, f, patch_size)
        for v, f in zip(_PATCH_VERTICES, _PATCH_FLAGS, strict=True)
    )
