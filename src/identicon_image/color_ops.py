"""Distancia entre colores y colores complementarios.

El color de relleno se decide por el código. Si queda demasiado cerca del fondo, el
parche sería invisible, así que cada parche recibe un contorno en el color
complementario del relleno.

:created: 2026-10-19
"""

from basic_colormath import get_euclidean, hex_to_rgb

from identicon_image.globs import STROKE_DISTANCE
from identicon_image.type_hints import RGB, ColorArg


def to_rgb(color: ColorArg) -> RGB:
    """Convertir un color a una tupla RGB de enteros.

    :param color: una tupla RGB o una cadena hexadecimal con o sin el signo "#"
    :return: una tupla de tres enteros en [0, 255]
    :raises ValueError: si el color no tiene tres canales en [0, 255]
    """
    if isinstance(color, str):
        color = hex_to_rgb("#" + color.lstrip("#"))
    channels = tuple(int(c) for c in color)
    if len(channels) != 3 or not all(0 <= c <= 0xFF for c in channels):
        msg = f"Expected three 8-bit channels, got {color!r}"
        raise ValueError(msg)
    red, green, blue = channels
    return red, green, blue


def get_color_distance(color_a: RGB, color_b: RGB) -> float:
    """Devolver la distancia euclidiana entre dos colores en el espacio RGB.

    :param color_a: una tupla RGB
    :param color_b: una tupla RGB
    :return: un valor en [0, ~441.67]
    """
    return get_euclidean(color_a, color_b)


def get_complementary_color(color: RGB) -> RGB:
    """Devolver el complemento bit a bit de cada canal."""
    red, green, blue = (0xFF ^ c for c in color)
    return red, green, blue


def get_stroke_color(fill_color: RGB, background: RGB) -> RGB | None:
    """Elegir un color de contorno si el relleno no contrasta con el fondo.

    :param fill_color: el color de relleno decodificado del código
    :param background: el color de fondo de la configuración
    :return: el complementario del relleno, o None si no se necesita contorno
    """
    if get_color_distance(fill_color, background) < STROKE_DISTANCE:
        return get_complementary_color(fill_color)
    return None
