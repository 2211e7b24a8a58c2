"""Type hints compartidos por los módulos del proyecto.

:created: 2026-10-19
"""

from typing import TypeAlias

# 8-bit channels, 0-255
RGB: TypeAlias = tuple[int, int, int]

# an RGB tuple or a hex string with or without the "#"
ColorArg: TypeAlias = RGB | tuple[float, float, float] | str
