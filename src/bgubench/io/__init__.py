"""Image file I/O for bgubench buffers."""

from bgubench.io.images import convert_and_save_image, load_and_convert_image


__all__ = ["convert_and_save_image", "load_and_convert_image"]
