from cssprune.stylesheet.parser import parse_css, split_selectors
from cssprune.stylesheet.serializer import serialize

__all__ = ["parse_css", "split_selectors", "serialize"]
