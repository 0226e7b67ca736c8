from cssprune.dom.links import extract_stylesheets
from cssprune.dom.snapshot import UNMATCHABLE_PSEUDOS, DomSnapshot, SoupSnapshot

__all__ = ["DomSnapshot", "SoupSnapshot", "UNMATCHABLE_PSEUDOS", "extract_stylesheets"]
