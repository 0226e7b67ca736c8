from cssprune.render.renderer import PageRenderer, RenderedPage, classify_diagnostics

__all__ = ["PageRenderer", "RenderedPage", "classify_diagnostics"]
