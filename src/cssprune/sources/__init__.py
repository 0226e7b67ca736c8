from cssprune.sources.loader import is_remote, load_source, load_sources, local_path

__all__ = ["is_remote", "local_path", "load_source", "load_sources"]
