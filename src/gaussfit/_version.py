__version__ = '0.1.0'

version_info = tuple(int(v) for v in __version__.split('.'))
