__version__ = "0.3.0"
__is_release__ = False
