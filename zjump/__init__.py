"""
zjump - jump to frecent directories from the launcher using zoxide.
"""

__version__ = "1.0.0"
