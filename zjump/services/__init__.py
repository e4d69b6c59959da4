"""
Desktop services backing the plugin API.
"""
