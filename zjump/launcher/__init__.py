"""
Launcher plugin contract, results and plugin management.
"""
