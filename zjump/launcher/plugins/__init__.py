"""
Built-in launcher plugins.
Every module here defining a PluginBase subclass is discovered by PluginManager.
"""
